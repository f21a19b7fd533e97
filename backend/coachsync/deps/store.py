from fastapi import Request
from coachsync.store import LocalEntityStore

def get_store(request: Request) -> LocalEntityStore:
    """The process-wide store built at startup; shared so its locks serialize writers."""
    return request.app.state.store
