class PersistenceError(RuntimeError):
    """The storage medium failed for ``key``."""

    def __init__(self, key: str, message: str):
        super().__init__(f"{message} (key={key})")
        self.key = key


class PersistenceWriteError(PersistenceError):
    """A write or delete was rejected; callers must not assume it took effect."""
