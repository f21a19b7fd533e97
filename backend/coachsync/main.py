# coachsync/main.py
import os
import time
import logging
import uuid
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from coachsync.auth import AuthProvider
from coachsync.db import SessionLocal, create_tables, engine
from coachsync.errors import PersistenceWriteError
from coachsync.routers.auth import router as auth_router
from coachsync.routers.clients import router as clients_router
from coachsync.routers.exercises import router as exercises_router
from coachsync.routers.plans import router as plans_router
from coachsync.routers.sessions import router as sessions_router
from coachsync.routers.sync import router as sync_router
from coachsync.routers.templates import router as templates_router
from coachsync.seed import initialize_default_data
from coachsync.settings import get_settings
from coachsync.store import LocalEntityStore

log = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logging.getLogger("coachsync").setLevel(settings.LOG_LEVEL)
    await create_tables(engine)
    app.state.store = LocalEntityStore(
        SessionLocal,
        namespace=settings.STORAGE_NAMESPACE,
        track_updates=settings.TRACK_UPDATES,
    )
    if settings.SEED_DEFAULT_DATA:
        await initialize_default_data(app.state.store)
    if settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD:
        async with SessionLocal() as db:
            await AuthProvider(db).ensure_admin(settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)
    yield
    await engine.dispose()


app = FastAPI(
    title="CoachSync Local Store API",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "auth", "description": "Sign-up, sign-in & sign-out"},
        {"name": "templates", "description": "Reusable workout templates"},
        {"name": "plans", "description": "Dated weekday schedules per client"},
        {"name": "sessions", "description": "Performed or scheduled workouts"},
        {"name": "clients", "description": "Clients and their schedules"},
        {"name": "exercises", "description": "Exercise catalog"},
        {"name": "sync", "description": "Pending-sync ledger"},
    ],
)


# CORS (relax for local dev; tighten origins in prod via env)
ALLOW_ORIGINS = os.getenv("ALLOW_ORIGINS", "*").split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def add_request_id_and_log(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-ID"] = req_id
    log.info("rid=%s %s %s -> %s in %.1fms",
             req_id, request.method, request.url.path, response.status_code, duration_ms)
    return response

@app.exception_handler(PersistenceWriteError)
async def persistence_write_failed(request: Request, exc: PersistenceWriteError):
    # The mutation did not take effect; the UI should tell the user
    log.error("write failed for %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "could not save data"})

@app.get("/")
def root():
    return {"ok": True, "name": "CoachSync Local Store API"}

@app.get("/ping")
def ping():
    return {"pong": True}

@app.get("/healthz")
async def healthz():
    # Quick DB sanity check
    try:
        async with SessionLocal() as db:
            await db.execute(text("SELECT 1"))
        return {"status": "ok"}
    except Exception as e:
        return {"status": "degraded", "error": str(e)}

@app.get("/version")
def version():
    return {"version": os.getenv("API_VERSION", "dev")}

# Routers
app.include_router(auth_router)
app.include_router(templates_router)
app.include_router(plans_router)
app.include_router(sessions_router)
app.include_router(clients_router)
app.include_router(exercises_router)
app.include_router(sync_router)
