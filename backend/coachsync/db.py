from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from .settings import get_settings

settings = get_settings()

# Define the base class that all models should inherit from
class Base(DeclarativeBase):
    pass

def make_engine(url: str) -> AsyncEngine:
    return create_async_engine(url, pool_pre_ping=True)

def make_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=bind, autoflush=False, expire_on_commit=False)

async def create_tables(bind: AsyncEngine) -> None:
    from coachsync import models  # noqa: F401  # registers tables on Base.metadata
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

# Create the SQLAlchemy engine
engine = make_engine(settings.DATABASE_URL)

# Session factory
SessionLocal = make_session_factory(engine)

# Dependency for FastAPI routes
async def get_db():
    async with SessionLocal() as db:
        yield db
