from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    ENV: str = "local"
    DATABASE_URL: str = "sqlite+aiosqlite:///./coachsync.db"
    LOG_LEVEL: str = "INFO"

    # Local store
    STORAGE_NAMESPACE: str = "@"
    TRACK_UPDATES: bool = False     # enqueue 'update' instead of 'create' for known ids
    SEED_DEFAULT_DATA: bool = True

    # Auth
    SECRET_KEY: str = "dev-secret-change-me"       # set a strong one in prod
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    # Bootstrap admin, created at startup when both are set; staff sign-ups need an admin token
    ADMIN_EMAIL: str | None = None
    ADMIN_PASSWORD: str | None = None

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

@lru_cache
def get_settings() -> Settings:
    return Settings()
