"""Application settings and validation."""

import os
from pathlib import Path

BASE = Path(__file__).resolve().parent.parent
DEFAULT_DB_URL = f"sqlite+aiosqlite:///{BASE / 'roi.db'}"


def _split_origins(raw: str) -> list[str]:
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings:
    ENV: str
    DATABASE_URL: str
    LOG_LEVEL: str
    SQL_ECHO: bool
    READ_CORS_ORIGINS: list[str]
    WRITE_CORS_ORIGINS: list[str]
    SEED_ON_STARTUP: bool

    def __init__(self):
        self.ENV = os.getenv("ENV", "dev").lower()
        self.DATABASE_URL = os.getenv("DATABASE_URL", DEFAULT_DB_URL).strip()
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"
        self.READ_CORS_ORIGINS = _split_origins(os.getenv("READ_CORS_ORIGINS", "*"))
        self.WRITE_CORS_ORIGINS = _split_origins(os.getenv("WRITE_CORS_ORIGINS", "*"))
        self.SEED_ON_STARTUP = os.getenv("SEED_ON_STARTUP", "true").lower() == "true"
        self._validate()

    @property
    def docs_enabled(self) -> bool:
        return self.ENV == "dev"

    def _validate(self):
        if not self.DATABASE_URL:
            raise RuntimeError("DATABASE_URL must not be empty")
        if not self.READ_CORS_ORIGINS or not self.WRITE_CORS_ORIGINS:
            raise RuntimeError("READ_CORS_ORIGINS and WRITE_CORS_ORIGINS need at least one origin")


settings = Settings()
