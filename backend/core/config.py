import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import List


def _default_seed_dir() -> str:
    """Bundled fixtures shipped next to the seed package."""
    return str(Path(__file__).resolve().parent.parent / "seed" / "data")


def _default_cors_origins() -> List[str]:
    return [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]


def _split_origins(raw: str) -> List[str]:
    return [o.strip() for o in raw.split(",") if o.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment variables with safe defaults."""

    app_name: str = "Mentor Assignment Service"
    env: str = "dev"
    database_url: str = "sqlite+aiosqlite:///./mentors.db"
    log_level: str = "INFO"
    seed_dir: str = ""  # set from from_env
    cors_origins: List[str] = field(default_factory=_default_cors_origins)

    @classmethod
    def from_env(cls) -> "Settings":
        """Create Settings from environment variables."""
        origins_raw = os.getenv("CORS_ORIGINS")
        return cls(
            app_name=os.getenv("APP_NAME", cls.app_name),
            env=os.getenv("ENV", cls.env),
            database_url=os.getenv("DATABASE_URL") or cls.database_url,
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
            seed_dir=os.getenv("SEED_DIR") or _default_seed_dir(),
            cors_origins=_split_origins(origins_raw) if origins_raw else _default_cors_origins(),
        )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings.from_env()
