"""Runtime configuration read from environment variables."""

import os
from dataclasses import dataclass, field

DEFAULT_MONGODB_URI = "mongodb://localhost:27017"
DEFAULT_API_URL = "http://localhost:5000"


def _split_origins(value: str) -> tuple[str, ...]:
    """Parse a comma-separated origin list."""
    return tuple(origin.strip() for origin in value.split(",") if origin.strip())


@dataclass(frozen=True)
class Settings:
    """Service settings, built once at startup and passed to the app factory."""

    mongodb_uri: str = DEFAULT_MONGODB_URI
    db_name: str = "todoapp"
    collection_name: str = "tasks"
    mongodb_timeout_ms: int = 5000
    host: str = "0.0.0.0"
    port: int = 5000
    cors_origins: tuple[str, ...] = field(default=("http://localhost:3000",))
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment, falling back to defaults."""
        return cls(
            mongodb_uri=os.environ.get("MONGODB_URI", DEFAULT_MONGODB_URI),
            db_name=os.environ.get("TODOAPP_DB_NAME", "todoapp"),
            collection_name=os.environ.get("TODOAPP_COLLECTION", "tasks"),
            mongodb_timeout_ms=int(os.environ.get("MONGODB_TIMEOUT_MS", "5000")),
            host=os.environ.get("HOST", "0.0.0.0"),
            port=int(os.environ.get("PORT", "5000")),
            cors_origins=_split_origins(
                os.environ.get("TODOAPP_CORS_ORIGINS", "http://localhost:3000")
            ),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )


def api_url_from_env() -> str:
    """Base URL the client front end talks to."""
    return os.environ.get("TODOAPP_API_URL", DEFAULT_API_URL)
