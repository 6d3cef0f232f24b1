import os
from dataclasses import dataclass, field
from typing import List

def _default_db_url() -> str:
    return os.getenv("DATABASE_URL") or os.getenv("POSTGRES_URL") or \
        f"postgresql://{os.getenv('POSTGRES_USER','components')}:{os.getenv('POSTGRES_PASSWORD','components')}@{os.getenv('POSTGRES_HOST','localhost')}:{os.getenv('POSTGRES_PORT','5432')}/{os.getenv('POSTGRES_DB','components')}"

def _flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")

@dataclass
class Settings:
    database_url: str
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    expose_errors: bool = True     # attach the underlying cause to 500 bodies
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
        return cls(
            database_url=_default_db_url(),
            cors_origins=origins or ["*"],
            expose_errors=_flag("EXPOSE_ERRORS", True),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
        )
