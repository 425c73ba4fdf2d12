"""
Runtime configuration read from the environment (.env supported)
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()


def _split(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    database_path: str = "office_admin.db"
    log_level: str = "INFO"
    log_sink_url: Optional[str] = None
    log_sink_api_key: Optional[str] = None
    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost:5173"])
    host: str = "0.0.0.0"
    port: int = 4000

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_path=os.getenv("DATABASE_PATH", "office_admin.db"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_sink_url=os.getenv("LOG_SINK_URL") or None,
            log_sink_api_key=os.getenv("LOG_SINK_API_KEY") or None,
            cors_origins=_split(os.getenv("CORS_ORIGINS", "http://localhost:5173")),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "4000")),
        )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings
