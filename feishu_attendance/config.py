"""Configuration helpers for the attendance bot."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

FEISHU_API_BASE = "https://open.feishu.cn/open-apis"


@dataclass(slots=True)
class Settings:
    """Runtime configuration values loaded from environment variables."""

    app_id: str
    app_secret: str
    bitable_app_token: str
    bitable_table_id: str
    port: int = 3000
    api_base: str = FEISHU_API_BASE
    timezone: Optional[str] = None
    http_timeout: float = 10.0


def _require(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"{name} must be configured")
    return value


def load_settings(env_file: str | None = None) -> Settings:
    """Load settings from the environment, optionally from a specific file."""

    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    return Settings(
        app_id=_require("APP_ID"),
        app_secret=_require("APP_SECRET"),
        bitable_app_token=_require("BITABLE_APP_TOKEN"),
        bitable_table_id=_require("BITABLE_TABLE_ID"),
        port=int(os.getenv("PORT", "3000")),
        api_base=os.getenv("FEISHU_API_BASE", FEISHU_API_BASE),
        timezone=os.getenv("TIMEZONE") or None,
        http_timeout=float(os.getenv("HTTP_TIMEOUT", "10.0")),
    )


__all__ = ["Settings", "load_settings", "FEISHU_API_BASE"]
