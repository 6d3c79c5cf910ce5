"""Entrypoint for running the bot via `python -m feishu_attendance.main`."""

from __future__ import annotations

import logging
import os

import uvicorn

from .api import create_app
from .config import load_settings


def run() -> None:
    log_level = os.getenv("LOG_LEVEL", "info")
    logging.basicConfig(level=log_level.upper(), handlers=[logging.StreamHandler()])

    env_file = os.getenv("ATTENDANCE_BOT_ENV")
    settings = load_settings(env_file)
    app = create_app(settings)
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.port,
        log_level=log_level,
    )


if __name__ == "__main__":  # pragma: no cover
    run()
