"""FastAPI application exposing the Feishu webhook endpoint."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import Body, Depends, FastAPI

from .config import Settings, load_settings
from .feishu_client import FeishuClient
from .service import AttendanceBotService


def create_app(
    settings: Optional[Settings] = None,
    client: Optional[FeishuClient] = None,
) -> FastAPI:
    settings = settings or load_settings()
    feishu_client = client or FeishuClient(
        settings.app_id,
        settings.app_secret,
        base_url=settings.api_base,
        timeout=settings.http_timeout,
    )
    service = AttendanceBotService(settings, feishu_client)

    app = FastAPI(title="Attendance Bot", version="1.0.0")
    app.state.service = service

    @app.on_event("shutdown")
    async def shutdown_event() -> None:  # pragma: no cover - io bound
        await feishu_client.close()

    def get_service() -> AttendanceBotService:
        return service

    @app.get("/api/health")
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok", "message": "Attendance Bot is running"}

    @app.post("/api/attendance")
    async def attendance_webhook(
        payload: Dict[str, Any] = Body(...),
        svc: AttendanceBotService = Depends(get_service),
    ) -> Dict[str, Any]:
        return await svc.handle_payload(payload)

    return app


__all__ = ["create_app"]
