"""Core orchestration logic for the attendance bot."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo

import httpx

from .commands import Interpretation, interpret
from .config import Settings
from .feishu_client import FeishuApiError, FeishuClient
from .models import AttendanceRecord, InboundMessage

logger = logging.getLogger(__name__)

UNKNOWN_USER = "未知用户"
ACK = {"status": "success"}

FeishuCallError = (FeishuApiError, httpx.HTTPError)


class AttendanceBotService:
    """Handles one webhook payload at a time; keeps no state between payloads."""

    def __init__(self, settings: Settings, client: FeishuClient) -> None:
        self.settings = settings
        self.client = client
        self.tz = ZoneInfo(settings.timezone) if settings.timezone else None

    async def handle_payload(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        payload_type = payload.get("type")
        if payload_type == "url_verification":
            return {"challenge": payload.get("challenge")}

        if payload_type == "event_callback":
            event = payload.get("event")
            if not isinstance(event, dict):
                logger.warning("Ignoring event_callback without an event object")
            elif event.get("message_type") == "text":
                try:
                    await self.handle_message_event(event)
                except Exception as exc:  # noqa: BLE001
                    logger.error("Message event handling failed: %s", exc)
            else:
                logger.debug("Ignoring event with message_type=%s", event.get("message_type"))
        else:
            logger.warning("Ignoring payload with type=%s", payload_type)
        return dict(ACK)

    async def handle_message_event(self, event: Dict[str, Any]) -> Optional[Interpretation]:
        try:
            message = InboundMessage.from_event(event)
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Malformed message event: %r", exc)
            return None

        token = await self._fetch_token()
        if token is None:
            return None

        user_name = await self._resolve_user_name(message.user_id, token)
        result = interpret(message.text, message.user_id, user_name, tz=self.tz)
        logger.info("Command %r from %s handled", message.text, message.user_id)

        if result.record is not None:
            await self._write_record(result.record, token)
        await self._reply(message.user_id, result.reply, token)
        return result

    # region Feishu calls
    async def _fetch_token(self) -> Optional[str]:
        try:
            return await self.client.get_tenant_access_token()
        except FeishuCallError as exc:
            logger.error("Failed to obtain tenant access token: %s", exc)
            return None

    async def _resolve_user_name(self, user_id: str, token: str) -> str:
        try:
            name = await self.client.get_user_name(user_id, token)
        except FeishuCallError as exc:
            logger.error("Failed to look up user %s: %s", user_id, exc)
            return UNKNOWN_USER
        return name or UNKNOWN_USER

    async def _write_record(self, record: AttendanceRecord, token: str) -> bool:
        try:
            await self.client.add_bitable_record(
                self.settings.bitable_app_token,
                self.settings.bitable_table_id,
                record.to_fields(),
                token,
            )
        except FeishuCallError as exc:
            logger.error(
                "Failed to write %s record for %s: %s",
                record.punch_type.value,
                record.employee_id,
                exc,
            )
            return False
        return True

    async def _reply(self, user_id: str, text: str, token: str) -> bool:
        try:
            await self.client.send_text_message(user_id, text, token)
        except FeishuCallError as exc:
            logger.error("Failed to reply to %s: %s", user_id, exc)
            return False
        return True

    # endregion


__all__ = ["AttendanceBotService", "UNKNOWN_USER"]
