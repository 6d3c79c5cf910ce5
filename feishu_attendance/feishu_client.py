"""HTTP client for interacting with the Feishu Open Platform API."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

import httpx

from .config import FEISHU_API_BASE


class FeishuApiError(RuntimeError):
    """Raised when Feishu returns a non-zero ``code``."""

    def __init__(self, method: str, code: Any, message: str) -> None:
        super().__init__(f"Feishu API error for {method}: [{code}] {message}")
        self.method = method
        self.code = code
        self.message = message


class FeishuClient:
    """Async wrapper around the handful of Feishu endpoints the bot relies on."""

    def __init__(
        self,
        app_id: str,
        app_secret: str,
        *,
        base_url: str = FEISHU_API_BASE,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._app_id = app_id
        self._app_secret = app_secret
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + "/",
            headers={"Content-Type": "application/json; charset=utf-8"},
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        token: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        headers = {"Authorization": f"Bearer {token}"} if token else None
        response = await self._client.request(
            method, path, params=params, json=payload, headers=headers
        )
        response.raise_for_status()
        try:
            data = response.json()
        except ValueError as exc:
            raise FeishuApiError(path, None, "invalid response body") from exc
        if not isinstance(data, dict):
            raise FeishuApiError(path, None, "invalid response body")
        if data.get("code", 0) != 0:
            raise FeishuApiError(path, data.get("code"), data.get("msg", "unknown_error"))
        return data

    async def get_tenant_access_token(self) -> str:
        path = "auth/v3/tenant_access_token/internal"
        data = await self._request(
            "POST",
            path,
            payload={"app_id": self._app_id, "app_secret": self._app_secret},
        )
        token = data.get("tenant_access_token")
        if not token:
            raise FeishuApiError(path, data.get("code"), "missing tenant_access_token")
        return token

    async def get_user_name(self, user_id: str, token: str) -> Optional[str]:
        data = await self._request(
            "GET",
            f"contact/v3/users/{user_id}",
            token=token,
            params={"user_id_type": "user_id"},
        )
        user = (data.get("data") or {}).get("user") or {}
        return user.get("name")

    async def add_bitable_record(
        self,
        app_token: str,
        table_id: str,
        fields: Dict[str, Any],
        token: str,
    ) -> Dict[str, Any]:
        """Append a single row to a Bitable table and return the response data."""

        data = await self._request(
            "POST",
            f"bitable/v1/apps/{app_token}/tables/{table_id}/records",
            token=token,
            payload={"records": [{"fields": fields}]},
        )
        return data.get("data") or {}

    async def send_text_message(self, receive_id: str, text: str, token: str) -> Dict[str, Any]:
        data = await self._request(
            "POST",
            "im/v1/messages",
            token=token,
            params={"receive_id_type": "user_id"},
            payload={
                "receive_id": receive_id,
                "msg_type": "text",
                "content": json.dumps({"text": text}, ensure_ascii=False),
            },
        )
        return data.get("data") or {}


__all__ = ["FeishuClient", "FeishuApiError"]
