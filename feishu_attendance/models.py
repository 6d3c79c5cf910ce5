"""Dataclasses representing attendance bot domain models."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class PunchType(str, Enum):
    CHECK_IN = "上班"
    CHECK_OUT = "下班"
    OUTING = "外出"


class AttendanceStatus(str, Enum):
    ON_TIME = "正常"
    LATE = "迟到"
    EARLY_LEAVE = "早退"


@dataclass(frozen=True, slots=True)
class AttendanceRecord:
    """A single punch, laid out the way the Bitable table expects it."""

    employee_id: str
    employee_name: str
    punch_type: PunchType
    punched_at: datetime
    status: AttendanceStatus
    outing_reason: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.employee_id:
            raise ValueError("employee_id must not be empty")

    @property
    def timestamp_ms(self) -> int:
        return int(self.punched_at.timestamp() * 1000)

    def to_fields(self) -> Dict[str, Any]:
        fields: Dict[str, Any] = {
            "员工ID": self.employee_id,
            "员工姓名": self.employee_name,
            "打卡类型": self.punch_type.value,
            "打卡时间": self.timestamp_ms,
            "状态": self.status.value,
        }
        if self.outing_reason is not None:
            fields["外出事由"] = self.outing_reason
        return fields


@dataclass(slots=True)
class InboundMessage:
    user_id: str
    text: str

    @classmethod
    def from_event(cls, event: Dict[str, Any]) -> "InboundMessage":
        """Build a message from an ``event_callback`` event body.

        The message content is itself a JSON-encoded string with a ``text``
        field. Missing keys raise ``KeyError``; bad content raises ``ValueError``.
        """

        user_id = event["sender"]["sender_id"]["user_id"]
        content = json.loads(event["message"]["content"])
        return cls(user_id=user_id, text=str(content.get("text", "")).strip())


__all__ = ["PunchType", "AttendanceStatus", "AttendanceRecord", "InboundMessage"]
