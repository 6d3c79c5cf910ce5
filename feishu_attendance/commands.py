"""Parse chat commands and turn them into attendance records and replies."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, tzinfo
from typing import Optional, Union

from .models import AttendanceRecord, AttendanceStatus, PunchType

CHECK_IN_KEYWORD = "上班打卡"
CHECK_OUT_KEYWORD = "下班打卡"
OUTING_PREFIX = "外出打卡"
DEFAULT_OUTING_REASON = "外出办公"

LATE_AFTER = time(9, 30)
EARLY_LEAVE_BEFORE = time(18, 0)

HELP_TEMPLATE = """👋 你好 {name}！欢迎使用考勤机器人

请使用以下口令进行操作：

🟢 基础打卡
• 上班打卡 - 记录上班时间
• 下班打卡 - 记录下班时间
• 外出打卡 [事由] - 记录外出，如：外出打卡 拜访客户

📊 查询功能
• 我的考勤 - 查看个人今日考勤
• 今日考勤 - 管理员查看全员考勤

💡 提示：外出事由可选，默认"外出办公\""""


@dataclass(frozen=True, slots=True)
class CheckIn:
    pass


@dataclass(frozen=True, slots=True)
class CheckOut:
    pass


@dataclass(frozen=True, slots=True)
class Outing:
    reason: str = DEFAULT_OUTING_REASON


@dataclass(frozen=True, slots=True)
class Unknown:
    pass


Command = Union[CheckIn, CheckOut, Outing, Unknown]


@dataclass(frozen=True, slots=True)
class Interpretation:
    reply: str
    record: Optional[AttendanceRecord] = None


def _now(tz: Optional[tzinfo] = None) -> datetime:
    """Current local time; patched in tests."""
    return datetime.now(tz) if tz else datetime.now()


def parse_command(text: str) -> Command:
    command = text.strip()
    if command == CHECK_IN_KEYWORD:
        return CheckIn()
    if command == CHECK_OUT_KEYWORD:
        return CheckOut()
    if command.startswith(OUTING_PREFIX):
        reason = command[len(OUTING_PREFIX):].strip()
        return Outing(reason or DEFAULT_OUTING_REASON)
    return Unknown()


def _on_date(moment: datetime, time_of_day: time) -> datetime:
    # thresholds are always anchored to the date being evaluated
    return moment.replace(
        hour=time_of_day.hour,
        minute=time_of_day.minute,
        second=0,
        microsecond=0,
    )


def compute_status(punch_type: PunchType, moment: datetime) -> AttendanceStatus:
    """Return the attendance status of a punch made at ``moment``.

    A check-in strictly after 09:30 is late, a check-out strictly before 18:00
    is an early leave. Punches exactly on a threshold are on time. Outings are
    always on time.
    """

    if punch_type is PunchType.CHECK_IN and moment > _on_date(moment, LATE_AFTER):
        return AttendanceStatus.LATE
    if punch_type is PunchType.CHECK_OUT and moment < _on_date(moment, EARLY_LEAVE_BEFORE):
        return AttendanceStatus.EARLY_LEAVE
    return AttendanceStatus.ON_TIME


def help_message(user_name: str) -> str:
    return HELP_TEMPLATE.format(name=user_name)


def _clock(moment: datetime) -> str:
    return moment.strftime("%H:%M:%S")


def interpret(
    text: str,
    user_id: str,
    user_name: str,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> Interpretation:
    """Interpret ``text`` sent by ``user_id`` and return the reply to send back.

    Recognised punch commands also carry the record to persist; anything else
    yields the help message and no record.
    """

    command = parse_command(text)
    if isinstance(command, Unknown):
        return Interpretation(reply=help_message(user_name))

    moment = now or _now(tz)
    if isinstance(command, CheckIn):
        status = compute_status(PunchType.CHECK_IN, moment)
        record = AttendanceRecord(user_id, user_name, PunchType.CHECK_IN, moment, status)
        reply = f"✅ {user_name} 上班打卡成功！\n时间：{_clock(moment)}\n状态：{status.value}"
    elif isinstance(command, CheckOut):
        status = compute_status(PunchType.CHECK_OUT, moment)
        record = AttendanceRecord(user_id, user_name, PunchType.CHECK_OUT, moment, status)
        reply = f"✅ {user_name} 下班打卡成功！\n时间：{_clock(moment)}\n状态：{status.value}"
    else:
        record = AttendanceRecord(
            user_id,
            user_name,
            PunchType.OUTING,
            moment,
            AttendanceStatus.ON_TIME,
            outing_reason=command.reason,
        )
        reply = f"✅ {user_name} 外出登记成功！\n时间：{_clock(moment)}\n事由：{command.reason}"
    return Interpretation(reply=reply, record=record)


__all__ = [
    "CheckIn",
    "CheckOut",
    "Outing",
    "Unknown",
    "Command",
    "Interpretation",
    "parse_command",
    "compute_status",
    "help_message",
    "interpret",
    "DEFAULT_OUTING_REASON",
]
