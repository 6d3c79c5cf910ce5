import json
from datetime import datetime

import pytest

from feishu_attendance.models import (
    AttendanceRecord,
    AttendanceStatus,
    InboundMessage,
    PunchType,
)


def _event(text="上班打卡", user_id="u1"):
    return {
        "message_type": "text",
        "sender": {"sender_id": {"user_id": user_id}},
        "message": {"content": json.dumps({"text": text})},
    }


def test_record_fields_match_table_columns():
    moment = datetime(2026, 2, 22, 9, 0)
    record = AttendanceRecord("u1", "张三", PunchType.CHECK_IN, moment, AttendanceStatus.ON_TIME)
    assert record.to_fields() == {
        "员工ID": "u1",
        "员工姓名": "张三",
        "打卡类型": "上班",
        "打卡时间": int(moment.timestamp() * 1000),
        "状态": "正常",
    }


def test_outing_record_includes_reason():
    record = AttendanceRecord(
        "u1",
        "张三",
        PunchType.OUTING,
        datetime(2026, 2, 22, 14, 0),
        AttendanceStatus.ON_TIME,
        outing_reason="拜访客户",
    )
    fields = record.to_fields()
    assert fields["打卡类型"] == "外出"
    assert fields["外出事由"] == "拜访客户"


def test_record_requires_employee_id():
    with pytest.raises(ValueError):
        AttendanceRecord("", "张三", PunchType.CHECK_IN, datetime.now(), AttendanceStatus.ON_TIME)


def test_inbound_message_from_event_trims_text():
    message = InboundMessage.from_event(_event(text="  下班打卡 \n"))
    assert message == InboundMessage(user_id="u1", text="下班打卡")


def test_inbound_message_missing_sender():
    event = _event()
    del event["sender"]
    with pytest.raises(KeyError):
        InboundMessage.from_event(event)


def test_inbound_message_bad_content():
    event = _event()
    event["message"]["content"] = "not json"
    with pytest.raises(ValueError):
        InboundMessage.from_event(event)
