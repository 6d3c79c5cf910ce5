"""Shared pytest fixtures."""

import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from feishu_attendance.config import Settings  # noqa: E402


@pytest.fixture
def settings() -> Settings:
    return Settings(
        app_id="cli_test",
        app_secret="secret",
        bitable_app_token="bascnTest",
        bitable_table_id="tblTest",
    )
