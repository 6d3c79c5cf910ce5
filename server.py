# Deploy: set secrets and run 'uvicorn server:app --host=0.0.0.0 --port=3000'
import logging

from feishu_attendance.api import create_app

logging.basicConfig(level=logging.INFO, handlers=[logging.StreamHandler()])

app = create_app()

__all__ = ["app"]
