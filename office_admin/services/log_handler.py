"""
Logging setup
Console logging for every module plus an optional HTTP log sink
"""

import json
import logging
from typing import Optional

import requests

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class RemoteLogHandler(logging.Handler):
    """Ships each record as JSON to a REST log sink"""

    def __init__(self, url: str, api_key: Optional[str] = None,
                 service_name: str = "office-admin", timeout: float = 2):
        super().__init__()
        self.url = url
        self.api_key = api_key
        self.service_name = service_name
        self.timeout = timeout

    def emit(self, record):
        try:
            payload = {
                "service_name": self.service_name,
                "log_level": record.levelname,
                "message": self.format(record),
            }
            headers = {"Content-Type": "application/json"}
            if self.api_key:
                headers["apikey"] = self.api_key
                headers["Authorization"] = f"Bearer {self.api_key}"
            requests.post(
                self.url,
                headers=headers,
                data=json.dumps(payload),
                timeout=self.timeout,
            )
        except Exception:
            self.handleError(record)


def configure_logging(settings) -> None:
    """Configure the root logger from settings; safe to call more than once"""
    level = getattr(logging, str(settings.log_level).upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    root = logging.getLogger()
    root.setLevel(level)

    if settings.log_sink_url and not any(isinstance(h, RemoteLogHandler) for h in root.handlers):
        handler = RemoteLogHandler(settings.log_sink_url, settings.log_sink_api_key)
        handler.setLevel(logging.WARNING)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        logging.info(f"🛰️ Remote log sink enabled at {settings.log_sink_url}")
