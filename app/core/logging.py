# app/core/logging.py
"""Logging setup: one stream handler on the root logger, text or JSON lines."""
from __future__ import annotations

import json
import logging
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from app.core.config import settings

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

_SENSITIVE_KEYWORDS = ("token", "password", "authorization", "secret")

# atributos padrão do LogRecord que não são "extra"
_RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


def _sanitize(key: str, value: Any) -> Any:
    if any(word in key.lower() for word in _SENSITIVE_KEYWORDS):
        return "[redacted]"
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record.request_id = request_id_var.get() or "-"
        return True


class JSONLogFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key in _RESERVED or key.startswith("_"):
                continue
            payload[key] = _sanitize(key, value)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, separators=(",", ":"))


TEXT_FORMAT = "%(asctime)s %(levelname)-7s [%(request_id)s] %(name)s: %(message)s"


def setup_logging(level: str | None = None, json_logs: bool | None = None) -> None:
    root = logging.getLogger()
    root.handlers.clear()

    handler = logging.StreamHandler()
    handler.addFilter(RequestIdFilter())
    use_json = settings.LOG_JSON if json_logs is None else json_logs
    handler.setFormatter(JSONLogFormatter() if use_json else logging.Formatter(TEXT_FORMAT))

    root.addHandler(handler)
    root.setLevel(level or settings.LOG_LEVEL)
    # uvicorn já registra cada request; o middleware faz isso por nós
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
