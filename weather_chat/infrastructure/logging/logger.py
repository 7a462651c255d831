import json
import logging
from pathlib import Path
from datetime import datetime, timezone
from typing import Any, Dict

from weather_chat.config.settings import settings

REDACT_LIMIT = 64
# 可能包含用户输入或上游响应原文的字段
TRUNCATED_FIELDS = ("description", "error")


class JsonFormatter(logging.Formatter):
    """每条日志输出一行 JSON；record.extra 中的结构化字段平铺到顶层。"""

    def format(self, record: logging.LogRecord) -> str:
        redact = settings.log_redact_content
        msg = record.getMessage()
        if redact:
            msg = (msg or "")[:REDACT_LIMIT]
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "name": record.name,
            "msg": msg,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(_redact(extra) if redact else extra)
        return json.dumps(payload, ensure_ascii=False, default=str)


def _redact(fields: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(fields)
    for key in TRUNCATED_FIELDS:
        value = out.get(key)
        if isinstance(value, str) and len(value) > REDACT_LIMIT:
            out[key] = value[:REDACT_LIMIT] + "…"
    city = out.get("city")
    if isinstance(city, str) and city:
        out["city"] = city[0] + "***"
    return out


def setup_logger() -> logging.Logger:
    logger = logging.getLogger("weather_chat")
    logger.setLevel(logging.INFO)
    if logger.handlers:
        return logger
    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    fh = logging.FileHandler(log_dir / "weather_chat.log", encoding="utf-8")
    fh.setLevel(logging.INFO)
    fh.setFormatter(JsonFormatter())
    logger.addHandler(fh)
    return logger


logger = setup_logger()
