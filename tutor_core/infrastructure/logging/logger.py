import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from uuid import uuid4

from tutor_core.config.settings import settings


def new_trace_id() -> str:
    """每次解析一条回复分配一个 trace_id，串起各层级的日志。"""
    return f"tr-{uuid4().hex}"


class JsonFormatter(logging.Formatter):
    """一行一个 JSON；没有带 trace_id 的记录（如服务启动日志）输出 null。"""

    def format(self, record: logging.LogRecord) -> str:
        msg = record.getMessage()
        if settings.log_redact_content:
            msg = (msg or "")[:64]
        payload = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "trace_id": None,
            "msg": msg,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logger() -> logging.Logger:
    logger = logging.getLogger("tutor_core")
    logger.setLevel(logging.INFO)
    if logger.handlers:
        return logger
    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    fh = logging.FileHandler(log_dir / "tutor.log", encoding="utf-8")
    fh.setLevel(logging.INFO)
    fh.setFormatter(JsonFormatter())
    logger.addHandler(fh)
    return logger


logger = setup_logger()
