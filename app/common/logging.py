# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import logging
from typing import Sequence, Union

from app.common.request_id import get_request_id

LOG_FORMAT = "%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

# FailBot 每次上报都会让 httpx 打一条 INFO 请求日志
QUIET_LOGGERS = ("httpx", "httpcore")


class RequestIdFilter(logging.Filter):
    """给日志记录带上当前请求的 request id；调用方通过 extra 显式传入的优先"""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        if not getattr(record, "request_id", None):
            record.request_id = get_request_id()
        return True


def setup_logging(
    level: Union[int, str] = logging.INFO,
    *,
    quiet_loggers: Sequence[str] = QUIET_LOGGERS,
) -> None:
    root = logging.getLogger()
    root.setLevel(level.upper() if isinstance(level, str) else level)

    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
        root.addHandler(handler)

    # 已有 handler（uvicorn / pytest）也要能格式化 request_id
    for h in root.handlers:
        if not any(isinstance(f, RequestIdFilter) for f in h.filters):
            h.addFilter(RequestIdFilter())

    for name in quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)
