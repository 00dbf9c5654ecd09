# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import re
import uuid
from contextvars import ContextVar
from typing import Optional


REQUEST_ID_HEADER = "X-Request-Id"

# 只接受上游传入的安全字符，避免日志注入
_VALID_REQUEST_ID_RE = re.compile(r"[A-Za-z0-9._:-]{1,128}")

_request_id_ctx: ContextVar[str] = ContextVar("request_id", default="-")


def new_request_id() -> str:
    return uuid.uuid4().hex


def resolve_request_id(incoming: Optional[str]) -> str:
    """沿用上游（CDN / 负载均衡）传入的 request id，不合法则新生成"""
    if incoming and _VALID_REQUEST_ID_RE.fullmatch(incoming):
        return incoming
    return new_request_id()


def set_request_id(request_id: str) -> None:
    _request_id_ctx.set(request_id or "-")


def get_request_id() -> str:
    return _request_id_ctx.get() or "-"
