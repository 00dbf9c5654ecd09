# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import errno
from dataclasses import dataclass
from typing import Any, Optional

from starlette.requests import ClientDisconnect


@dataclass
class AppError(Exception):
    """异常统一：带 code 与 HTTP 状态码"""
    code: str
    message: str
    status_code: int = 400
    detail: Optional[Any] = None

    def __str__(self) -> str:
        return self.message


class CsrfTokenError(AppError):
    def __init__(self, message: str = "invalid csrf token", detail: Any = None) -> None:
        super().__init__(code="EBADCSRFTOKEN", message=message, status_code=403, detail=detail)


class PageNotFound(Exception):
    """页面不存在的信号：由错误中间件渲染 404 页面，而不是直接回状态码"""

    def __init__(self, path: str = "") -> None:
        super().__init__(f"page not found: {path}" if path else "page not found")
        self.path = path


def error_code(exc: BaseException) -> Optional[str]:
    """取异常的错误码（如 EBADCSRFTOKEN / ECONNRESET）"""
    code = getattr(exc, "code", None)
    if isinstance(code, str) and code:
        return code

    # 客户端断开
    if isinstance(exc, (ClientDisconnect, ConnectionResetError)):
        return "ECONNRESET"
    if isinstance(exc, OSError) and exc.errno:
        return errno.errorcode.get(exc.errno)
    return None


def error_status_code(exc: BaseException) -> Optional[int]:
    """取异常携带的 HTTP 状态码：优先 status_code，其次 status；非法值视为没有"""
    for attr in ("status_code", "status"):
        value = getattr(exc, attr, None)
        if isinstance(value, bool) or not isinstance(value, int):
            continue
        if 100 <= value <= 599:
            return value
    return None
