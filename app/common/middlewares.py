# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.cdn.surrogate_key import set_default_fastly_surrogate_key
from app.common.request_id import REQUEST_ID_HEADER, resolve_request_id, set_request_id


class RequestIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        set_request_id(request_id)
        request.state.request_id = request_id
        response: Response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class SurrogateKeyMiddleware(BaseHTTPMiddleware):
    """正常响应默认带上 every-deployment 的 Surrogate-Key；出错的响应由 HandleErrorsMiddleware 负责"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response: Response = await call_next(request)
        set_default_fastly_surrogate_key(response)
        return response
