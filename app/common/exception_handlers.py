# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import logging

from fastapi import Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

logger = logging.getLogger(__name__)


async def propagate_http_exception(request: Request, exc: StarletteHTTPException) -> Response:
    """不在路由层生成 JSON 响应，把 HTTPException 交给 HandleErrorsMiddleware 统一处理"""
    logger.debug("HTTP %s on %s, handing over to HandleErrorsMiddleware", exc.status_code, request.url.path)
    raise exc
