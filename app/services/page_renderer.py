# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""服务端页面渲染（Jinja2）

- render_page: 普通文档页
- render_404: 页面不存在
- render_error: 通用错误页；仅当页面上下文带有 error 时展示异常详情
"""

from __future__ import annotations

import traceback
from pathlib import Path
from typing import Any, Dict, Union

from fastapi.templating import Jinja2Templates
from starlette.requests import Request
from starlette.responses import HTMLResponse

from app.common.request_id import get_request_id
from app.domain import models


def get_page_context(request: Request) -> Dict[str, Any]:
    """每个请求一份的页面上下文（request.state.context），不存在时创建"""
    context = getattr(request.state, "context", None)
    if context is None:
        context = {}
        request.state.context = context
    return context


class PageRenderer:
    def __init__(self, templates_dir: Union[str, Path], *, site_name: str = "Docs") -> None:
        self._templates = Jinja2Templates(directory=str(templates_dir))
        self._site_name = site_name

    def _context(self, request: Request, **extra: Any) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "site_name": self._site_name,
            "request_id": get_request_id(),
        }
        data.update(get_page_context(request))
        data.update(extra)
        return data

    def render_page(self, request: Request, page: models.Page) -> HTMLResponse:
        return self._templates.TemplateResponse(
            request,
            "page.html",
            self._context(request, page=page, title=page.title),
        )

    def render_404(self, request: Request) -> HTMLResponse:
        return self._templates.TemplateResponse(
            request,
            "404.html",
            self._context(request, title="Page not found", path=request.url.path),
            status_code=404,
        )

    def render_error(
        self,
        error: BaseException,
        request: Request,
        path: str,
        status_code: int = 500,
    ) -> HTMLResponse:
        extra: Dict[str, Any] = {"title": "Oops", "path": path, "status_code": status_code}

        # 生产环境不会把 error 放进上下文，这里也就不展示堆栈
        if get_page_context(request).get("error") is not None:
            extra["error_detail"] = "".join(traceback.format_exception(type(error), error, error.__traceback__))

        return self._templates.TemplateResponse(
            request,
            "500.html",
            self._context(request, **extra),
            status_code=status_code,
        )
