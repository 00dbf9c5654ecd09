# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from starlette.responses import HTMLResponse

from app.api.deps import get_page_renderer, get_page_usecase
from app.application.pages.usecase import PageUsecase
from app.services.page_renderer import PageRenderer


router = APIRouter(tags=["pages"])


@router.get("/healthz")
def health_check() -> dict:
    return {"status": "ok"}


@router.get("/{path:path}", response_class=HTMLResponse)
def get_page(
    path: str,
    request: Request,
    uc: PageUsecase = Depends(get_page_usecase),
    renderer: PageRenderer = Depends(get_page_renderer),
):
    # 页面不存在时抛 PageNotFound，由 HandleErrorsMiddleware 渲染 404
    page = uc.get_page(path)
    return renderer.render_page(request, page)
