# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import os

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import pages as pages_api
from app.api.deps import get_failbot, get_page_renderer
from app.common.exception_handlers import propagate_http_exception
from app.common.handle_errors import HandleErrorsMiddleware
from app.common.logging import setup_logging
from app.common.middlewares import RequestIdMiddleware, SurrogateKeyMiddleware
from app.infra.config import Settings, settings as default_settings


def create_app(settings: Settings = default_settings) -> FastAPI:
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.SITE_NAME,
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    # 静态资源；缺失文件抛 404 HTTPException，由 HandleErrorsMiddleware 做短缓存处理
    if os.path.isdir(settings.STATIC_DIR):
        app.mount("/assets", StaticFiles(directory=settings.STATIC_DIR), name="assets")

    # ---------- middlewares / handlers ----------
    # add_middleware 后加的在外层：RequestId -> HandleErrors -> SurrogateKey -> 路由

    app.add_middleware(SurrogateKeyMiddleware)
    app.add_middleware(
        HandleErrorsMiddleware,
        renderer=get_page_renderer(),
        reporter=get_failbot(),
        settings=settings,
    )
    app.add_middleware(RequestIdMiddleware)

    app.add_exception_handler(StarletteHTTPException, propagate_http_exception)

    # 文档页面（包含 catch-all 路由，必须最后注册）
    app.include_router(pages_api.router)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=default_settings.ENV == "development",
        access_log=not default_settings.is_production,
    )
