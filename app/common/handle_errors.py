# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""兜底错误处理中间件

放在业务中间件之外，接住所有未处理的异常，决定：
- 静态资源路径出错时，把响应改成短缓存，避免 CDN 长期缓存滚动发布期间的 404
- 是否上报到 Failbot
- 客户端最终拿到什么：404 页面 / 裸状态码 / 通用错误页，或者交给框架默认处理
  （重新抛出，由 Starlette 的 ServerErrorMiddleware 兜底）
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, Mapping, Optional, Protocol, Sequence

from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.cdn.cache_control import cache_control_factory
from app.cdn.surrogate_key import SurrogateKey, set_fastly_surrogate_key
from app.common.errors import PageNotFound, error_code, error_status_code
from app.infra.config import Settings, settings as default_settings
from app.services.page_renderer import PageRenderer, get_page_context

logger = logging.getLogger(__name__)

IGNORED_ERROR_CODES = frozenset({
    # 恶意 POST 带来的 CSRF token 错误
    "EBADCSRFTOKEN",
    # 客户端主动断开
    "ECONNRESET",
})


class ErrorReporter(Protocol):
    async def report(self, error: BaseException, metadata: Optional[Mapping[str, Any]] = None) -> Any:
        ...


def should_report_exception(error: BaseException) -> bool:
    return error_code(error) not in IGNORED_ERROR_CODES


def is_static_asset_path(path: str, prefixes: Sequence[str]) -> bool:
    return any(path.startswith(prefix) for prefix in prefixes)


def status_response(status_code: int, headers: Optional[Mapping[str, str]] = None) -> Response:
    """只回状态码：正文是状态短语纯文本，1xx/204/304 不带正文"""
    if status_code < 200 or status_code in (204, 304):
        return Response(status_code=status_code, headers=headers)
    try:
        phrase = HTTPStatus(status_code).phrase
    except ValueError:
        phrase = str(status_code)
    return PlainTextResponse(phrase, status_code=status_code, headers=headers)


class HandleErrorsMiddleware:
    def __init__(
        self,
        app: ASGIApp,
        *,
        renderer: PageRenderer,
        reporter: ErrorReporter,
        settings: Optional[Settings] = None,
    ) -> None:
        self.app = app
        self.renderer = renderer
        self.reporter = reporter
        self.settings = settings if settings is not None else default_settings
        self._static_cache_control = cache_control_factory(
            self.settings.STATIC_ERROR_MAX_AGE_SECONDS,
            is_production=self.settings.is_production,
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers_sent = False
        aborted = False

        async def receive_wrapper() -> Message:
            nonlocal aborted
            message = await receive()
            if message["type"] == "http.disconnect":
                aborted = True
            return message

        async def send_wrapper(message: Message) -> None:
            nonlocal headers_sent
            if message["type"] == "http.response.start":
                headers_sent = True
            await send(message)

        try:
            await self.app(scope, receive_wrapper, send_wrapper)
        except Exception as exc:
            await self.handle_error(
                exc,
                Request(scope, receive),
                send,
                headers_sent=headers_sent,
                aborted=aborted,
            )

    async def handle_error(
        self,
        error: Exception,
        request: Request,
        send: Send,
        *,
        headers_sent: bool = False,
        aborted: bool = False,
    ) -> None:
        """处理完成则正常返回；需要交给框架默认处理时重新抛出"""
        static_asset = is_static_asset_path(request.url.path, self.settings.STATIC_ASSET_PATH_PREFIXES)
        if not static_asset and self.settings.is_test:
            # 测试里 500 不会打印到任何地方，这里补一条
            logger.warning("An error occurred in some middleware handler: %r", error)

        try:
            handled = await self._respond(
                error,
                request,
                send,
                headers_sent=headers_sent,
                aborted=aborted,
                static_asset=static_asset,
            )
        except Exception:
            logger.exception("An error occurred in the error handling middleware!")
            raise

        if not handled:
            raise error

    async def _respond(
        self,
        error: Exception,
        request: Request,
        send: Send,
        *,
        headers_sent: bool,
        aborted: bool,
        static_asset: bool,
    ) -> bool:
        # 响应头已发出或客户端已断开：不再动响应，上报后交给框架
        if headers_sent or aborted:
            await self.report_exception(error, request)
            return False

        context = get_page_context(request)
        # 开发 / 预发环境在页面上展示异常，线上不展示
        if not self.settings.PRODUCTION_APP:
            context["error"] = error

        report_after_response = False
        if isinstance(error, PageNotFound):
            response = self.renderer.render_404(request)
        else:
            status_code = error_status_code(error)
            if status_code is not None:
                # 一般来自 HTTPException / 业务 AppError，直接回状态码
                response = status_response(status_code, headers=getattr(error, "headers", None))
            else:
                if not self.settings.is_test:
                    logger.error("500 error! %s", request.url.path, exc_info=error)
                response = self.renderer.render_error(error, request, request.url.path, status_code=500)
                report_after_response = True

        if static_asset:
            self.mask_static_asset_response(response)

        await response(request.scope, request.receive, send)

        # 先响应用户，再上报
        if report_after_response:
            await self.report_exception(error, request)
        return True

    def mask_static_asset_response(self, response: Response) -> None:
        """静态资源出错：短缓存、去掉 CSRF cookie、Surrogate-Key 恢复默认

        CDN 默认会缓存 404。滚动发布时新实例输出的 html 可能引用了旧实例上还没有的
        /_next/static 资源，被路由到旧实例就是 404，短缓存能让它自己失效。
        """
        self._static_cache_control(response)
        del response.headers["set-cookie"]
        set_fastly_surrogate_key(response, SurrogateKey.DEFAULT)

    async def report_exception(self, error: BaseException, request: Request) -> None:
        if self.settings.is_test or not should_report_exception(error):
            return
        await self.reporter.report(error, {"path": request.url.path})
