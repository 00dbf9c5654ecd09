# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from starlette.responses import Response

from app.infra.config import settings

logger = logging.getLogger(__name__)

ONE_HOUR = 60 * 60
ONE_DAY = 24 * ONE_HOUR

CacheControlSetter = Callable[[Response], None]


def build_cache_control(
    max_age: int = ONE_HOUR,
    *,
    public: bool = True,
    immutable: bool = False,
    max_age_zero: bool = False,
) -> str:
    directives: List[str] = []
    if max_age:
        if public:
            directives.append("public")
        directives.append(f"max-age={max_age}")
        if immutable:
            directives.append("immutable")
    else:
        directives.extend(["private", "no-store"])

    # 足够长的缓存才允许 CDN 在回源失败/刷新期间继续返回旧内容
    if max_age >= ONE_HOUR:
        directives.append(f"stale-while-revalidate={ONE_HOUR}")
        directives.append(f"stale-if-error={ONE_DAY}")

    if max_age_zero:
        directives.append("max-age=0")

    return ", ".join(directives)


def cache_control_factory(
    max_age: int = ONE_HOUR,
    *,
    key: str = "cache-control",
    public: bool = True,
    immutable: bool = False,
    max_age_zero: bool = False,
    is_production: Optional[bool] = None,
) -> CacheControlSetter:
    """返回一个给响应设置缓存头的函数，例如 cache_control_factory(60)(response)

    is_production 不传时取全局配置；带 cookie 的响应被缓存只在非生产环境提示
    """
    if is_production is None:
        is_production = settings.is_production
    value = build_cache_control(max_age, public=public, immutable=immutable, max_age_zero=max_age_zero)

    def set_cache_control(response: Response) -> None:
        if max_age and "set-cookie" in response.headers and not is_production:
            logger.warning(
                "Setting a cache-control header (%s) on a response that also sets a cookie",
                value,
            )
        response.headers[key] = value

    return set_cache_control
