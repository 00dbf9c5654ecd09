# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


_APP_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """全局配置，从 .env / 环境变量读取"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # 运行环境
    ENV: str = Field(
        "development",
        description="运行环境: development / test / staging / production",
        validation_alias=AliasChoices("ENV", "APP_ENV", "env"),
    )
    PRODUCTION_APP: bool = Field(
        False,
        description="是否为线上正式站点；为 true 时错误页不展示异常详情",
        validation_alias=AliasChoices("PRODUCTION_APP", "HEROKU_PRODUCTION_APP", "production_app"),
    )
    LOG_LEVEL: str = Field(
        "INFO",
        description="日志级别",
        validation_alias=AliasChoices("LOG_LEVEL", "log_level"),
    )

    # 站点
    SITE_NAME: str = Field(
        "Docs",
        description="站点名称，渲染到页面标题",
        validation_alias=AliasChoices("SITE_NAME", "site_name"),
    )
    TEMPLATES_DIR: str = Field(
        str(_APP_ROOT / "templates"),
        description="Jinja2 模板目录",
        validation_alias=AliasChoices("TEMPLATES_DIR", "templates_dir"),
    )
    CONTENT_DIR: str = Field(
        str(_APP_ROOT / "content"),
        description="文档页面目录（html 片段）",
        validation_alias=AliasChoices("CONTENT_DIR", "content_dir"),
    )
    STATIC_DIR: str = Field(
        str(_APP_ROOT / "static"),
        description="静态资源目录，挂载到 /assets",
        validation_alias=AliasChoices("STATIC_DIR", "static_dir"),
    )

    # 静态资源出错时的 CDN 缓存策略
    STATIC_ASSET_PATH_PREFIXES: List[str] = Field(
        ["/assets", "/_next/static"],
        description="静态资源路径前缀（JSON 数组）",
        validation_alias=AliasChoices("STATIC_ASSET_PATH_PREFIXES", "static_asset_path_prefixes"),
    )
    STATIC_ERROR_MAX_AGE_SECONDS: int = Field(
        60,
        description="静态资源错误响应的 CDN 缓存时间（秒）",
        validation_alias=AliasChoices("STATIC_ERROR_MAX_AGE_SECONDS", "static_error_max_age_seconds"),
    )

    # 错误上报（Failbot -> Haystack）
    HAYSTACK_URL: Optional[str] = Field(
        None,
        description="错误上报地址（未配置时不上报）",
        validation_alias=AliasChoices("HAYSTACK_URL", "haystack_url"),
    )
    FAILBOT_APP_NAME: str = Field(
        "docs",
        description="上报时的应用名",
        validation_alias=AliasChoices("FAILBOT_APP_NAME", "failbot_app_name"),
    )
    FAILBOT_TIMEOUT_SECONDS: float = Field(
        5.0,
        description="上报请求超时（秒）",
        validation_alias=AliasChoices("FAILBOT_TIMEOUT_SECONDS", "failbot_timeout_seconds"),
    )
    FAILBOT_RETRIES: int = Field(
        3,
        description="上报请求连接失败时的重试次数",
        validation_alias=AliasChoices("FAILBOT_RETRIES", "failbot_retries"),
    )

    @property
    def is_test(self) -> bool:
        return self.ENV == "test"

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"


settings = Settings()
