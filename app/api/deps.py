# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from app.application.pages.usecase import PageUsecase
from app.infra.config import settings
from app.infra.failbot import FailBot
from app.services.page_renderer import PageRenderer


_page_uc_singleton = PageUsecase(settings.CONTENT_DIR)
_page_renderer_singleton = PageRenderer(settings.TEMPLATES_DIR, site_name=settings.SITE_NAME)
_failbot_singleton = FailBot.from_settings(settings)


def get_page_usecase() -> PageUsecase:
    return _page_uc_singleton


def get_page_renderer() -> PageRenderer:
    return _page_renderer_singleton


def get_failbot() -> FailBot:
    return _failbot_singleton
