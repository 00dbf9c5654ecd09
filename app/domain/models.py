# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Page:
    """一篇文档页面：html 为正文片段，由 page.html 布局包裹"""

    path: str
    title: str
    html: str
