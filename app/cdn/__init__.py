# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""CDN（Fastly）相关的响应头工具

- cache_control: 按 max-age 生成 Cache-Control 设置函数
- surrogate_key: Surrogate-Key 常量与设置，用于按 key 批量清缓存
"""

from __future__ import annotations

from app.cdn.cache_control import cache_control_factory
from app.cdn.surrogate_key import SurrogateKey, set_fastly_surrogate_key

__all__ = ["cache_control_factory", "SurrogateKey", "set_fastly_surrogate_key"]
