# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from enum import Enum
from typing import Union

from starlette.responses import Response


SURROGATE_KEY_HEADER = "Surrogate-Key"


class SurrogateKey(str, Enum):
    # 每次部署后整体清掉
    DEFAULT = "every-deployment"
    # 只在手动清缓存时失效
    MANUAL = "manual-purge"


def set_fastly_surrogate_key(response: Response, key: Union[SurrogateKey, str]) -> None:
    value = key.value if isinstance(key, SurrogateKey) else key
    response.headers[SURROGATE_KEY_HEADER] = value


def set_default_fastly_surrogate_key(response: Response) -> None:
    """没有 handler 显式设置时，才补默认 key"""
    if SURROGATE_KEY_HEADER not in response.headers:
        set_fastly_surrogate_key(response, SurrogateKey.DEFAULT)
