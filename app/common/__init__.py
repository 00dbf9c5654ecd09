# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""通用基础设施（错误/日志/request id/兜底错误处理）

约定：
- 路由和中间件不自己拼错误响应：异常一律抛出，由 HandleErrorsMiddleware 统一决定响应与上报
- request_id 通过 middleware 注入，并写入日志和错误上报，便于线上排障
"""

from __future__ import annotations
