# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

"""错误上报客户端

把异常以 JSON 形式 POST 到 Haystack 兼容的收集端。
未配置 HAYSTACK_URL 时不上报；上报本身失败只记 warning，不再向上抛出。
"""

from __future__ import annotations

import logging
import traceback
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

import httpx

from app.common.request_id import get_request_id
from app.infra.config import Settings

logger = logging.getLogger(__name__)


class FailBot:
    def __init__(
        self,
        haystack_url: Optional[str],
        *,
        app_name: str = "docs",
        env: str = "development",
        timeout: float = 5.0,
        retries: int = 3,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._haystack_url = haystack_url
        self._app_name = app_name
        self._env = env
        self._timeout = timeout
        self._retries = retries
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "FailBot":
        return cls(
            settings.HAYSTACK_URL,
            app_name=settings.FAILBOT_APP_NAME,
            env=settings.ENV,
            timeout=settings.FAILBOT_TIMEOUT_SECONDS,
            retries=settings.FAILBOT_RETRIES,
        )

    @property
    def enabled(self) -> bool:
        return bool(self._haystack_url)

    def build_payload(self, error: BaseException, metadata: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "app": self._app_name,
            "class": type(error).__name__,
            "message": str(error),
            "backtrace": "".join(traceback.format_exception(type(error), error, error.__traceback__)),
            "created_at": datetime.now(timezone.utc).isoformat(),
            "env": self._env,
            "request_id": get_request_id(),
        }
        if metadata:
            payload.update(metadata)
        return payload

    async def report(
        self,
        error: BaseException,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> Optional[httpx.Response]:
        if not self.enabled:
            logger.debug("HAYSTACK_URL not configured, skip reporting %s", type(error).__name__)
            return None

        payload = self.build_payload(error, metadata)
        transport = self._transport or httpx.AsyncHTTPTransport(retries=self._retries)
        try:
            async with httpx.AsyncClient(transport=transport, timeout=self._timeout) as client:
                resp = await client.post(
                    self._haystack_url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
                resp.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("Failed to report %s to failbot: %s", type(error).__name__, e)
            return None

        return resp
