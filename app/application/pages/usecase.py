# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

import html
import re
from pathlib import Path
from typing import Iterator, Union

from app.common.errors import PageNotFound
from app.domain import models


_TITLE_RE = re.compile(r"<h1[^>]*>(.*?)</h1>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]+>")


class PageUsecase:
    def __init__(self, content_dir: Union[str, Path]) -> None:
        self._root = Path(content_dir).resolve()

    def get_page(self, path: str) -> models.Page:
        """按 URL 路径查找页面：<path>.html 或 <path>/index.html，找不到抛 PageNotFound"""
        for candidate in self._candidates(path):
            if candidate.is_file():
                body = candidate.read_text(encoding="utf-8")
                return models.Page(path="/" + path.strip("/"), title=self._title_of(body, candidate), html=body)
        raise PageNotFound(path)

    def _candidates(self, path: str) -> Iterator[Path]:
        rel = path.strip("/")
        names = [f"{rel}.html", f"{rel}/index.html"] if rel else ["index.html"]
        for name in names:
            try:
                candidate = (self._root / name).resolve()
            except (ValueError, OSError):
                # 含 \x00 等非法字符的路径当作不存在
                continue
            # 不允许 ../ 跳出内容目录
            if candidate == self._root or self._root not in candidate.parents:
                continue
            yield candidate

    def _title_of(self, body: str, source: Path) -> str:
        m = _TITLE_RE.search(body)
        if m:
            title = html.unescape(_TAG_RE.sub("", m.group(1))).strip()
            if title:
                return title
        if source.name != "index.html":
            stem = source.stem
        elif source.parent == self._root:
            return "Home"
        else:
            stem = source.parent.name
        return stem.replace("-", " ").capitalize()
