# SPDX-FileCopyrightText: 2024 Benedict Harcourt <ben.harcourt@harcourtprogramming.co.uk>
#
# SPDX-License-Identifier: BSD-2-Clause

from __future__ import annotations as _future_annotations

import gzip
import hashlib
import logging

import aiohttp.web
import brotli  # type: ignore[import-untyped]
import multidict

from . import DEFAULT_MAX_DEPTH, Node

_logger = logging.getLogger("dom.web")


class DocResponse:
    """Serves one rendered document, negotiating compression per request."""

    _doc: Node
    _status: int
    _max_depth: int
    _content: bytes | None
    _etag: str | None

    def __init__(
        self,
        document: Node,
        status: int = 200,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self._doc = document
        self._status = status
        self._max_depth = max_depth
        self._content = None
        self._etag = None

    @property
    def content(self) -> bytes:
        if self._content is None:
            self._content = self._doc.render(max_depth=self._max_depth).encode("utf-8")
        return self._content

    @property
    def etag(self) -> str:
        if self._etag is None:
            self._etag = '"' + hashlib.sha1(self.content, usedforsecurity=False).hexdigest() + '"'
        return self._etag

    def matches(self, request: aiohttp.web.BaseRequest) -> bool:
        tags = {
            tag.strip()
            for value in request.headers.getall("If-None-Match", [])
            for tag in value.split(",")
        }
        return "*" in tags or self.etag in tags

    def build(self, request: aiohttp.web.BaseRequest) -> aiohttp.web.Response:
        headers = multidict.CIMultiDict(
            {
                "Content-Type": "text/html; charset=utf-8",
                "Cache-Control": "must-revalidate, no-cache, private",
                "ETag": self.etag,
                "Vary": "accept-encoding",
            },
        )

        if self.matches(request):
            _logger.info("Document not modified", extra={"status": 304, "path": request.path})
            return aiohttp.web.Response(status=304, headers=headers)

        content = self.content
        encoding = ""
        accept_encoding = request.headers.get("Accept-Encoding", "")

        if "br" in accept_encoding:
            content = brotli.compress(content)
            encoding = "br"
        elif "gzip" in accept_encoding:
            content = gzip.compress(content)
            encoding = "gzip"

        if encoding:
            headers["Content-Encoding"] = encoding

        _logger.info(
            "Serving document",
            extra={
                "status": self._status,
                "path": request.path,
                "encoding": encoding or "identity",
                "size": len(content),
            },
        )
        return aiohttp.web.Response(status=self._status, body=content, headers=headers)

    async def handle(self, request: aiohttp.web.Request) -> aiohttp.web.Response:
        return self.build(request)


def make_app(document: Node, *, max_depth: int = DEFAULT_MAX_DEPTH) -> aiohttp.web.Application:
    app = aiohttp.web.Application()
    app.router.add_get("/", DocResponse(document, max_depth=max_depth).handle)
    return app
