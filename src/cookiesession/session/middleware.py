# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""SessionMiddleware — buffers the response so the session cookie precedes the body.

A handler can read or clear flashes through
:meth:`SessionManager.context_flashes` while it renders. Those changes land
on the record attached at entry, which is only encoded after the handler
returns. By then an unbuffered response would already have sent its
headers, so the middleware holds the whole response in memory, adds the
cookie to the held headers, and only then writes to the real ``send``.

Uses raw ASGI protocol instead of ``BaseHTTPMiddleware`` so the record and
the buffered response stay on the request's own task.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from starlette.requests import HTTPConnection
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from cookiesession.session.buffer import BufferPool
from cookiesession.session.context import with_session
from cookiesession.session.manager import SessionManager

_logger = logging.getLogger(__name__)


class BufferedResponse(Response):
    """Captures an ASGI response in place of the server's ``send``.

    ``http.response.start`` is held as :attr:`status_code` and
    :attr:`raw_headers`, so ``headers`` and ``set_cookie`` act on the headers
    that will be sent. Body chunks go to the buffer. Nothing reaches the real
    ``send`` until :meth:`flush`.
    """

    def __init__(self, send: Send, buffer: io.BytesIO) -> None:
        super().__init__(status_code=200)
        self._send = send
        self._buffer = buffer
        self._start: Message = {}
        self._deferred: list[Message] = []

    async def send(self, message: Message) -> None:
        message_type = message["type"]
        if message_type == "http.response.start":
            self._start = message
            self.status_code = message["status"]
            self.raw_headers[:] = [(bytes(k), bytes(v)) for k, v in message.get("headers", [])]
        elif message_type == "http.response.body":
            self._buffer.write(message.get("body", b""))
        elif message_type == "http.response.pathsend":
            # ASGI pathsend extension (zero-copy file serving).
            path = message.get("path", "")
            if path:
                self._buffer.write(Path(path).read_bytes())
        else:
            self._deferred.append(message)

    async def flush(self) -> int:
        """Send the held status, headers and body; return the body length."""
        body = self._buffer.getvalue()
        if not self._start:
            self.headers["content-length"] = str(len(body))
        start: dict[str, Any] = {**self._start}
        start.update(type="http.response.start", status=self.status_code, headers=self.raw_headers)

        await self._send(start)
        await self._send({"type": "http.response.body", "body": body, "more_body": False})
        for message in self._deferred:
            await self._send(message)
        return len(body)


class SessionMiddleware:
    """Decodes the session once per request and writes it back before the body.

    The record decoded at entry is attached to the scope handed to the
    wrapped app, so :meth:`SessionManager.context_flashes` and the regular
    accessors operate on it directly. Requests whose path is in
    ``exclude_paths`` are passed through untouched.

    Usage::

        Starlette(routes=..., middleware=[Middleware(SessionMiddleware, manager=manager)])
    """

    def __init__(
        self,
        app: ASGIApp,
        manager: SessionManager,
        exclude_paths: Sequence[str] = (),
        pool: BufferPool | None = None,
    ) -> None:
        self.app = app
        self._manager = manager
        self._exclude_paths = set(exclude_paths)
        self._pool = pool or BufferPool()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        connection = HTTPConnection(scope)
        if connection.url.path in self._exclude_paths:
            await self.app(scope, receive, send)
            return

        record = self._manager.load(connection)
        buffer = self._pool.acquire()
        try:
            response = BufferedResponse(send, buffer)
            await self.app(with_session(scope, record), receive, response.send)

            encoded = self._manager.encode(record)
            if encoded is not None:
                self._manager.set_cookie(response, encoded)

            try:
                await response.flush()
            except Exception as exc:
                if not self._manager.options.quiet:
                    _logger.error("Failed to write buffered response for %s: %s", connection.url.path, exc)
        finally:
            self._pool.release(buffer)
