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
"""SessionManager — cookie-backed session accessors and the commit protocol."""

from __future__ import annotations

import logging
import secrets
from collections.abc import Mapping, Sequence
from datetime import datetime, timedelta, timezone
from typing import Any

from starlette.requests import HTTPConnection
from starlette.responses import Response

from cookiesession.config.properties.session import SessionOptions
from cookiesession.core.config import Config
from cookiesession.kernel.exceptions import DecodeException, EncodeException, InvalidSecretException
from cookiesession.session.adapters.itsdangerous import SignedCookieCodec
from cookiesession.session.context import session_from, with_session
from cookiesession.session.ports.outbound import Codec
from cookiesession.session.record import SessionRecord

_logger = logging.getLogger(__name__)


def generate_random_key(length: int = 32) -> bytes | None:
    """Return *length* cryptographically random bytes, or ``None`` on RNG failure.

    Keys are not persisted: cookies issued under a key generated at startup
    stop decoding after a restart. A ``None`` result must be treated as
    fatal; never fall back to a fixed key.
    """
    try:
        return secrets.token_bytes(length)
    except (NotImplementedError, OSError):
        return None


class SessionManager:
    """Reads and writes session state stored in a signed cookie.

    Accessors take the in-flight Starlette request, plus the response for
    calls that change state. The decoded record is cached on the request
    scope, so later calls in the same request see earlier changes without
    decoding the cookie again. Every mutating call re-encodes the record and
    sets the session cookie on the response.

    Decode and encode failures never escape: a bad cookie reads as an empty
    session and an unencodable record is kept in memory only. Both are
    logged unless ``options.quiet`` is set.
    """

    def __init__(
        self,
        secret: bytes | str | Sequence[bytes | str] | None,
        options: SessionOptions | None = None,
        *,
        codec: Codec | None = None,
    ) -> None:
        if not secret:
            raise InvalidSecretException(
                "Session secret is empty; generate one with generate_random_key()",
                code="SESSION_SECRET_MISSING",
            )
        self._options = options or SessionOptions()
        self._codec: Codec = codec or SignedCookieCodec(secret, max_age=self._options.codec_max_age)

    @classmethod
    def from_config(
        cls,
        config: Config,
        secret: bytes | str | Sequence[bytes | str] | None,
        *,
        codec: Codec | None = None,
    ) -> SessionManager:
        """Build a manager whose options are bound from ``cookiesession.session.*``."""
        return cls(secret, config.bind(SessionOptions), codec=codec)

    @property
    def options(self) -> SessionOptions:
        return self._options

    @property
    def cookie_name(self) -> str:
        return self._options.cookie_name

    # -- decoding ---------------------------------------------------------

    def load(self, request: HTTPConnection) -> SessionRecord:
        """Decode the session cookie of *request*, ignoring any cached record."""
        name = self.cookie_name
        value = request.cookies.get(name)
        if value is None:
            return SessionRecord()

        try:
            return SessionRecord.from_payload(self._codec.decode(name, value))
        except DecodeException as exc:
            if not self._options.quiet:
                _logger.error("Failed to decode session from cookie '%s' [%s]: %s", name, exc.code, exc)
            return SessionRecord()

    def from_request(self, request: HTTPConnection) -> SessionRecord:
        """Return the record cached on *request*, decoding the cookie on first use."""
        record = session_from(request)
        if record is not None:
            return record
        return self.load(request)

    # -- committing -------------------------------------------------------

    def encode(self, record: SessionRecord) -> str | None:
        """Encode *record* as a cookie value, or return ``None`` if it cannot be encoded.

        Raises:
            EncodeException: Only when ``options.strict`` is set.
        """
        try:
            return self._codec.encode(self.cookie_name, record.to_payload())
        except EncodeException as exc:
            if self._options.strict:
                raise
            if not self._options.quiet:
                _logger.error("Failed to encode session cookie '%s': %s", self.cookie_name, exc)
            return None

    def set_cookie(self, response: Response, value: str) -> None:
        """Set the session cookie on *response*, replacing one set earlier on it."""
        name = self.cookie_name
        prefix = f"{name}=".encode("latin-1")
        response.raw_headers[:] = [
            (key, header)
            for key, header in response.raw_headers
            if not (key == b"set-cookie" and header.startswith(prefix))
        ]

        max_age = self._options.cookie_max_age
        response.set_cookie(
            key=name,
            value=value,
            max_age=max_age,
            expires=datetime.now(timezone.utc) + timedelta(seconds=max_age),
            path="/",
            secure=True,
            httponly=True,
            samesite=self._options.same_site,
        )

    def commit(self, response: Response, request: HTTPConnection, record: SessionRecord) -> None:
        """Attach *record* to *request* and write it to the session cookie on *response*."""
        request.scope = with_session(request.scope, record)

        encoded = self.encode(record)
        if encoded is None:
            return
        self.set_cookie(response, encoded)

    # -- accessors --------------------------------------------------------

    def get(self, request: HTTPConnection, key: str, default: Any = None) -> Any:
        """Return the session value for *key*, or *default* when it is not set."""
        return self.from_request(request).data.get(key, default)

    def list(self, request: HTTPConnection) -> dict[str, Any]:
        """Return the live persistent-data dict of the session."""
        return self.from_request(request).data

    def set(self, response: Response, request: HTTPConnection, key: str, value: Any) -> None:
        record = self.from_request(request)
        record.data[key] = value
        self.commit(response, request, record)

    def delete(self, response: Response, request: HTTPConnection, key: str) -> Any:
        """Remove *key* and return its previous value (``None`` if absent).

        The cookie is re-issued even when *key* was not set.
        """
        record = self.from_request(request)
        value = record.data.pop(key, None)
        self.commit(response, request, record)
        return value

    def reset(self, response: Response, request: HTTPConnection) -> None:
        """Discard all session data and flashes."""
        record = session_from(request) or SessionRecord()
        record.data = {}
        record.flashes = {}
        self.commit(response, request, record)

    def flash(self, response: Response, request: HTTPConnection, key: str, value: Any) -> None:
        record = self.from_request(request)
        record.flashes[key] = value
        self.commit(response, request, record)

    def flashes(self, response: Response, request: HTTPConnection) -> dict[str, Any]:
        """Return all flash values and clear them from the session."""
        record = self.from_request(request)
        values = dict(record.flashes)
        record.flashes = {}
        self.commit(response, request, record)
        return values

    def context_flashes(self, context: Mapping[Any, Any]) -> dict[str, Any]:
        """Read and clear flashes using only the request context.

        *context* is the ASGI scope (or a Starlette request) of a request
        handled by :class:`SessionMiddleware`. The flashes are cleared on the
        record the middleware encodes once the handler returns.
        """
        record = session_from(context)
        if record is None:
            if not self._options.quiet:
                _logger.warning(
                    "context_flashes() was called but no session is attached; "
                    "is the route wrapped in SessionMiddleware?"
                )
            return {}
        return record.take_flashes()
