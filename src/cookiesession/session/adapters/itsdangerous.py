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
"""Signed, timestamped cookie codec built on itsdangerous."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from itsdangerous import BadPayload, BadSignature, SignatureExpired, URLSafeTimedSerializer

from cookiesession.kernel.exceptions import DecodeException, EncodeException

DEFAULT_MAX_LENGTH = 4096


class SignedCookieCodec:
    """Codec producing URL-safe ``payload.timestamp.signature`` values.

    Payloads are JSON-serialized and HMAC-signed with the secret. The cookie
    name is used as the signing salt. Values older than ``max_age`` seconds
    fail to decode; ``max_age=None`` disables the check.

    *secret* may be a sequence of keys for rotation: the last key signs,
    every key is tried when verifying.

    Encoded values longer than ``max_length`` are refused, since browsers
    drop cookies over 4 KB without telling the server.
    """

    def __init__(
        self,
        secret: bytes | str | Sequence[bytes | str],
        max_age: int | None = None,
        max_length: int = DEFAULT_MAX_LENGTH,
    ) -> None:
        self._secret = secret
        self._max_age = max_age
        self._max_length = max_length
        self._serializers: dict[str, URLSafeTimedSerializer] = {}

    @property
    def max_age(self) -> int | None:
        return self._max_age

    def _serializer(self, name: str) -> URLSafeTimedSerializer:
        serializer = self._serializers.get(name)
        if serializer is None:
            serializer = URLSafeTimedSerializer(self._secret, salt=name)
            self._serializers[name] = serializer
        return serializer

    def encode(self, name: str, value: Any) -> str:
        """Serialize and sign *value* for the cookie called *name*."""
        try:
            encoded = self._serializer(name).dumps(value)
        except (TypeError, ValueError, RecursionError) as exc:
            raise EncodeException(
                f"Cannot serialize session for cookie '{name}': {exc}",
                code="SESSION_ENCODE",
                context={"cookie": name},
            ) from exc
        if self._max_length > 0 and len(encoded) > self._max_length:
            raise EncodeException(
                f"Session cookie '{name}' is {len(encoded)} bytes, over the {self._max_length} byte limit",
                code="SESSION_ENCODE_TOO_LONG",
                context={"cookie": name, "length": len(encoded), "max_length": self._max_length},
            )
        return encoded

    def decode(self, name: str, value: str) -> Any:
        """Verify and deserialize a cookie value issued by :meth:`encode`."""
        try:
            return self._serializer(name).loads(value, max_age=self._max_age)
        except SignatureExpired as exc:
            raise DecodeException(
                f"Session cookie '{name}' has expired",
                code="SESSION_DECODE_EXPIRED",
                context={"cookie": name, "max_age": self._max_age},
            ) from exc
        except BadPayload as exc:
            raise DecodeException(
                f"Session cookie '{name}' has a corrupt payload",
                code="SESSION_DECODE_PAYLOAD",
                context={"cookie": name},
            ) from exc
        except BadSignature as exc:
            raise DecodeException(
                f"Session cookie '{name}' failed signature verification",
                code="SESSION_DECODE_SIGNATURE",
                context={"cookie": name},
            ) from exc
