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
"""Request-scoped session cache carried on the ASGI scope.

The decoded :class:`SessionRecord` travels with the request under a private
key object. Attaching a record never mutates a scope: :func:`with_session`
returns a derived copy that downstream code receives instead.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from starlette.types import Scope

from cookiesession.session.record import SessionRecord


class _SessionKey:
    __slots__ = ()

    def __repr__(self) -> str:
        return "<cookiesession.session>"


_SESSION_KEY = _SessionKey()


def with_session(scope: Scope, record: SessionRecord) -> Scope:
    """Return a copy of *scope* carrying *record*."""
    return {**scope, _SESSION_KEY: record}


def session_from(context: Mapping[Any, Any]) -> SessionRecord | None:
    """Return the record attached to *context*, or ``None``.

    *context* may be an ASGI scope or any Starlette ``HTTPConnection``
    (which exposes its scope through the mapping protocol).
    """
    try:
        record = context[_SESSION_KEY]
    except KeyError:
        return None
    return record if isinstance(record, SessionRecord) else None
