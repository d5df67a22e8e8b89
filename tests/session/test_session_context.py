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
"""Tests for the scope-carried session cache."""

from starlette.requests import Request

from cookiesession.session.context import session_from, with_session
from cookiesession.session.record import SessionRecord


def _scope() -> dict:
    return {"type": "http", "method": "GET", "path": "/", "headers": [], "query_string": b""}


class TestWithSession:
    def test_returns_new_scope(self):
        scope = _scope()
        record = SessionRecord()

        derived = with_session(scope, record)

        assert derived is not scope
        assert session_from(derived) is record
        assert session_from(scope) is None

    def test_keeps_existing_scope_entries(self):
        derived = with_session(_scope(), SessionRecord())
        assert derived["path"] == "/"
        assert derived["type"] == "http"

    def test_rederiving_replaces_record(self):
        first, second = SessionRecord(), SessionRecord()
        scope = with_session(with_session(_scope(), first), second)
        assert session_from(scope) is second


class TestSessionFrom:
    def test_missing_returns_none(self):
        assert session_from(_scope()) is None

    def test_reads_through_request(self):
        record = SessionRecord(data={"a": 1})
        request = Request(with_session(_scope(), record))
        assert session_from(request) is record

    def test_string_keys_cannot_collide(self):
        scope = _scope()
        scope["session"] = SessionRecord()
        scope["cookiesession.session"] = SessionRecord()
        assert session_from(scope) is None
