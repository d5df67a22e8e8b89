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
"""cookiesession session — signed-cookie session state with flash messages.

Import the codec adapter from the adapter package::

    from cookiesession.session.adapters.itsdangerous import SignedCookieCodec
"""

from cookiesession.session.buffer import BufferPool
from cookiesession.session.context import session_from, with_session
from cookiesession.session.manager import SessionManager, generate_random_key
from cookiesession.session.middleware import BufferedResponse, SessionMiddleware
from cookiesession.session.ports.outbound import Codec
from cookiesession.session.record import SessionRecord

__all__ = [
    "BufferPool",
    "BufferedResponse",
    "Codec",
    "SessionManager",
    "SessionMiddleware",
    "SessionRecord",
    "generate_random_key",
    "session_from",
    "with_session",
]
