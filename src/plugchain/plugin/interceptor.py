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
"""Interceptor — the contract every plugin implements."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from plugchain.plugin.invocation import Invocation
from plugchain.plugin.proxy import wrap


class Interceptor(ABC):
    """Base class for interceptors.

    Subclasses declare the methods they divert with ``@intercepts`` and
    implement :meth:`intercept`.  Usage::

        @intercepts(Signature(StatementHandler, "prepare", (Connection, int)))
        class SlowQueryInterceptor(Interceptor):
            def intercept(self, invocation: Invocation) -> Any:
                started = time.perf_counter()
                try:
                    return invocation.proceed()
                finally:
                    record(time.perf_counter() - started)
    """

    @abstractmethod
    def intercept(self, invocation: Invocation) -> Any:
        """Handle a diverted call.

        Call ``invocation.proceed()`` to continue down the chain.  Returning
        without proceeding suppresses the underlying method.
        """

    def plugin(self, target: Any) -> Any:
        """Wrap *target* with this interceptor, or return it unchanged."""
        return wrap(target, self)

    def set_properties(self, properties: Mapping[str, str]) -> None:
        """Apply configuration entries. Called at most once, before any interception."""
