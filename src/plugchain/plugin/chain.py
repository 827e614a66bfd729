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
"""InterceptorChain — ordered interceptors applied layer by layer to a target."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

import structlog

from plugchain.plugin.interceptor import Interceptor

if TYPE_CHECKING:
    from plugchain.core.config import Config

logger = structlog.get_logger("plugchain.plugin.chain")


class InterceptorChain:
    """Append-only, ordered list of interceptors.

    Populate it while the host engine is being configured and share it
    only once it is complete; the chain performs no locking.

    Usage::

        chain = InterceptorChain()
        chain.add_interceptor(AuditInterceptor())
        chain.add_interceptor(TimingInterceptor())

        executor = chain.plugin_all(SimpleExecutor())

    The last interceptor added wraps outermost and sees each call first.
    """

    def __init__(self) -> None:
        self._interceptors: list[Interceptor] = []

    @classmethod
    def from_config(cls, config: Config) -> InterceptorChain:
        """Build a chain from the ``plugchain.plugins`` configuration list.

        A ``plugchain.logging`` section, when present, configures logging
        first so registration events follow it.
        """
        from plugchain.logging.structlog_adapter import configure_logging
        from plugchain.plugin.loader import load_interceptors

        configure_logging(config)
        return load_interceptors(config, cls())

    def add_interceptor(self, interceptor: Interceptor) -> None:
        if not isinstance(interceptor, Interceptor):
            raise TypeError(f"Expected an Interceptor, got {type(interceptor).__qualname__}")
        self._interceptors.append(interceptor)
        logger.debug(
            "interceptor_added",
            interceptor=type(interceptor).__qualname__,
            position=len(self._interceptors) - 1,
        )

    def plugin_all(self, target: Any) -> Any:
        """Let every interceptor, in insertion order, wrap *target*."""
        for interceptor in self._interceptors:
            target = interceptor.plugin(target)
        return target

    def get_interceptors(self) -> tuple[Interceptor, ...]:
        """Return a read-only snapshot of the registered interceptors."""
        return tuple(self._interceptors)

    def __len__(self) -> int:
        return len(self._interceptors)

    def __iter__(self) -> Iterator[Interceptor]:
        return iter(tuple(self._interceptors))
