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
"""Invocation — one diverted call and the capability to continue it."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True)
class Invocation:
    """An intercepted method call.

    Attributes:
        target: The object one layer below the surrogate.  It may itself
            be another surrogate.
        method: The interface function being dispatched.
        args: Positional arguments passed by the caller.
        kwargs: Keyword arguments passed by the caller.
    """

    target: Any
    method: Callable[..., Any]
    args: tuple
    kwargs: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def method_name(self) -> str:
        return self.method.__name__

    def proceed(self) -> Any:
        """Invoke the method on the target with the captured arguments.

        Dispatch goes through the target's own attribute lookup, so when
        the target is a surrogate the next interceptor layer runs.
        Exceptions raised by the method propagate unchanged.
        """
        return getattr(self.target, self.method.__name__)(*self.args, **self.kwargs)
