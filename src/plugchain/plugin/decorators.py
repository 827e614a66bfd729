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
"""Declarative interception metadata — ``Signature`` and ``@intercepts``."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

T = TypeVar("T", bound=type)

_INTERCEPTS_ATTR = "__plugchain_intercepts__"


@dataclass(frozen=True)
class Signature:
    """Identifies exactly one method on one interface.

    Attributes:
        type: The interface declaring (or inheriting) the method.
        method: The method name.
        args: Ordered parameter types, ``self`` excluded.
    """

    type: type
    method: str
    args: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        # Accept lists for convenience; the stored value must stay hashable.
        if not isinstance(self.args, tuple):
            object.__setattr__(self, "args", tuple(self.args))


def intercepts(*signatures: Signature) -> Callable[[T], T]:
    """Declare which interface methods an interceptor class diverts.

    Usage::

        @intercepts(
            Signature(Executor, "update", (MappedStatement, object)),
            Signature(Executor, "query", (MappedStatement, object, RowBounds)),
        )
        class AuditInterceptor(Interceptor):
            def intercept(self, invocation):
                ...

    Sets ``__plugchain_intercepts__`` on the class to the tuple of
    signatures, in declaration order.
    """
    if not signatures:
        raise ValueError("@intercepts requires at least one Signature")
    for sig in signatures:
        if not isinstance(sig, Signature):
            raise TypeError(f"@intercepts expects Signature instances, got {type(sig).__name__}")

    def decorator(cls: T) -> T:
        setattr(cls, _INTERCEPTS_ATTR, tuple(signatures))
        return cls

    return decorator


def get_signatures(interceptor_or_cls: Any) -> tuple[Signature, ...] | None:
    """Return the declared signatures of an interceptor (instance or class), or ``None``."""
    cls = interceptor_or_cls if isinstance(interceptor_or_cls, type) else type(interceptor_or_cls)
    return getattr(cls, _INTERCEPTS_ATTR, None)
