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
"""Surrogate factory — wraps targets so declared methods reach an interceptor.

:func:`wrap` builds a class on the fly that subclasses :class:`Surrogate`
plus every interface the interceptor declares and the target implements.
Each function those interfaces expose is replaced with a dispatcher:
declared methods go to ``interceptor.intercept``, everything else falls
through to the target.
"""

from __future__ import annotations

import functools
import inspect
import types
import typing
from abc import ABC
from types import FunctionType
from typing import TYPE_CHECKING, Any

import structlog

from plugchain.plugin.invocation import Invocation
from plugchain.plugin.signature import SignatureMap, get_all_interfaces, get_signature_map

if TYPE_CHECKING:
    from plugchain.plugin.interceptor import Interceptor

logger = structlog.get_logger("plugchain.plugin.proxy")

_TARGET_ATTR = "_plugchain_target"
_INTERCEPTOR_ATTR = "_plugchain_interceptor"
_SIGNATURE_MAP_ATTR = "_plugchain_signature_map"

# Never overridden on a surrogate, even when an interface defines them.
_RESERVED_NAMES = frozenset(
    {
        "__init__",
        "__new__",
        "__getattr__",
        "__getattribute__",
        "__setattr__",
        "__delattr__",
        "__init_subclass__",
        "__subclasshook__",
        "__class_getitem__",
    }
)

_SKIPPED_BASES = (object, ABC, typing.Protocol, typing.Generic)


def wrap(target: Any, interceptor: Interceptor) -> Any:
    """Wrap *target* with *interceptor*.

    Returns *target* itself when it implements none of the interfaces the
    interceptor declares.

    Raises:
        MissingDeclarationError: the interceptor has no ``@intercepts``.
        SignatureResolutionError: a declared method does not exist.
    """
    signature_map = get_signature_map(interceptor)
    interfaces = get_all_interfaces(type(target), signature_map)
    if not interfaces:
        logger.debug(
            "surrogate_skipped",
            target=type(target).__qualname__,
            interceptor=type(interceptor).__qualname__,
        )
        return target

    surrogate_type = _surrogate_type(interfaces)
    logger.debug(
        "surrogate_created",
        target=type(target).__qualname__,
        interceptor=type(interceptor).__qualname__,
        interfaces=[iface.__qualname__ for iface in interfaces],
    )
    return surrogate_type(target, interceptor, signature_map)


def is_surrogate(obj: Any) -> bool:
    return isinstance(obj, Surrogate)


def get_target(surrogate: Surrogate) -> Any:
    """Return the object one layer below *surrogate*."""
    if not isinstance(surrogate, Surrogate):
        raise TypeError(f"{type(surrogate).__qualname__} is not a surrogate")
    return object.__getattribute__(surrogate, _TARGET_ATTR)


def get_interceptor(surrogate: Surrogate) -> Interceptor:
    """Return the interceptor owning the *surrogate* layer."""
    if not isinstance(surrogate, Surrogate):
        raise TypeError(f"{type(surrogate).__qualname__} is not a surrogate")
    return object.__getattribute__(surrogate, _INTERCEPTOR_ATTR)


def unwrap(obj: Any) -> Any:
    """Walk every surrogate layer down to the original target."""
    while isinstance(obj, Surrogate):
        obj = object.__getattribute__(obj, _TARGET_ATTR)
    return obj


class Surrogate:
    """Base of every synthesized surrogate class.

    A surrogate owns three references: the wrapped target, the
    interceptor, and the interceptor's signature map.  Interface members
    other than methods, and attributes the interfaces do not declare, are
    forwarded to the target.
    """

    def __init__(self, target: Any, interceptor: Interceptor, signature_map: SignatureMap) -> None:
        object.__setattr__(self, _TARGET_ATTR, target)
        object.__setattr__(self, _INTERCEPTOR_ATTR, interceptor)
        object.__setattr__(self, _SIGNATURE_MAP_ATTR, signature_map)

    def _plugchain_dispatch(
        self,
        owners: tuple[type, ...],
        name: str,
        function: FunctionType,
        args: tuple,
        kwargs: dict[str, Any],
    ) -> Any:
        target = object.__getattribute__(self, _TARGET_ATTR)
        signature_map = object.__getattribute__(self, _SIGNATURE_MAP_ATTR)
        if any(function in signature_map.get(owner, ()) for owner in owners):
            interceptor = object.__getattribute__(self, _INTERCEPTOR_ATTR)
            return interceptor.intercept(Invocation(target, function, args, kwargs))
        return getattr(target, name)(*args, **kwargs)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_plugchain_"):
            raise AttributeError(name)
        return getattr(object.__getattribute__(self, _TARGET_ATTR), name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_plugchain_"):
            object.__setattr__(self, name, value)
        else:
            setattr(object.__getattribute__(self, _TARGET_ATTR), name, value)

    def __repr__(self) -> str:
        return repr(object.__getattribute__(self, _TARGET_ATTR))

    def __str__(self) -> str:
        return str(object.__getattribute__(self, _TARGET_ATTR))

    def __eq__(self, other: object) -> bool:
        return object.__getattribute__(self, _TARGET_ATTR) == other

    def __hash__(self) -> int:
        return hash(object.__getattribute__(self, _TARGET_ATTR))


@functools.lru_cache(maxsize=None)
def _surrogate_type(interfaces: tuple[type, ...]) -> type[Surrogate]:
    """Synthesize (once per interface tuple) the surrogate class."""
    namespace: dict[str, Any] = {"__module__": __name__, "__doc__": Surrogate.__doc__}
    for name, (owners, member) in _collect_members(interfaces).items():
        if inspect.isfunction(member):
            namespace[name] = _dispatcher(owners, name, member)
        else:
            namespace[name] = _forwarding_attribute(name, member)
    # A dispatched __eq__ would otherwise leave the class unhashable.
    namespace.setdefault("__hash__", Surrogate.__hash__)

    type_name = "".join(iface.__name__ for iface in interfaces) + "Surrogate"
    namespace["__qualname__"] = type_name
    # An interface already inherited by another applicable one is redundant as a base.
    bases = tuple(
        iface for iface in interfaces if not any(other is not iface and iface in other.__mro__ for other in interfaces)
    )
    return types.new_class(type_name, (Surrogate, *bases), exec_body=lambda ns: ns.update(namespace))


def _collect_members(interfaces: tuple[type, ...]) -> dict[str, tuple[tuple[type, ...], Any]]:
    """Map every name the interfaces define to ``(owners, member)``.

    *owners* holds the class whose namespace defines the member, followed
    by the applicable interface it was reached through.  The first
    interface (in applicable order) exposing a name wins.
    """
    members: dict[str, tuple[tuple[type, ...], Any]] = {}
    for iface in interfaces:
        for klass in iface.__mro__:
            if klass in _SKIPPED_BASES:
                continue
            for name, raw in vars(klass).items():
                if name in members or name in _RESERVED_NAMES:
                    continue
                if not inspect.isfunction(raw) and _is_internal(name):
                    continue
                owners = (klass,) if klass is iface else (klass, iface)
                members[name] = (owners, raw)
    return members


def _is_internal(name: str) -> bool:
    # Dunders, ``_abc_impl`` and typing's ``_is_protocol`` bookkeeping stay on the class.
    return name.startswith("_")


def _dispatcher(owners: tuple[type, ...], name: str, function: FunctionType) -> FunctionType:
    def dispatch(self: Surrogate, *args: Any, **kwargs: Any) -> Any:
        return self._plugchain_dispatch(owners, name, function, args, kwargs)

    # functools.wraps would copy __isabstractmethod__ and keep the class abstract.
    dispatch.__name__ = name
    dispatch.__qualname__ = f"{owners[0].__qualname__}.{name}"
    dispatch.__doc__ = function.__doc__
    dispatch.__wrapped__ = function  # type: ignore[attr-defined]
    return dispatch


def _forwarding_attribute(name: str, original: Any) -> property:
    """Forward reads and writes of *name* to the target.

    Covers interface properties, class attributes, static and class
    methods, which would otherwise shadow the target's own values.
    """

    def fget(self: Surrogate) -> Any:
        return getattr(object.__getattribute__(self, _TARGET_ATTR), name)

    def fset(self: Surrogate, value: Any) -> None:
        setattr(object.__getattribute__(self, _TARGET_ATTR), name, value)

    if isinstance(original, property):
        return property(fget, fset if original.fset is not None else None, doc=original.__doc__)
    return property(fget, fset)
