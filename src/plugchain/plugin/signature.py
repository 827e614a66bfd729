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
"""Signature resolution — turns ``@intercepts`` declarations into a signature map."""

from __future__ import annotations

import inspect
import typing
from collections.abc import Callable, Mapping
from types import FunctionType
from typing import Any

from plugchain.plugin.decorators import Signature, get_signatures
from plugchain.plugin.exceptions import MissingDeclarationError, SignatureResolutionError

SignatureMap = Mapping[type, frozenset[FunctionType]]

_MISSING = object()

_COUNTED_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def resolve_method(sig: Signature) -> FunctionType:
    """Resolve *sig* to the function its host type exposes.

    The method may be declared on the host type itself or inherited from
    one of its bases.  Parameter types are compared one-to-one against the
    annotations of its positional parameters, ``self`` excluded; keyword-only
    parameters and ``*args``/``**kwargs`` are not part of a signature.  An unannotated
    parameter only matches ``object`` or ``typing.Any``.
    """
    host_type = sig.type
    if not isinstance(host_type, type):
        raise SignatureResolutionError(host_type, sig.method, sig.args, "host type is not a class")

    attr = inspect.getattr_static(host_type, sig.method, _MISSING)
    if attr is _MISSING:
        raise SignatureResolutionError(host_type, sig.method, sig.args, "no such attribute")
    if not inspect.isfunction(attr):
        raise SignatureResolutionError(
            host_type, sig.method, sig.args, f"attribute is a {type(attr).__name__}, not an instance method"
        )

    params = [p for p in inspect.signature(attr).parameters.values() if p.kind in _COUNTED_KINDS]
    params = params[1:]
    if len(params) != len(sig.args):
        raise SignatureResolutionError(
            host_type,
            sig.method,
            sig.args,
            f"expected {len(sig.args)} parameter(s), method declares {len(params)}",
        )

    hints = _type_hints(attr)
    for param, declared in zip(params, sig.args):
        annotation = hints.get(param.name, param.annotation)
        if not _matches(declared, annotation):
            raise SignatureResolutionError(
                host_type,
                sig.method,
                sig.args,
                f"parameter '{param.name}' is annotated {_describe(annotation)}, not {_describe(declared)}",
            )
    return attr


def get_signature_map(interceptor: Any) -> dict[type, frozenset[FunctionType]]:
    """Build the signature map for *interceptor*.

    Keys are the declared host types, in first-seen declaration order.
    Values are the resolved functions; duplicate signatures collapse.

    Raises:
        MissingDeclarationError: the interceptor has no ``@intercepts``.
        SignatureResolutionError: a signature names a method that does not exist.
    """
    signatures = get_signatures(interceptor)
    if signatures is None:
        raise MissingDeclarationError(interceptor)

    collected: dict[type, set[FunctionType]] = {}
    for sig in signatures:
        methods = collected.setdefault(sig.type, set())
        methods.add(resolve_method(sig))
    return {host_type: frozenset(methods) for host_type, methods in collected.items()}


def get_all_interfaces(target_type: type, signature_map: SignatureMap) -> tuple[type, ...]:
    """Return the declared host types that *target_type* implements.

    Walks the MRO (most-derived first) and keeps every class that is a key
    of *signature_map*.  Keys the MRO does not contain but which accept
    *target_type* as a virtual subclass (``ABC.register``) follow, in
    signature map order.
    """
    interfaces: list[type] = [klass for klass in target_type.__mro__ if klass in signature_map]
    for host_type in signature_map:
        if host_type not in interfaces and _is_virtual_subclass(target_type, host_type):
            interfaces.append(host_type)
    return tuple(interfaces)


def _is_virtual_subclass(target_type: type, host_type: type) -> bool:
    try:
        return issubclass(target_type, host_type)
    except TypeError:
        # Protocols with non-method members refuse issubclass().
        return False


def _type_hints(function: Callable[..., Any]) -> dict[str, Any]:
    try:
        return typing.get_type_hints(function)
    except (NameError, TypeError):
        return {}


def _matches(declared: Any, annotation: Any) -> bool:
    if annotation is inspect.Parameter.empty:
        return declared is object or declared is Any
    if declared == annotation:
        return True
    if isinstance(annotation, str):
        return annotation in (
            getattr(declared, "__qualname__", None),
            getattr(declared, "__name__", None),
            declared,
        )
    return False


def _describe(value: Any) -> str:
    if value is inspect.Parameter.empty:
        return "<unannotated>"
    return getattr(value, "__qualname__", None) or repr(value)
