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
"""Plugin exceptions — fatal errors raised while wrapping or registering interceptors."""

from __future__ import annotations

from typing import Any

from plugchain.kernel.exceptions import PlugchainException


def _type_name(value: Any) -> str:
    return getattr(value, "__qualname__", None) or getattr(value, "__name__", None) or repr(value)


class PluginException(PlugchainException):
    """Base class for errors raised by the plugin subsystem."""


class MissingDeclarationError(PluginException):
    """The interceptor class carries no ``@intercepts`` declaration."""

    def __init__(self, interceptor: Any) -> None:
        interceptor_cls = interceptor if isinstance(interceptor, type) else type(interceptor)
        self.interceptor_type = interceptor_cls
        super().__init__(
            message=(
                f"No @intercepts declaration was found on interceptor "
                f"{interceptor_cls.__module__}.{interceptor_cls.__qualname__}"
            ),
            code="PLUGIN_MISSING_DECLARATION",
            context={"interceptor": f"{interceptor_cls.__module__}.{interceptor_cls.__qualname__}"},
        )


class SignatureResolutionError(PluginException):
    """A declared signature does not resolve to a method on its host type."""

    def __init__(self, host_type: type, method: str, args: tuple, reason: str) -> None:
        self.host_type = host_type
        self.method = method
        self.args_types = args
        arg_names = ", ".join(_type_name(a) for a in args)
        super().__init__(
            message=(
                f"Could not find method on {_type_name(host_type)} named {method}({arg_names}). "
                f"Cause: {reason}"
            ),
            code="PLUGIN_SIGNATURE_RESOLUTION",
            context={
                "type": _type_name(host_type),
                "method": method,
                "args": [_type_name(a) for a in args],
            },
        )


class InterceptorConfigurationError(PluginException):
    """An interceptor entry in the configuration could not be loaded."""

    def __init__(self, interceptor: str, reason: str) -> None:
        self.interceptor = interceptor
        self.reason = reason
        super().__init__(
            message=f"Failed to register interceptor '{interceptor}': {reason}",
            code="PLUGIN_CONFIGURATION",
            context={"interceptor": interceptor},
        )
