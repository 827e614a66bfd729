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
"""Interceptor plugins — declarative method interception for host collaborators."""

from plugchain.plugin.chain import InterceptorChain
from plugchain.plugin.decorators import Signature, get_signatures, intercepts
from plugchain.plugin.exceptions import (
    InterceptorConfigurationError,
    MissingDeclarationError,
    PluginException,
    SignatureResolutionError,
)
from plugchain.plugin.interceptor import Interceptor
from plugchain.plugin.invocation import Invocation
from plugchain.plugin.loader import load_interceptors
from plugchain.plugin.proxy import Surrogate, get_interceptor, get_target, is_surrogate, unwrap, wrap
from plugchain.plugin.signature import get_all_interfaces, get_signature_map, resolve_method

__all__ = [
    "Interceptor",
    "InterceptorChain",
    "InterceptorConfigurationError",
    "Invocation",
    "MissingDeclarationError",
    "PluginException",
    "Signature",
    "SignatureResolutionError",
    "Surrogate",
    "get_all_interfaces",
    "get_interceptor",
    "get_signature_map",
    "get_signatures",
    "get_target",
    "intercepts",
    "is_surrogate",
    "load_interceptors",
    "resolve_method",
    "unwrap",
    "wrap",
]
