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
"""Interceptor registration from configuration.

The host engine lists its interceptors under ``plugchain.plugins``::

    plugchain:
      plugins:
        - interceptor: myapp.plugins:AuditInterceptor
          properties:
            level: debug
            table: ${AUDIT_TABLE:audit_log}
        - interceptor: myapp.plugins.TimingInterceptor

Entries are instantiated and appended in list order.  Property values are
placeholder-resolved and handed to ``set_properties`` as strings.
"""

from __future__ import annotations

import importlib
from collections.abc import Mapping
from typing import Any

import structlog

from plugchain.core.config import Config
from plugchain.plugin.chain import InterceptorChain
from plugchain.plugin.exceptions import InterceptorConfigurationError
from plugchain.plugin.interceptor import Interceptor

logger = structlog.get_logger("plugchain.plugin.loader")

PLUGINS_KEY = "plugchain.plugins"


def load_interceptors(config: Config, chain: InterceptorChain | None = None) -> InterceptorChain:
    """Instantiate every configured interceptor and append it to *chain*.

    A fresh chain is created when *chain* is ``None``.  Returns the chain.

    Raises:
        InterceptorConfigurationError: an entry is malformed, cannot be
            imported or constructed, or is not an :class:`Interceptor`.
    """
    chain = chain if chain is not None else InterceptorChain()
    entries = config.get(PLUGINS_KEY, [])
    if not isinstance(entries, list):
        raise InterceptorConfigurationError(PLUGINS_KEY, f"expected a list, got {type(entries).__name__}")

    for index, entry in enumerate(entries):
        if not isinstance(entry, Mapping) or not isinstance(entry.get("interceptor"), str):
            raise InterceptorConfigurationError(
                f"{PLUGINS_KEY}[{index}]", "entry must be a mapping with an 'interceptor' string"
            )
        reference = entry["interceptor"]
        raw_properties = entry.get("properties") or {}
        if not isinstance(raw_properties, Mapping):
            raise InterceptorConfigurationError(reference, "'properties' must be a mapping")

        interceptor = _instantiate(reference)
        properties = {str(key): config.resolve(str(value)) for key, value in raw_properties.items()}
        interceptor.set_properties(properties)
        chain.add_interceptor(interceptor)
        logger.debug("interceptor_loaded", interceptor=reference, properties=sorted(properties))
    return chain


def resolve_interceptor_class(reference: str) -> type[Interceptor]:
    """Import ``package.module:ClassName`` or ``package.module.ClassName``."""
    if ":" in reference:
        module_name, _, attr_path = reference.partition(":")
    else:
        module_name, _, attr_path = reference.rpartition(".")
    if not module_name or not attr_path:
        raise InterceptorConfigurationError(reference, "expected 'module:ClassName' or 'module.ClassName'")

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise InterceptorConfigurationError(reference, f"cannot import module '{module_name}': {exc}") from exc

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise InterceptorConfigurationError(reference, f"'{part}' not found in '{module_name}'") from exc

    if not (isinstance(obj, type) and issubclass(obj, Interceptor)):
        raise InterceptorConfigurationError(reference, "not an Interceptor subclass")
    return obj


def _instantiate(reference: str) -> Interceptor:
    interceptor_cls = resolve_interceptor_class(reference)
    try:
        return interceptor_cls()
    except Exception as exc:
        raise InterceptorConfigurationError(reference, f"construction failed: {exc}") from exc
