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
"""Structured logging for PlugChain's surrogate, chain and loader events.

Configured from the ``plugchain.logging`` section::

    plugchain:
      logging:
        format: json            # console | json
        level:
          root: INFO
          plugchain.plugin: DEBUG
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import Any

import structlog

from plugchain.core.config import Config
from plugchain.kernel.exceptions import PlugchainException

LOGGING_SECTION = "plugchain.logging"
FORMATS = ("console", "json")


@dataclass(frozen=True)
class LoggingSettings:
    """Parsed ``plugchain.logging`` section."""

    root_level: str = "INFO"
    format: str = "console"
    levels: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_config(cls, config: Config) -> LoggingSettings:
        levels = {name: str(level).upper() for name, level in config.get_section(f"{LOGGING_SECTION}.level").items()}
        root_level = levels.pop("root", "INFO")
        fmt = str(config.get(f"{LOGGING_SECTION}.format", "console")).lower()
        if fmt not in FORMATS:
            raise PlugchainException(
                f"Unsupported log format '{fmt}'; expected one of {', '.join(FORMATS)}",
                code="LOGGING_FORMAT",
                context={"format": fmt},
            )
        return cls(root_level=root_level, format=fmt, levels=levels)


class StructlogAdapter:
    """Routes the ``plugchain.*`` structlog loggers through stdlib logging."""

    def __init__(self) -> None:
        self.settings = LoggingSettings()

    def configure(self, config: Config) -> None:
        self.settings = LoggingSettings.from_config(config)
        self._setup_structlog()
        for name, level in self.settings.levels.items():
            self.set_level(name, level)

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        logging.getLogger(name).setLevel(getattr(logging, level.upper(), logging.INFO))

    def _setup_structlog(self) -> None:
        renderer: structlog.types.Processor = (
            structlog.processors.JSONRenderer() if self.settings.format == "json" else structlog.dev.ConsoleRenderer()
        )
        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.UnicodeDecoder(),
                renderer,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(
            format="%(message)s",
            stream=sys.stdout,
            level=getattr(logging, self.settings.root_level, logging.INFO),
            force=True,
        )


def configure_logging(config: Config) -> StructlogAdapter | None:
    """Configure logging when *config* has a ``plugchain.logging`` section.

    Returns the configured adapter, or ``None`` when the section is absent
    and the host's own logging setup is left alone.
    """
    if not config.get_section(LOGGING_SECTION):
        return None
    adapter = StructlogAdapter()
    adapter.configure(config)
    return adapter
