"""PlugChain Logging — structlog setup for plugin events."""

from plugchain.logging.structlog_adapter import LoggingSettings, StructlogAdapter, configure_logging

__all__ = ["LoggingSettings", "StructlogAdapter", "configure_logging"]
