"""Utility functions for planform.

This module provides utility functions including:

- Logging setup and configuration
- The reporting channel injected into the boolean engine
- A bounded in-memory diagnostics log
"""

from planform.utils.logging import (
    BooleanLogger,
    DiagnosticsLog,
    LogEntry,
    OperationStats,
    configure_logging,
    get_logger,
)

__all__ = [
    "BooleanLogger",
    "DiagnosticsLog",
    "LogEntry",
    "OperationStats",
    "configure_logging",
    "get_logger",
]
