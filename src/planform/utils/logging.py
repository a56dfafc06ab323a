"""Logging utilities for Planform."""

import json
import logging
from collections import deque
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import structlog


@dataclass
class OperationStats:
    """Statistics from boolean operations reported through one logger."""

    subtract_count: int = 0
    union_count: int = 0
    shortcut_count: int = 0
    fallback_count: int = 0
    islands_produced: int = 0
    loops_discarded: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)


@dataclass
class LogEntry:
    """One record kept by the diagnostics log."""

    timestamp: str
    level: str
    category: str
    message: str
    data: dict[str, Any] | None = None


class DiagnosticsLog:
    """Bounded in-memory record of engine diagnostics.

    Keeps the most recent ``max_entries`` records so a host application can
    show or export what happened during recent boolean operations. Each
    instance is independent; nothing is shared at module level.
    """

    def __init__(self, max_entries: int = 1000) -> None:
        self._entries: deque[LogEntry] = deque(maxlen=max_entries)

    def info(self, category: str, message: str, **data: Any) -> None:
        self._add("INFO", category, message, data)

    def warning(self, category: str, message: str, **data: Any) -> None:
        self._add("WARN", category, message, data)

    def error(self, category: str, message: str, **data: Any) -> None:
        self._add("ERROR", category, message, data)

    def _add(self, level: str, category: str, message: str, data: dict[str, Any]) -> None:
        self._entries.append(
            LogEntry(
                timestamp=datetime.now(timezone.utc).isoformat(),
                level=level,
                category=category,
                message=message,
                data=data or None,
            )
        )

    @property
    def entries(self) -> list[LogEntry]:
        """Get a snapshot of the recorded entries, oldest first."""
        return list(self._entries)

    def clear(self) -> None:
        """Forget all recorded entries."""
        self._entries.clear()

    def dump(self, path: Path) -> None:
        """Write all entries to ``path`` as a JSON array."""
        payload = [asdict(entry) for entry in self._entries]
        path.write_text(json.dumps(payload, indent=2, default=str), encoding="utf-8")


def get_logger(name: str = "planform") -> Any:
    """Get a structlog logger for ``name``.

    Uses the pipeline installed by configure_logging when there is one.
    Otherwise events are rendered as JSON and handed to the stdlib logger of
    the same name, so the host application's logging setup decides what is
    shown.
    """
    if structlog.is_configured():
        return structlog.get_logger(name)
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
    )


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Replace handlers from an earlier call instead of stacking them
    for handler in list(root_logger.handlers):
        if getattr(handler, "_planform", False):
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        file_handler._planform = True  # type: ignore[attr-defined]
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    console_handler._planform = True  # type: ignore[attr-defined]
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("planform")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class BooleanLogger:
    """Reporting channel injected into the boolean engine.

    Forwards engine events to a structlog logger and, when one is given, to
    a DiagnosticsLog. Also keeps running statistics. Failures that the
    engine absorbs into a fallback result surface here.
    """

    CATEGORY = "BOOLEAN"

    def __init__(
        self,
        logger: Any | None = None,
        diagnostics: DiagnosticsLog | None = None,
    ) -> None:
        self._logger = logger if logger is not None else get_logger("planform.boolean")
        self._diagnostics = diagnostics
        self._stats = OperationStats()

    def log_operation_start(self, operation: str, operands: list[str]) -> None:
        """Log the start of a boolean operation."""
        self._logger.debug("Boolean operation started", operation=operation, operands=operands)
        if self._diagnostics is not None:
            self._diagnostics.info(
                self.CATEGORY, f"{operation} started", operands=operands
            )
        if operation == "subtract":
            self._stats.subtract_count += 1
        elif operation == "union":
            self._stats.union_count += 1

    def log_shortcut(self, operation: str, reason: str) -> None:
        """Log an operation resolved without stitching."""
        self._logger.debug("Boolean shortcut", operation=operation, reason=reason)
        if self._diagnostics is not None:
            self._diagnostics.info(self.CATEGORY, f"{operation} shortcut", reason=reason)
        self._stats.shortcut_count += 1

    def log_result(
        self,
        operation: str,
        islands: int,
        holes: int,
        duration_ms: float,
    ) -> None:
        """Log a successful operation."""
        self._logger.info(
            "Boolean operation complete",
            operation=operation,
            islands=islands,
            holes=holes,
            duration_ms=round(duration_ms, 2),
        )
        if self._diagnostics is not None:
            self._diagnostics.info(
                self.CATEGORY,
                f"{operation} result islands: {islands}",
                holes=holes,
            )
        self._stats.islands_produced += islands

    def log_loop_discarded(self, reason: str, count: int) -> None:
        """Log stitched work that was thrown away.

        Args:
            reason: Why the loop was dropped
            count: Points in the dropped loop, or segments left unused
        """
        self._logger.debug("Stitched loop discarded", reason=reason, count=count)
        if self._diagnostics is not None:
            self._diagnostics.warning(
                self.CATEGORY, "Stitched loop discarded", reason=reason, count=count
            )
        self._stats.loops_discarded += 1

    def log_failure(
        self,
        operation: str,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log an operation that failed and fell back to its input."""
        self._logger.error(
            "Boolean operation failed",
            operation=operation,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        if self._diagnostics is not None:
            self._diagnostics.error(
                self.CATEGORY,
                f"{operation} failed",
                error=str(error),
                error_type=type(error).__name__,
            )
        self._stats.fallback_count += 1
        self._stats.errors.append((operation, str(error)))

    @property
    def stats(self) -> OperationStats:
        """Get current operation statistics."""
        return self._stats
