"""Logging utilities for compassrule."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

# Handlers installed by configure_logging, replaced on reconfiguration
_installed_handlers: list[logging.Handler] = []


@dataclass
class PropagationStats:
    """Statistics accumulated over propagation batches."""

    batch_count: int = 0
    entities_updated: int = 0
    bindings_degraded: int = 0
    intersections_skipped: int = 0
    durations_ms: list[float] = field(default_factory=list)
    degraded_ids: list[str] = field(default_factory=list)

    @property
    def avg_batch_time_ms(self) -> float | None:
        """Average batch duration in milliseconds."""
        if not self.durations_ms:
            return None
        return sum(self.durations_ms) / len(self.durations_ms)

    @property
    def max_batch_time_ms(self) -> float | None:
        """Slowest batch duration in milliseconds."""
        if not self.durations_ms:
            return None
        return max(self.durations_ms)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (file logging disabled if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        _installed_handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    _installed_handlers.append(console_handler)

    root_logger.setLevel(logging.DEBUG)
    for handler in _installed_handlers:
        root_logger.addHandler(handler)

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

    logger = structlog.get_logger("compassrule")
    logger.debug(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class PropagationLogger:
    """Logger for tracking propagation batches and binding degradations."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = PropagationStats()

    def log_batch(
        self,
        start_id: str,
        shift: tuple[float, float],
        updated: int,
        duration_ms: float,
    ) -> None:
        """Log a completed propagation batch."""
        self._logger.debug(
            "Propagation applied",
            start=start_id,
            shift=shift,
            updated=updated,
            duration_ms=round(duration_ms, 3),
        )
        self._stats.batch_count += 1
        self._stats.entities_updated += updated
        self._stats.durations_ms.append(duration_ms)

    def log_binding_degraded(self, point_id: str) -> None:
        """Log a binding rule downgraded to free because its target is gone."""
        self._logger.warning("Binding degraded to free point", point=point_id)
        self._stats.bindings_degraded += 1
        self._stats.degraded_ids.append(point_id)

    def log_intersection_skipped(self, point_id: str) -> None:
        """Log an intersection point that kept its position this batch."""
        self._logger.debug("Intersection not found, point kept in place", point=point_id)
        self._stats.intersections_skipped += 1

    def log_snap(self, point_id: str, binding_type: str) -> None:
        """Log the binding chosen for a created or released point."""
        self._logger.debug("Point snapped", point=point_id, binding=binding_type)

    def log_entity_removed(self, entity_id: str, detached: int) -> None:
        """Log entity removal and the number of dependency edges removed."""
        self._logger.info("Entity removed", entity=entity_id, detached_edges=detached)

    @property
    def stats(self) -> PropagationStats:
        """Get current propagation statistics."""
        return self._stats
