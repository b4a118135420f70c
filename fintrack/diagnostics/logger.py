"""
Diagnostic Logger

The operator-facing diagnostic channel. Gateway failures are caught
where they happen and written here; the person using the interface sees
nothing and the form stays as it was.

Events go to a structlog logger rendered as JSON lines.
"""

import logging
from typing import Any, Optional

import structlog

from fintrack.models.events import (
    DiagnosticEvent,
    DiagnosticEventBuilder,
    DiagnosticSeverity,
)


# Configure structlog for local logging
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
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route stdlib logging (and so structlog) to stderr at the given level."""
    logging.basicConfig(format="%(message)s", level=getattr(logging, level.upper()))


class DiagnosticLogger:
    """
    Writes diagnostic events.

    The level each event is logged at follows its severity.
    """

    def __init__(self, logger: Optional[Any] = None):
        """
        Args:
            logger: Anything with debug/info/warning/error methods.
                    Defaults to a structlog logger.
        """
        self._logger = logger or structlog.get_logger("fintrack")

    def log(self, event: DiagnosticEvent) -> None:
        log_dict = event.to_log_dict()

        if event.severity == DiagnosticSeverity.ERROR:
            self._logger.error("diagnostic_event", **log_dict)
        elif event.severity == DiagnosticSeverity.WARNING:
            self._logger.warning("diagnostic_event", **log_dict)
        elif event.severity == DiagnosticSeverity.DEBUG:
            self._logger.debug("diagnostic_event", **log_dict)
        else:
            self._logger.info("diagnostic_event", **log_dict)

    def log_records_loaded(self, collection: str, count: int) -> None:
        self.log(DiagnosticEventBuilder.records_loaded(collection, count))

    def log_load_failed(self, collection: str, error: Exception) -> None:
        self.log(DiagnosticEventBuilder.load_failed(collection, str(error)))

    def log_record_created(self, collection: str, record_id: Optional[str]) -> None:
        self.log(DiagnosticEventBuilder.record_created(collection, record_id))

    def log_transaction_submitted(
        self,
        record_id: Optional[str],
        kind: str,
        amount: float,
        category_id: str,
    ) -> None:
        self.log(DiagnosticEventBuilder.transaction_submitted(
            record_id=record_id,
            kind=kind,
            amount=amount,
            category_id=category_id,
        ))

    def log_save_failed(
        self,
        collection: str,
        error: Exception,
        payload: Optional[dict] = None,
    ) -> None:
        self.log(DiagnosticEventBuilder.save_failed(collection, str(error), payload))

    def log_submit_rejected(self, collection: str, reason: str) -> None:
        self.log(DiagnosticEventBuilder.submit_rejected(collection, reason))

    def log_parent_kind_mismatch(
        self,
        parent_id: str,
        parent_kind: str,
        child_kind: str,
    ) -> None:
        self.log(DiagnosticEventBuilder.parent_kind_mismatch(
            parent_id=parent_id,
            parent_kind=parent_kind,
            child_kind=child_kind,
        ))

    def log_host_ready(self) -> None:
        self.log(DiagnosticEventBuilder.host_ready())
