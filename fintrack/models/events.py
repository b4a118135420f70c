"""
Diagnostic Event Models for Finance Tracker

Every gateway failure, and every write that went through, produces one
of these events on the operator-facing diagnostic channel. The person
using the interface never sees them; they exist so an operator can tell
what happened to an abandoned action.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class DiagnosticEventType(str, Enum):
    """Types of events written to the diagnostic channel."""
    # Reads
    RECORDS_LOADED = "records_loaded"
    LOAD_FAILED = "load_failed"

    # Writes
    RECORD_CREATED = "record_created"
    TRANSACTION_SUBMITTED = "transaction_submitted"
    SAVE_FAILED = "save_failed"

    # Form guards
    SUBMIT_REJECTED = "submit_rejected"
    PARENT_KIND_MISMATCH = "parent_kind_mismatch"

    # Host
    HOST_READY = "host_ready"


class DiagnosticSeverity(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class DiagnosticEvent(BaseModel):
    """A single diagnostic event."""

    event_id: UUID = Field(default_factory=uuid4)
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    event_type: DiagnosticEventType
    severity: DiagnosticSeverity = DiagnosticSeverity.INFO

    # Which collection and record the event concerns, if any
    collection: Optional[str] = None
    record_id: Optional[str] = None

    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "collection": self.collection,
            "record_id": self.record_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class DiagnosticEventBuilder:
    """
    Helper class to build diagnostic events with common patterns.

    Usage:
        event = DiagnosticEventBuilder.load_failed("categories", "timeout")
        event = DiagnosticEventBuilder.record_created("employees", record_id)
    """

    @staticmethod
    def records_loaded(collection: str, count: int) -> DiagnosticEvent:
        return DiagnosticEvent(
            event_type=DiagnosticEventType.RECORDS_LOADED,
            severity=DiagnosticSeverity.DEBUG,
            collection=collection,
            description=f"Loaded {count} {collection}",
            details={"count": count},
        )

    @staticmethod
    def load_failed(collection: str, error_message: str) -> DiagnosticEvent:
        return DiagnosticEvent(
            event_type=DiagnosticEventType.LOAD_FAILED,
            severity=DiagnosticSeverity.ERROR,
            collection=collection,
            description=f"Error loading {collection}",
            error_message=error_message,
        )

    @staticmethod
    def record_created(collection: str, record_id: Optional[str]) -> DiagnosticEvent:
        return DiagnosticEvent(
            event_type=DiagnosticEventType.RECORD_CREATED,
            collection=collection,
            record_id=record_id,
            description=f"Added record to {collection}",
        )

    @staticmethod
    def transaction_submitted(
        record_id: Optional[str],
        kind: str,
        amount: float,
        category_id: str,
    ) -> DiagnosticEvent:
        return DiagnosticEvent(
            event_type=DiagnosticEventType.TRANSACTION_SUBMITTED,
            collection="transactions",
            record_id=record_id,
            description=f"Added {kind} transaction",
            details={
                "kind": kind,
                "amount": amount,
                "category_id": category_id,
            },
        )

    @staticmethod
    def save_failed(
        collection: str,
        error_message: str,
        payload: Optional[dict] = None,
    ) -> DiagnosticEvent:
        return DiagnosticEvent(
            event_type=DiagnosticEventType.SAVE_FAILED,
            severity=DiagnosticSeverity.ERROR,
            collection=collection,
            description=f"Error adding record to {collection}",
            details={"payload": payload or {}},
            error_message=error_message,
        )

    @staticmethod
    def submit_rejected(collection: str, reason: str) -> DiagnosticEvent:
        return DiagnosticEvent(
            event_type=DiagnosticEventType.SUBMIT_REJECTED,
            severity=DiagnosticSeverity.WARNING,
            collection=collection,
            description=f"Submit to {collection} not sent: {reason}",
            details={"reason": reason},
        )

    @staticmethod
    def parent_kind_mismatch(
        parent_id: str,
        parent_kind: str,
        child_kind: str,
    ) -> DiagnosticEvent:
        return DiagnosticEvent(
            event_type=DiagnosticEventType.PARENT_KIND_MISMATCH,
            severity=DiagnosticSeverity.WARNING,
            collection="categories",
            record_id=parent_id,
            description=(
                f"New {child_kind} category nested under {parent_kind} parent"
            ),
            details={"parent_kind": parent_kind, "child_kind": child_kind},
        )

    @staticmethod
    def host_ready() -> DiagnosticEvent:
        return DiagnosticEvent(
            event_type=DiagnosticEventType.HOST_READY,
            description="Ready signal sent to embedding host",
        )
