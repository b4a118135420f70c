"""
Data Models Package

This package contains all Pydantic models used in the Finance Tracker.
Everything read from or written to the gateway goes through these schemas.
"""

from fintrack.models.entities import (
    Category,
    Contractor,
    ContractorKind,
    Draft,
    Employee,
    EntryKind,
    NewCategory,
    NewContractor,
    NewEmployee,
    NewTransaction,
    StoredRecord,
    Transaction,
    TransactionTotals,
    ValidationIssue,
    format_amount,
    to_money,
)
from fintrack.models.events import (
    DiagnosticEvent,
    DiagnosticEventBuilder,
    DiagnosticEventType,
    DiagnosticSeverity,
)

__all__ = [
    # Entity models
    "Category",
    "Contractor",
    "ContractorKind",
    "Draft",
    "Employee",
    "EntryKind",
    "NewCategory",
    "NewContractor",
    "NewEmployee",
    "NewTransaction",
    "StoredRecord",
    "Transaction",
    "TransactionTotals",
    "ValidationIssue",
    "format_amount",
    "to_money",
    # Diagnostic models
    "DiagnosticEvent",
    "DiagnosticEventBuilder",
    "DiagnosticEventType",
    "DiagnosticSeverity",
]
