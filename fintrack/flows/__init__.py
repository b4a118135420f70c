"""View-state flows driven by the presentation shell."""

from fintrack.flows.admin import (
    NO_PARENT,
    CategoryManager,
    ContractorManager,
    EmployeeManager,
    ParentOption,
    RecordManager,
)
from fintrack.flows.entry import EntryView, TransactionEntryFlow

__all__ = [
    "NO_PARENT",
    "CategoryManager",
    "ContractorManager",
    "EmployeeManager",
    "EntryView",
    "ParentOption",
    "RecordManager",
    "TransactionEntryFlow",
]
