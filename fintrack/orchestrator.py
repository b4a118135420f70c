"""
Component Wiring for Finance Tracker

Builds the gateway and the diagnostic logger once per process, and the
per-session flows on top of them. The presentation shell only talks to
what this module hands it.

If the spreadsheet backend is not configured the app still starts, on
an in-memory gateway, so the forms can be tried out.
"""

from typing import Optional

import structlog

from fintrack.config import get_settings
from fintrack.diagnostics import DiagnosticLogger, configure_logging
from fintrack.flows import (
    CategoryManager,
    ContractorManager,
    EmployeeManager,
    RecordManager,
    TransactionEntryFlow,
)
from fintrack.gateway import (
    DataGateway,
    GoogleSheetsClient,
    GoogleSheetsGateway,
    InMemoryGateway,
)


def create_app_components(
    use_storage: bool = True,
) -> tuple[DataGateway, DiagnosticLogger, Optional[GoogleSheetsClient]]:
    """
    Factory function to create the process-wide components.

    Args:
        use_storage: Whether to use the configured hosted backend.
                    Set to False to run on an in-memory gateway.

    Returns:
        (gateway, diagnostics, sheets_client)
    """
    app_settings = get_settings().app
    configure_logging(app_settings.log_level)
    diagnostics = DiagnosticLogger()

    if not use_storage or app_settings.backend == "memory":
        return InMemoryGateway(), diagnostics, None

    try:
        sheets_client = GoogleSheetsClient()
        gateway = GoogleSheetsGateway(sheets_client)
    except Exception as e:
        # Backend not configured - continue without it
        structlog.get_logger("fintrack").warning(
            "storage_not_configured",
            error=str(e),
        )
        return InMemoryGateway(), diagnostics, None

    return gateway, diagnostics, sheets_client


def create_entry_flow(
    gateway: DataGateway,
    diagnostics: Optional[DiagnosticLogger] = None,
) -> TransactionEntryFlow:
    return TransactionEntryFlow(gateway, diagnostics)


def create_admin_managers(
    gateway: DataGateway,
    diagnostics: Optional[DiagnosticLogger] = None,
) -> dict[str, RecordManager]:
    """One manager per admin tab, keyed by collection name."""
    managers = [
        CategoryManager(gateway, diagnostics),
        EmployeeManager(gateway, diagnostics),
        ContractorManager(gateway, diagnostics),
    ]
    return {manager.collection.value: manager for manager in managers}
