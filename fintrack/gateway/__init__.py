"""
Data Gateway Package

Provides the abstract gateway interface and its implementations.
Google Sheets is the hosted backend; the in-memory gateway stands in
for it in tests and unconfigured environments.
"""

from fintrack.gateway.interface import (
    BY_NAME,
    NEWEST_FIRST,
    Collection,
    DataGateway,
    GatewayError,
    Ordering,
)
from fintrack.gateway.memory import InMemoryGateway
from fintrack.gateway.google_sheets import (
    GoogleSheetsClient,
    GoogleSheetsGateway,
)

__all__ = [
    # Interface
    "BY_NAME",
    "NEWEST_FIRST",
    "Collection",
    "DataGateway",
    "Ordering",
    # Exceptions
    "GatewayError",
    # Implementations
    "GoogleSheetsClient",
    "GoogleSheetsGateway",
    "InMemoryGateway",
]
