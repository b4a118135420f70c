"""
Abstract Data Gateway

The hosted backend is reached only through this interface. It exposes
two operations over named collections:

    select(collection, filters, order) -> rows
    insert(collection, record)         -> stored row

There is no update, delete or batch operation. The backend assigns ids
and timestamps. For transactions, select expands the category, employee
and contractor rows inline next to their foreign keys.

Rows are plain dicts keyed by backend column names; turning them into
models is the caller's job.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel


class Collection(str, Enum):
    """Named collections on the backend."""
    CATEGORIES = "categories"
    EMPLOYEES = "employees"
    CONTRACTORS = "contractors"
    TRANSACTIONS = "transactions"


# Foreign key -> (nested key, referenced collection) for transaction reads
TRANSACTION_JOINS = {
    "category_id": ("category", Collection.CATEGORIES),
    "employee_id": ("employee", Collection.EMPLOYEES),
    "contractor_id": ("contractor", Collection.CONTRACTORS),
}


class Ordering(BaseModel):
    """Sort order for select."""

    field: str
    descending: bool = False


BY_NAME = Ordering(field="name")
NEWEST_FIRST = Ordering(field="created_at", descending=True)


class GatewayError(Exception):
    """
    Any failure from select or insert.

    Network failures, rejected records and permission problems are not
    told apart; callers only learn that the operation did not happen.
    """

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        collection: Optional[str] = None,
    ):
        super().__init__(message)
        self.operation = operation
        self.collection = collection


class DataGateway(ABC):
    """
    Abstract interface for the hosted data backend.

    Any backend implementation (Google Sheets, in-memory, ...)
    must implement these methods.
    """

    @abstractmethod
    async def select(
        self,
        collection: Collection,
        filters: Optional[dict[str, Any]] = None,
        order: Optional[Ordering] = None,
    ) -> list[dict]:
        """
        Read all rows of a collection.

        Args:
            collection: Collection to read
            filters: Column -> value equality filters
            order: Column to sort on; sorting is stable

        Returns:
            Matching rows. Transaction rows carry `category`, `employee`
            and `contractor` keys holding the joined row or None.

        Raises:
            GatewayError: If the read fails
        """
        pass

    @abstractmethod
    async def insert(
        self,
        collection: Collection,
        record: dict,
    ) -> dict:
        """
        Append one record.

        Args:
            collection: Collection to write
            record: Column values without id or timestamps

        Returns:
            The stored row including backend-assigned fields

        Raises:
            GatewayError: If the write fails
        """
        pass


def apply_filters(rows: list[dict], filters: Optional[dict[str, Any]]) -> list[dict]:
    """Keep rows whose columns equal every filter value."""
    if not filters:
        return list(rows)
    return [
        row for row in rows
        if all(row.get(key) == value for key, value in filters.items())
    ]


def apply_order(rows: list[dict], order: Optional[Ordering]) -> list[dict]:
    """
    Stable sort on one column.

    Rows missing the column sort first (last when descending).
    """
    if order is None:
        return list(rows)

    def sort_key(row: dict):
        value = row.get(order.field)
        return (value is not None, value if value is not None else "")

    return sorted(rows, key=sort_key, reverse=order.descending)


def expand_joins(
    rows: list[dict],
    related: dict[Collection, list[dict]],
) -> list[dict]:
    """
    Inline the referenced rows into each transaction row.

    An unset or dangling foreign key yields None under the nested key.
    """
    index = {
        collection: {row.get("id"): row for row in related_rows}
        for collection, related_rows in related.items()
    }
    expanded = []
    for row in rows:
        row = dict(row)
        for fk, (nested_key, collection) in TRANSACTION_JOINS.items():
            ref = row.get(fk)
            target = index.get(collection, {}).get(ref) if ref else None
            row[nested_key] = dict(target) if target else None
        expanded.append(row)
    return expanded
