"""
In-Memory Gateway

A dict-backed DataGateway with the same select/insert semantics as the
hosted backend. Used in tests, and by the app when no spreadsheet is
configured. Nothing survives a restart.
"""

from datetime import date, datetime, timezone
from typing import Any, Optional
from uuid import uuid4

from fintrack.gateway.interface import (
    Collection,
    DataGateway,
    GatewayError,
    Ordering,
    TRANSACTION_JOINS,
    apply_filters,
    apply_order,
    expand_joins,
)


class InMemoryGateway(DataGateway):
    """Stores each collection as a list of rows in insertion order."""

    def __init__(self, seed: Optional[dict[Collection, list[dict]]] = None):
        self._rows: dict[Collection, list[dict]] = {
            collection: [] for collection in Collection
        }
        for collection, rows in (seed or {}).items():
            self._rows[Collection(collection)].extend(dict(row) for row in rows)

    async def select(
        self,
        collection: Collection,
        filters: Optional[dict[str, Any]] = None,
        order: Optional[Ordering] = None,
    ) -> list[dict]:
        try:
            collection = Collection(collection)
        except ValueError as e:
            raise GatewayError(
                f"Unknown collection: {collection}",
                operation="select",
                collection=str(collection),
            ) from e

        rows = [dict(row) for row in self._rows[collection]]
        if collection == Collection.TRANSACTIONS:
            related = {
                target: self._rows[target]
                for _, target in TRANSACTION_JOINS.values()
            }
            rows = expand_joins(rows, related)

        return apply_order(apply_filters(rows, filters), order)

    async def insert(self, collection: Collection, record: dict) -> dict:
        try:
            collection = Collection(collection)
        except ValueError as e:
            raise GatewayError(
                f"Unknown collection: {collection}",
                operation="insert",
                collection=str(collection),
            ) from e

        now = datetime.now(timezone.utc).isoformat()
        row = {
            **record,
            "id": str(uuid4()),
            "created_at": now,
            "updated_at": now,
        }
        if collection == Collection.TRANSACTIONS and not row.get("date"):
            row["date"] = date.today().isoformat()

        self._rows[collection].append(row)
        return dict(row)
