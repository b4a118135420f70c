"""
Shared fixtures.

No test talks to a real backend: flows run on a recording in-memory
gateway, the Sheets gateway runs on a fake worksheet client.
"""

import asyncio

import pytest

from fintrack.diagnostics import DiagnosticLogger
from fintrack.gateway import Collection, GatewayError, InMemoryGateway


SEED_ROWS = {
    Collection.CATEGORIES: [
        {"id": "c-salary", "name": "Salary", "type": "income", "parent_id": None, "is_fixed": False},
        {"id": "c-rent", "name": "Rent", "type": "expense", "parent_id": None, "is_fixed": True},
        {"id": "c-bonus", "name": "Bonus", "type": "income", "parent_id": "c-salary", "is_fixed": False},
        {"id": "c-taxi", "name": "Taxi", "type": "expense", "parent_id": None, "is_fixed": False},
        {"id": "c-food", "name": "Food", "type": "expense", "parent_id": None, "is_fixed": False},
    ],
    Collection.EMPLOYEES: [
        {"id": "e-ivan", "name": "Ivan", "department": "Sales", "position": "Manager"},
    ],
    Collection.CONTRACTORS: [
        {"id": "k-acme", "name": "Acme", "type": "supplier",
         "contact_person": "Anna", "contact_email": "anna@acme.test"},
    ],
}


class RecordingGateway(InMemoryGateway):
    """In-memory gateway that records calls and can be told to fail."""

    def __init__(self, seed=None):
        super().__init__(seed)
        self.calls = []
        self.fail_insert = False
        self.fail_select = set()

    async def select(self, collection, filters=None, order=None):
        collection = Collection(collection)
        self.calls.append(("select", collection))
        if collection in self.fail_select:
            raise GatewayError("select refused", operation="select", collection=collection.value)
        return await super().select(collection, filters=filters, order=order)

    async def insert(self, collection, record):
        collection = Collection(collection)
        self.calls.append(("insert", collection, dict(record)))
        # Yield once so concurrent submits can interleave
        await asyncio.sleep(0)
        if self.fail_insert:
            raise GatewayError("insert refused", operation="insert", collection=collection.value)
        return await super().insert(collection, record)

    def count(self, operation, collection):
        return sum(
            1 for call in self.calls
            if call[0] == operation and call[1] == collection
        )

    def inserts(self, collection):
        return [call[2] for call in self.calls if call[0] == "insert" and call[1] == collection]


class RecordingLogger:
    """Stands in for the structlog logger behind DiagnosticLogger."""

    def __init__(self):
        self.records = []

    def debug(self, event, **kwargs):
        self.records.append(("debug", event, kwargs))

    def info(self, event, **kwargs):
        self.records.append(("info", event, kwargs))

    def warning(self, event, **kwargs):
        self.records.append(("warning", event, kwargs))

    def error(self, event, **kwargs):
        self.records.append(("error", event, kwargs))

    def of_type(self, event_type):
        return [
            (level, kwargs) for level, _, kwargs in self.records
            if kwargs.get("event_type") == event_type
        ]


@pytest.fixture
def run():
    return asyncio.run


@pytest.fixture
def gateway():
    return RecordingGateway(SEED_ROWS)


@pytest.fixture
def log_sink():
    return RecordingLogger()


@pytest.fixture
def diagnostics(log_sink):
    return DiagnosticLogger(logger=log_sink)
