"""Shared read path for flows and managers."""

from typing import Optional, TypeVar

from pydantic import BaseModel, ValidationError

from fintrack.diagnostics import DiagnosticLogger
from fintrack.gateway import Collection, DataGateway, GatewayError, Ordering


RecordT = TypeVar("RecordT", bound=BaseModel)


async def load_records(
    gateway: DataGateway,
    collection: Collection,
    model: type[RecordT],
    order: Optional[Ordering],
    diagnostics: DiagnosticLogger,
) -> Optional[list[RecordT]]:
    """
    Read-all one collection and parse the rows.

    Returns None if the gateway failed (already logged), so the caller
    can keep whatever it was showing. Rows that do not parse are skipped.
    """
    try:
        rows = await gateway.select(collection, order=order)
    except GatewayError as e:
        diagnostics.log_load_failed(collection.value, e)
        return None

    records = []
    for row in rows:
        try:
            records.append(model.model_validate(row))
        except ValidationError:
            continue  # Skip malformed rows

    diagnostics.log_records_loaded(collection.value, len(records))
    return records
