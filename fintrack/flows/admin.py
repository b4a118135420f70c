"""
Admin Record Managers

Categories, employees and contractors are all managed the same way:

1. On activation, read-all the collection ordered by name
2. Hold one draft, edited field by field
3. On submit, insert the draft; on success reset it and read-all again

A failed insert leaves both the draft and the list untouched.
There is no update or delete.
"""

from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel

from fintrack.diagnostics import DiagnosticLogger
from fintrack.flows.base import load_records
from fintrack.gateway import BY_NAME, Collection, DataGateway, GatewayError
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
    StoredRecord,
)
from fintrack.validation import check_parent_kind


DraftT = TypeVar("DraftT", bound=Draft)
RecordT = TypeVar("RecordT", bound=StoredRecord)


class RecordManager(Generic[DraftT, RecordT]):
    """
    Generic create+list panel state.

    Subclasses name the collection, the draft model and the record model,
    and say how a record is described in the list.
    """

    collection: Collection
    draft_model: type[DraftT]
    record_model: type[RecordT]

    def __init__(
        self,
        gateway: DataGateway,
        diagnostics: Optional[DiagnosticLogger] = None,
    ):
        self._gateway = gateway
        self._diagnostics = diagnostics or DiagnosticLogger()
        self.records: list[RecordT] = []
        self.draft: DraftT = self.draft_model()
        self._submitting = False

    async def load(self) -> bool:
        """Replace the visible list. Returns False if the read failed."""
        records = await load_records(
            self._gateway, self.collection, self.record_model, BY_NAME, self._diagnostics
        )
        if records is None:
            return False
        self.records = records
        return True

    def _field_name(self, field: str) -> str:
        fields = self.draft_model.model_fields
        if field in fields:
            return field
        for name, info in fields.items():
            if info.alias == field:
                return name
        raise KeyError(field)

    def update_draft(self, field: str, value: Any) -> None:
        """
        Replace one draft field.

        The draft model coerces the value (checkbox -> bool,
        select -> enum). Accepts field names or backend column names.

        Raises:
            KeyError: If the draft has no such field
            pydantic.ValidationError: If the value cannot be coerced
        """
        name = self._field_name(field)
        data = self.draft.model_dump()
        data[name] = value
        self.draft = self.draft_model.model_validate(data)

    def reset_draft(self) -> None:
        self.draft = self.draft_model()

    @property
    def submitting(self) -> bool:
        return self._submitting

    def _before_submit(self) -> None:
        """Hook for non-blocking checks on the draft."""

    async def submit(self) -> bool:
        """
        Insert the draft.

        Returns True if it was stored (draft reset, list reloaded),
        False if the gateway failed or a submit is already in flight.
        """
        if self._submitting:
            self._diagnostics.log_submit_rejected(
                self.collection.value, "previous submission still in flight"
            )
            return False

        self._before_submit()
        record = self.draft.to_record()

        self._submitting = True
        try:
            stored = await self._gateway.insert(self.collection, record)
        except GatewayError as e:
            self._diagnostics.log_save_failed(self.collection.value, e, record)
            return False
        finally:
            self._submitting = False

        self._diagnostics.log_record_created(self.collection.value, stored.get("id"))
        self.reset_draft()
        await self.load()
        return True

    def describe(self, record: RecordT) -> list[str]:
        """Secondary lines shown under the record's name."""
        return []


class ParentOption(BaseModel):
    """One entry of the parent-category selector."""

    id: Optional[str] = None
    label: str


NO_PARENT = ParentOption(id=None, label="No parent category")


class CategoryManager(RecordManager[NewCategory, Category]):
    collection = Collection.CATEGORIES
    draft_model = NewCategory
    record_model = Category

    @property
    def parent_options(self) -> list[ParentOption]:
        """
        "No parent" first, then every category sharing the draft's kind.
        """
        return [NO_PARENT] + [
            ParentOption(id=category.id, label=category.name)
            for category in self.records
            if category.kind == self.draft.kind
        ]

    @property
    def shows_fixed_flag(self) -> bool:
        return self.draft.kind == EntryKind.EXPENSE

    def _before_submit(self) -> None:
        # Mismatched nesting is allowed; only reported.
        issue = check_parent_kind(self.draft, self.records)
        if issue is not None:
            parent = next(c for c in self.records if c.id == self.draft.parent_id)
            self._diagnostics.log_parent_kind_mismatch(
                parent_id=parent.id,
                parent_kind=parent.kind.value,
                child_kind=self.draft.kind.value,
            )

    def describe(self, record: Category) -> list[str]:
        if record.kind == EntryKind.INCOME:
            return ["Income"]
        return ["Expense (Fixed)" if record.is_fixed else "Expense (Variable)"]


class EmployeeManager(RecordManager[NewEmployee, Employee]):
    collection = Collection.EMPLOYEES
    draft_model = NewEmployee
    record_model = Employee

    def describe(self, record: Employee) -> list[str]:
        return [f"{record.department} - {record.position}"]


class ContractorManager(RecordManager[NewContractor, Contractor]):
    collection = Collection.CONTRACTORS
    draft_model = NewContractor
    record_model = Contractor

    def describe(self, record: Contractor) -> list[str]:
        kind = "Client" if record.kind == ContractorKind.CLIENT else "Supplier"
        return [kind, f"{record.contact_person} - {record.contact_email}"]
