"""
Transaction Entry Flow

The one stateful piece of the interface:

    MAIN --choose_kind--> CATEGORY_SELECT --select_category--> (details shown)
      ^                        |                                   |
      +--------- back ---------+                                   |
      +------------------- submit (success) -----------------------+

Details (amount, description, optional employee/contractor) are not a
separate screen; they appear inside CATEGORY_SELECT once a category is
picked.

Every successful submit is one insert followed by one read-all of
transactions. Nothing is patched into the local list; it only reflects
the backend after the reload. A failed insert changes nothing locally.
"""

from enum import Enum
from typing import Optional

from fintrack.diagnostics import DiagnosticLogger
from fintrack.flows.base import load_records
from fintrack.gateway import (
    BY_NAME,
    NEWEST_FIRST,
    Collection,
    DataGateway,
    GatewayError,
)
from fintrack.models.entities import (
    Category,
    Contractor,
    Employee,
    EntryKind,
    NewTransaction,
    Transaction,
    TransactionTotals,
    to_money,
)
from fintrack.validation import InvalidAmount, is_valid_amount, parse_amount


class EntryView(str, Enum):
    MAIN = "main"
    CATEGORY_SELECT = "category_select"


class TransactionEntryFlow:
    """
    View state for recording a transaction.

    The flow owns its lists and draft exclusively. Lists are disposable
    copies of backend state, replaced wholesale on every load.
    """

    def __init__(
        self,
        gateway: DataGateway,
        diagnostics: Optional[DiagnosticLogger] = None,
    ):
        self._gateway = gateway
        self._diagnostics = diagnostics or DiagnosticLogger()

        self.view = EntryView.MAIN
        self.kind: Optional[EntryKind] = None

        # Backend copies
        self.categories: list[Category] = []
        self.transactions: list[Transaction] = []
        self.employees: list[Employee] = []
        self.contractors: list[Contractor] = []

        # Draft
        self.selected_category_id: Optional[str] = None
        self.amount = ""
        self.description = ""
        self.employee_id: Optional[str] = None
        self.contractor_id: Optional[str] = None

        self._submitting = False

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load(self) -> None:
        """Everything the flow shows, read once on mount."""
        await self.load_categories()
        await self.load_transactions()
        await self.load_employees()
        await self.load_contractors()

    async def load_categories(self) -> None:
        records = await load_records(
            self._gateway, Collection.CATEGORIES, Category, BY_NAME, self._diagnostics
        )
        if records is not None:
            self.categories = records

    async def load_transactions(self) -> None:
        records = await load_records(
            self._gateway, Collection.TRANSACTIONS, Transaction, NEWEST_FIRST, self._diagnostics
        )
        if records is not None:
            self.transactions = records

    async def load_employees(self) -> None:
        records = await load_records(
            self._gateway, Collection.EMPLOYEES, Employee, BY_NAME, self._diagnostics
        )
        if records is not None:
            self.employees = records

    async def load_contractors(self) -> None:
        records = await load_records(
            self._gateway, Collection.CONTRACTORS, Contractor, BY_NAME, self._diagnostics
        )
        if records is not None:
            self.contractors = records

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def choose_kind(self, kind: EntryKind) -> None:
        """MAIN -> CATEGORY_SELECT for the chosen kind."""
        self.kind = EntryKind(kind)
        self.selected_category_id = None
        self.view = EntryView.CATEGORY_SELECT

    @property
    def visible_categories(self) -> list[Category]:
        """Exactly the categories of the chosen kind, in loaded order."""
        if self.kind is None:
            return []
        return [c for c in self.categories if c.kind == self.kind]

    def select_category(self, category_id: str) -> None:
        if category_id not in {c.id for c in self.visible_categories}:
            raise ValueError(f"Category {category_id!r} is not selectable here")
        self.selected_category_id = category_id

    @property
    def details_visible(self) -> bool:
        return (
            self.view == EntryView.CATEGORY_SELECT
            and self.selected_category_id is not None
        )

    def set_amount(self, text: str) -> None:
        self.amount = text or ""

    def set_description(self, text: str) -> None:
        self.description = text or ""

    def set_employee(self, employee_id: Optional[str]) -> None:
        if employee_id and employee_id not in {e.id for e in self.employees}:
            raise ValueError(f"Unknown employee {employee_id!r}")
        self.employee_id = employee_id or None

    def set_contractor(self, contractor_id: Optional[str]) -> None:
        if contractor_id and contractor_id not in {c.id for c in self.contractors}:
            raise ValueError(f"Unknown contractor {contractor_id!r}")
        self.contractor_id = contractor_id or None

    def back(self) -> None:
        """CATEGORY_SELECT -> MAIN, dropping everything in progress."""
        self._reset_draft()
        self.kind = None
        self.view = EntryView.MAIN

    def _reset_draft(self) -> None:
        self.selected_category_id = None
        self.amount = ""
        self.description = ""
        self.employee_id = None
        self.contractor_id = None

    # ------------------------------------------------------------------
    # Submit
    # ------------------------------------------------------------------

    @property
    def submitting(self) -> bool:
        return self._submitting

    @property
    def can_submit(self) -> bool:
        return (
            not self._submitting
            and self.selected_category_id is not None
            and is_valid_amount(self.amount)
        )

    @property
    def amount_error(self) -> Optional[str]:
        """Why the typed amount is unusable, or None while empty or fine."""
        if not self.amount.strip():
            return None
        try:
            parse_amount(self.amount)
        except InvalidAmount as e:
            return e.reason
        return None

    async def submit(self) -> bool:
        """
        Insert the draft as a transaction.

        Returns True if the transaction was stored. Returns False, with
        no write, when amount or category is missing, when another
        submit is still in flight, or when the gateway fails.

        Raises:
            InvalidAmount: If the amount text is present but unusable
        """
        if self._submitting:
            self._diagnostics.log_submit_rejected(
                Collection.TRANSACTIONS.value, "previous submission still in flight"
            )
            return False

        if not self.amount.strip() or not self.selected_category_id or self.kind is None:
            return False

        try:
            amount = parse_amount(self.amount)
        except InvalidAmount as e:
            self._diagnostics.log_submit_rejected(Collection.TRANSACTIONS.value, e.reason)
            raise

        draft = NewTransaction(
            kind=self.kind,
            amount=amount,
            category_id=self.selected_category_id,
            description=self.description,
            employee_id=self.employee_id,
            contractor_id=self.contractor_id,
        )
        record = draft.to_record()

        self._submitting = True
        try:
            stored = await self._gateway.insert(Collection.TRANSACTIONS, record)
        except GatewayError as e:
            self._diagnostics.log_save_failed(Collection.TRANSACTIONS.value, e, record)
            return False
        finally:
            self._submitting = False

        self._diagnostics.log_transaction_submitted(
            record_id=stored.get("id"),
            kind=draft.kind.value,
            amount=draft.amount,
            category_id=draft.category_id,
        )

        self._reset_draft()
        self.kind = None
        self.view = EntryView.MAIN
        await self.load_transactions()
        return True

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------

    def totals(self) -> TransactionTotals:
        """Income and expense sums over the loaded history."""
        totals = TransactionTotals()
        for transaction in self.transactions:
            # Summed in Decimal so cents add up exactly
            amount = to_money(transaction.amount)
            if transaction.kind == EntryKind.INCOME:
                totals.income += amount
            else:
                totals.expense += amount
        return totals
