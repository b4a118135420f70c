"""
Core Data Models for Finance Tracker

These models define the schemas for every record that crosses the
gateway boundary. They are designed to:
1. Tolerate whatever the backend returns on read (missing joins, extra columns)
2. Produce exactly the insert payload the backend expects on write
3. Keep the income/expense discriminator typed

The backend names the discriminator column `type`; the models expose it
as `kind` and alias it back to `type` on the wire.
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class EntryKind(str, Enum):
    """Discriminator shared by categories and transactions."""
    INCOME = "income"
    EXPENSE = "expense"


class ContractorKind(str, Enum):
    """Whether a contractor pays us or we pay them."""
    CLIENT = "client"
    SUPPLIER = "supplier"


CENT = Decimal("0.01")


def to_money(amount: Union[float, Decimal]) -> Decimal:
    """Convert an amount to a Decimal rounded to cents."""
    return Decimal(str(amount)).quantize(CENT, rounding=ROUND_HALF_UP)


def format_amount(amount: Union[float, Decimal]) -> str:
    """
    Render an amount the way the history list shows it.

    Rounded to cents and printed in fixed-point notation. Integral
    values print without a fractional part ("100"), others without
    trailing zeros ("150.5").
    """
    value = to_money(amount)
    if value == value.to_integral_value():
        return str(int(value))
    return format(value.normalize(), "f")


# =============================================================================
# STORED RECORDS - what the gateway returns
# =============================================================================

class StoredRecord(BaseModel):
    """Fields the backend assigns on creation."""
    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    id: str = Field(..., min_length=1, description="Backend-assigned identifier")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Category(StoredRecord):
    """
    A user-defined income or expense category.

    Categories form a tree through parent_id. The backend does not
    check that a child shares its parent's kind.
    """

    name: str
    kind: EntryKind = Field(..., alias="type")
    parent_id: Optional[str] = None
    is_fixed: bool = Field(
        default=False,
        description="Recurring/fixed spending; only meaningful for expense categories"
    )


class Employee(StoredRecord):
    name: str
    department: str = ""
    position: str = ""


class Contractor(StoredRecord):
    name: str
    kind: ContractorKind = Field(..., alias="type")
    contact_person: str = ""
    contact_email: str = ""


class Transaction(StoredRecord):
    """
    A recorded income or expense.

    On read the backend expands category/employee/contractor inline.
    Any of them may be missing (unset foreign key, or a dangling one).
    """

    kind: EntryKind = Field(..., alias="type")
    amount: float
    category_id: str
    employee_id: Optional[str] = None
    contractor_id: Optional[str] = None
    description: Optional[str] = None
    transaction_date: Optional[date] = Field(default=None, alias="date")

    category: Optional[Category] = None
    employee: Optional[Employee] = None
    contractor: Optional[Contractor] = None

    @property
    def sign(self) -> str:
        return "+" if self.kind == EntryKind.INCOME else "-"

    @property
    def category_name(self) -> str:
        return self.category.name if self.category else ""

    def display_amount(self, currency: str = "") -> str:
        """Signed amount for the history list, e.g. "-150.5 ₽"."""
        text = f"{self.sign}{format_amount(self.amount)}"
        return f"{text} {currency}" if currency else text


# =============================================================================
# DRAFTS - what forms hold before submit
# =============================================================================

class Draft(BaseModel):
    """
    An in-progress record held by a form.

    Drafts never carry id or timestamps; the backend assigns those.
    """
    model_config = ConfigDict(populate_by_name=True)

    def to_record(self) -> dict:
        """Insert payload using the backend's column names."""
        return self.model_dump(by_alias=True, mode="json")


class NewCategory(Draft):
    name: str = ""
    kind: EntryKind = Field(default=EntryKind.EXPENSE, alias="type")
    is_fixed: bool = False
    parent_id: Optional[str] = None

    @field_validator('parent_id', mode='before')
    @classmethod
    def empty_parent_is_root(cls, v):
        """An empty selection means a root category."""
        return v or None

    def to_record(self) -> dict:
        record = super().to_record()
        if self.kind != EntryKind.EXPENSE:
            record["is_fixed"] = False
        return record


class NewEmployee(Draft):
    name: str = ""
    department: str = ""
    position: str = ""


class NewContractor(Draft):
    name: str = ""
    kind: ContractorKind = Field(default=ContractorKind.CLIENT, alias="type")
    contact_person: str = ""
    contact_email: str = ""


class NewTransaction(Draft):
    """
    Insert payload for a transaction.

    Only foreign-key ids are sent; the joined objects come back on read.
    """

    kind: EntryKind = Field(..., alias="type")
    amount: float = Field(..., gt=0)
    category_id: str = Field(..., min_length=1)
    description: str = ""
    employee_id: Optional[str] = None
    contractor_id: Optional[str] = None

    def to_record(self) -> dict:
        # Optional links are omitted rather than sent as null
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


# =============================================================================
# SUMMARY / VALIDATION MODELS
# =============================================================================

class TransactionTotals(BaseModel):
    """Sums over the transactions currently on screen."""

    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")

    @property
    def balance(self) -> Decimal:
        return self.income - self.expense


class ValidationIssue(BaseModel):
    """A single non-blocking problem found in a draft."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'kind_mismatch')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
