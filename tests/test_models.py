"""
Tests for Finance Tracker models

Test strategy:
1. Unit tests for models, validation and the diagnostic channel
2. Flow tests against an in-memory gateway
3. No real backend calls in tests
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from fintrack.models import (
    Category,
    Contractor,
    ContractorKind,
    DiagnosticEvent,
    DiagnosticEventBuilder,
    DiagnosticEventType,
    DiagnosticSeverity,
    EntryKind,
    NewCategory,
    NewContractor,
    NewEmployee,
    NewTransaction,
    Transaction,
    TransactionTotals,
    format_amount,
    to_money,
)


class TestStoredRecords:
    """Tests for records read back from the gateway."""

    def test_category_reads_backend_type_column(self):
        category = Category.model_validate(
            {"id": "c1", "name": "Rent", "type": "expense", "is_fixed": True}
        )
        assert category.kind == EntryKind.EXPENSE
        assert category.parent_id is None
        assert category.is_fixed is True

    def test_category_rejects_unknown_kind(self):
        with pytest.raises(ValidationError):
            Category.model_validate({"id": "c1", "name": "X", "type": "refund"})

    def test_record_requires_id(self):
        with pytest.raises(ValidationError):
            Category.model_validate({"id": "", "name": "X", "type": "income"})

    def test_contractor_kind(self):
        contractor = Contractor.model_validate({"id": "k1", "name": "Acme", "type": "supplier"})
        assert contractor.kind == ContractorKind.SUPPLIER
        assert contractor.contact_email == ""

    def test_transaction_tolerates_missing_joins(self):
        transaction = Transaction.model_validate({
            "id": "t1",
            "type": "income",
            "amount": "200",
            "category_id": "c1",
            "category": None,
            "employee": None,
            "contractor": None,
            "date": "2024-12-01",
        })
        assert transaction.amount == 200.0
        assert transaction.category_name == ""
        assert transaction.transaction_date.isoformat() == "2024-12-01"

    def test_transaction_nested_category(self):
        transaction = Transaction.model_validate({
            "id": "t1",
            "type": "expense",
            "amount": 150.5,
            "category_id": "c1",
            "category": {"id": "c1", "name": "Taxi", "type": "expense"},
        })
        assert transaction.category_name == "Taxi"
        assert transaction.sign == "-"

    def test_extra_columns_are_ignored(self):
        contractor = Contractor.model_validate(
            {"id": "k1", "name": "Acme", "type": "client", "legacy": "x"}
        )
        assert not hasattr(contractor, "legacy")


class TestDisplay:
    """Tests for amount formatting."""

    @pytest.mark.parametrize("amount,text", [
        (150.5, "150.5"),
        (100.0, "100"),
        (0.1, "0.1"),
        (1234567.0, "1234567"),
        (-50.0, "-50"),
        (0.1 + 0.2, "0.3"),
        (2.675, "2.68"),
        (Decimal("12.50"), "12.5"),
    ])
    def test_format_amount(self, amount, text):
        assert format_amount(amount) == text

    @pytest.mark.parametrize("amount,text", [
        (0.00001, "0"),
        (0.05, "0.05"),
        (1e16, "10000000000000000"),
    ])
    def test_format_amount_is_fixed_point(self, amount, text):
        assert "e" not in format_amount(amount)
        assert format_amount(amount) == text

    def test_display_amount_signs(self):
        income = Transaction(id="t1", kind=EntryKind.INCOME, amount=10.0, category_id="c")
        expense = Transaction(id="t2", kind=EntryKind.EXPENSE, amount=2.5, category_id="c")
        assert income.display_amount("₽") == "+10 ₽"
        assert expense.display_amount() == "-2.5"

    def test_totals_balance(self):
        totals = TransactionTotals(income=Decimal("100"), expense=Decimal("30.5"))
        assert totals.balance == Decimal("69.5")

    def test_to_money_rounds_to_cents(self):
        assert to_money(0.1 + 0.2) == Decimal("0.30")
        assert to_money(150.5) == Decimal("150.50")


class TestDrafts:
    """Tests for insert payloads."""

    def test_category_defaults(self):
        assert NewCategory().to_record() == {
            "name": "",
            "type": "expense",
            "is_fixed": False,
            "parent_id": None,
        }

    def test_income_category_drops_fixed_flag(self):
        draft = NewCategory(name="Salary", kind=EntryKind.INCOME, is_fixed=True)
        assert draft.to_record()["is_fixed"] is False

    def test_employee_and_contractor_defaults(self):
        assert NewEmployee().to_record() == {"name": "", "department": "", "position": ""}
        assert NewContractor().to_record()["type"] == "client"

    def test_transaction_payload_omits_unset_links(self):
        draft = NewTransaction(kind=EntryKind.EXPENSE, amount=150.5, category_id="c1", description="taxi")
        assert draft.to_record() == {
            "type": "expense",
            "amount": 150.5,
            "category_id": "c1",
            "description": "taxi",
        }

    @pytest.mark.parametrize("amount", [0, -1])
    def test_transaction_amount_must_be_positive(self, amount):
        with pytest.raises(ValidationError):
            NewTransaction(kind=EntryKind.INCOME, amount=amount, category_id="c1")

    def test_transaction_requires_category(self):
        with pytest.raises(ValidationError):
            NewTransaction(kind=EntryKind.INCOME, amount=1, category_id="")


class TestDiagnosticEvents:
    """Tests for diagnostic event models."""

    def test_event_defaults(self):
        event = DiagnosticEvent(
            event_type=DiagnosticEventType.RECORD_CREATED,
            description="Added record",
        )
        assert event.severity == DiagnosticSeverity.INFO
        assert event.details == {}

    def test_to_log_dict(self):
        event = DiagnosticEventBuilder.save_failed(
            "transactions", "insert refused", {"amount": 1.0}
        )
        log_dict = event.to_log_dict()
        assert log_dict["event_type"] == "save_failed"
        assert log_dict["severity"] == "error"
        assert log_dict["collection"] == "transactions"
        assert log_dict["error_message"] == "insert refused"
        assert log_dict["details"]["payload"] == {"amount": 1.0}

    def test_builder_transaction_submitted(self):
        event = DiagnosticEventBuilder.transaction_submitted(
            record_id="t1", kind="expense", amount=150.5, category_id="c1",
        )
        assert event.event_type == DiagnosticEventType.TRANSACTION_SUBMITTED
        assert event.record_id == "t1"
        assert event.details["amount"] == 150.5


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
