"""Tests for amount parsing and the parent-kind check."""

import pytest

from fintrack.models import Category, EntryKind, NewCategory
from fintrack.validation import (
    InvalidAmount,
    check_parent_kind,
    is_valid_amount,
    parse_amount,
)


class TestParseAmount:
    """Tests for free-text amount parsing."""

    @pytest.mark.parametrize("text,value", [
        ("150.5", 150.5),
        ("100", 100.0),
        ("  42 ", 42.0),
        ("12,75", 12.75),
        ("1e3", 1000.0),
    ])
    def test_valid_amounts(self, text, value):
        assert parse_amount(text) == value
        assert is_valid_amount(text) is True

    @pytest.mark.parametrize("text,reason", [
        ("", "amount is empty"),
        ("   ", "amount is empty"),
        ("abc", "not a number"),
        ("1.2.3", "not a number"),
        ("nan", "not a finite number"),
        ("-inf", "not a finite number"),
        ("0", "must be greater than zero"),
        ("-10", "must be greater than zero"),
    ])
    def test_invalid_amounts(self, text, reason):
        with pytest.raises(InvalidAmount) as exc_info:
            parse_amount(text)
        assert exc_info.value.reason == reason
        assert exc_info.value.text == text
        assert is_valid_amount(text) is False

    def test_invalid_amount_is_value_error(self):
        with pytest.raises(ValueError):
            parse_amount("x")


class TestParentKind:
    """Mismatched nesting is reported, never fixed."""

    @pytest.fixture
    def categories(self):
        return [
            Category(id="c-rent", name="Rent", kind=EntryKind.EXPENSE),
            Category(id="c-salary", name="Salary", kind=EntryKind.INCOME),
        ]

    def test_root_category_has_no_issue(self, categories):
        assert check_parent_kind(NewCategory(name="X"), categories) is None

    def test_matching_parent_has_no_issue(self, categories):
        draft = NewCategory(name="Utilities", parent_id="c-rent")
        assert check_parent_kind(draft, categories) is None

    def test_unknown_parent_has_no_issue(self, categories):
        draft = NewCategory(name="X", parent_id="gone")
        assert check_parent_kind(draft, categories) is None

    def test_mismatch_is_a_warning(self, categories):
        draft = NewCategory(name="Tips", kind=EntryKind.INCOME, parent_id="c-rent")
        issue = check_parent_kind(draft, categories)

        assert issue is not None
        assert issue.severity == "warning"
        assert issue.issue_type == "kind_mismatch"
        assert issue.field == "parent_id"
        assert draft.parent_id == "c-rent"
