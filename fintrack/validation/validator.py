"""
Form Validation

Only two checks exist:

AMOUNT PARSING (blocking):
- The amount field is free text
- Anything that is not a finite number greater than zero is refused
  with InvalidAmount before any write is attempted

PARENT KIND (non-blocking):
- A category nested under a parent of the other kind is allowed
- It is reported as a warning issue so it can be logged

Validation NEVER silently fixes a draft.
"""

import math
from typing import Optional

from fintrack.models.entities import Category, NewCategory, ValidationIssue


class InvalidAmount(ValueError):
    """The amount text is not a usable positive number."""

    def __init__(self, text: str, reason: str):
        super().__init__(f"Invalid amount {text!r}: {reason}")
        self.text = text
        self.reason = reason


def parse_amount(text: str) -> float:
    """
    Convert user-entered amount text to a float.

    Accepts a comma as decimal separator. Surrounding whitespace is ignored.

    Raises:
        InvalidAmount: If the text is empty, non-numeric, infinite/NaN,
            or not greater than zero
    """
    cleaned = (text or "").strip().replace(",", ".")
    if not cleaned:
        raise InvalidAmount(text, "amount is empty")

    try:
        value = float(cleaned)
    except ValueError:
        raise InvalidAmount(text, "not a number") from None

    if not math.isfinite(value):
        raise InvalidAmount(text, "not a finite number")
    if value <= 0:
        raise InvalidAmount(text, "must be greater than zero")

    return value


def is_valid_amount(text: str) -> bool:
    try:
        parse_amount(text)
    except InvalidAmount:
        return False
    return True


def check_parent_kind(
    draft: NewCategory,
    categories: list[Category],
) -> Optional[ValidationIssue]:
    """
    Report a draft whose parent has a different kind.

    Returns None when there is no parent, the parent is unknown, or the
    kinds match.
    """
    if not draft.parent_id:
        return None

    parent = next((c for c in categories if c.id == draft.parent_id), None)
    if parent is None or parent.kind == draft.kind:
        return None

    return ValidationIssue(
        field="parent_id",
        issue_type="kind_mismatch",
        message=(
            f"Parent category '{parent.name}' is {parent.kind.value}, "
            f"new category is {draft.kind.value}"
        ),
        severity="warning",
    )
