"""Validation package."""

from fintrack.validation.validator import (
    InvalidAmount,
    check_parent_kind,
    is_valid_amount,
    parse_amount,
)

__all__ = [
    "InvalidAmount",
    "check_parent_kind",
    "is_valid_amount",
    "parse_amount",
]
