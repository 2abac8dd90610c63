"""Shared helpers for the immutable value types."""

from __future__ import annotations

from dataclasses import fields
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterable

from financial.calculations import to_decimal


def coerce_decimals(instance: Any, names: Iterable[str]) -> None:
    """Convert the named fields of a frozen dataclass to Decimal in place.

    Raises:
        InvalidDecimalError: If any field cannot be converted
    """
    for name in names:
        object.__setattr__(instance, name, to_decimal(getattr(instance, name)))


def serialize_value(value: Any) -> Any:
    """JSON-friendly form of a model field.

    Decimals become strings so stored values round-trip exactly.
    """
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value


def to_serializable_dict(instance: Any) -> Dict[str, Any]:
    """Convert a dataclass instance to a dictionary for JSON/database storage."""
    return {f.name: serialize_value(getattr(instance, f.name)) for f in fields(instance)}
