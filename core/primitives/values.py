"""
ERP Core Primitives — Value Cleaning
====================================
Normalization helpers shared by request contracts and services.
All helpers raise ValueError with a field-named message.
"""

from __future__ import annotations

import uuid
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

# Inputs must fit the narrowest stored column (12 digits, 2 decimal places).
MAX_INTEGER_DIGITS = 10
DECIMAL_LIMIT = Decimal(10) ** MAX_INTEGER_DIGITS

# Upper bound for whole-number counts (item quantities, days).
MAX_COUNT = 1_000_000


def clean_string(value: Any, *, field_name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a non-empty string.")
    cleaned = value.strip()
    if not cleaned:
        raise ValueError(f"{field_name} must be a non-empty string.")
    return cleaned


def clean_optional_string(value: Any, *, default: str = "") -> str:
    if value is None:
        return default
    cleaned = str(value).strip()
    return cleaned or default


def canonical_uuid(value: Any, *, field_name: str) -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value).strip())
    except Exception as exc:
        raise ValueError(f"{field_name} must be a valid UUID.") from exc


def canonical_optional_uuid(value: Any, *, field_name: str) -> Optional[uuid.UUID]:
    if value is None or value == "":
        return None
    return canonical_uuid(value, field_name=field_name)


def to_decimal(value: Any, *, field_name: str) -> Decimal:
    """Accept int, str or Decimal. Floats go through str() to avoid binary noise."""
    if isinstance(value, bool):
        raise ValueError(f"{field_name} must be a number.")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise ValueError(f"{field_name} must be a number.") from exc
    else:
        raise ValueError(f"{field_name} must be a number.")
    if not result.is_finite():
        raise ValueError(f"{field_name} must be a finite number.")
    if abs(result) >= DECIMAL_LIMIT:
        raise ValueError(
            f"{field_name} must have at most {MAX_INTEGER_DIGITS} digits before the decimal point."
        )
    return result


def to_optional_decimal(value: Any, *, field_name: str) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    return to_decimal(value, field_name=field_name)


def percent(value: Any, *, field_name: str) -> Decimal:
    result = to_decimal(value, field_name=field_name)
    if result < 0 or result > 100:
        raise ValueError(f"{field_name} must be between 0 and 100.")
    return result
