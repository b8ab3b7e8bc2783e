"""
ERP Core Primitives
===================
Framework-free value helpers shared by engines.
"""

from core.primitives.money import (
    HUNDRED,
    ZERO,
    money_str,
    percent_of,
    quantity_str,
    quantize_money,
    quantize_quantity,
)
from core.primitives.values import (
    DECIMAL_LIMIT,
    MAX_COUNT,
    canonical_optional_uuid,
    canonical_uuid,
    clean_optional_string,
    clean_string,
    percent,
    to_decimal,
    to_optional_decimal,
)

__all__ = [
    "DECIMAL_LIMIT",
    "HUNDRED",
    "MAX_COUNT",
    "ZERO",
    "canonical_optional_uuid",
    "canonical_uuid",
    "clean_optional_string",
    "clean_string",
    "money_str",
    "percent",
    "percent_of",
    "quantity_str",
    "quantize_money",
    "quantize_quantity",
    "to_decimal",
    "to_optional_decimal",
]
