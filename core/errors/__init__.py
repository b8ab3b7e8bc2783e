"""
ERP Errors — Public API
=======================
"""

from core.errors.rejection import ReasonCode, RejectionReason
from core.errors.taxonomy import (
    ERROR_CLASS_BY_CODE,
    AlreadyReceived,
    AmountExceedsBalance,
    Conflict,
    ErpError,
    Forbidden,
    InsufficientStock,
    InternalError,
    InvalidTransition,
    NonPositiveAmount,
    NotFound,
    Unauthorized,
    ValidationError,
    error_from_rejection,
    http_status_for_code,
    raise_for_rejection,
)

__all__ = [
    "ERROR_CLASS_BY_CODE",
    "AlreadyReceived",
    "AmountExceedsBalance",
    "Conflict",
    "ErpError",
    "Forbidden",
    "InsufficientStock",
    "InternalError",
    "InvalidTransition",
    "NonPositiveAmount",
    "NotFound",
    "ReasonCode",
    "RejectionReason",
    "Unauthorized",
    "ValidationError",
    "error_from_rejection",
    "http_status_for_code",
    "raise_for_rejection",
]
