"""
ERP Errors — Taxonomy
=====================
Exceptions raised by services. Each class carries a stable code and the
HTTP status the transport layer answers with.
"""

from __future__ import annotations

from typing import Any, Optional

from core.errors.rejection import ReasonCode, RejectionReason


class ErpError(Exception):
    code = ReasonCode.INTERNAL_ERROR
    http_status = 500

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        policy_name: str = "service",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.policy_name = policy_name
        self.details = dict(details or {})

    def to_rejection(self) -> RejectionReason:
        return RejectionReason(
            code=self.code,
            message=self.message,
            policy_name=self.policy_name,
        )


class Unauthorized(ErpError):
    code = ReasonCode.UNAUTHORIZED
    http_status = 401


class Forbidden(ErpError):
    code = ReasonCode.FORBIDDEN
    http_status = 403


class NotFound(ErpError):
    code = ReasonCode.NOT_FOUND
    http_status = 404


class ValidationError(ErpError):
    code = ReasonCode.VALIDATION_ERROR
    http_status = 400


class NonPositiveAmount(ErpError):
    code = ReasonCode.NON_POSITIVE_AMOUNT
    http_status = 400


class InvalidTransition(ErpError):
    code = ReasonCode.INVALID_TRANSITION
    http_status = 409


class AlreadyReceived(ErpError):
    code = ReasonCode.ALREADY_RECEIVED
    http_status = 409


class Conflict(ErpError):
    code = ReasonCode.CONFLICT
    http_status = 409


class AmountExceedsBalance(ErpError):
    code = ReasonCode.AMOUNT_EXCEEDS_BALANCE
    http_status = 422


class InsufficientStock(ErpError):
    code = ReasonCode.INSUFFICIENT_STOCK
    http_status = 422


class InternalError(ErpError):
    pass


ERROR_CLASS_BY_CODE: dict[str, type[ErpError]] = {
    ReasonCode.UNAUTHORIZED: Unauthorized,
    ReasonCode.FORBIDDEN: Forbidden,
    ReasonCode.NOT_FOUND: NotFound,
    ReasonCode.VALIDATION_ERROR: ValidationError,
    ReasonCode.CONFLICT: Conflict,
    ReasonCode.NON_POSITIVE_AMOUNT: NonPositiveAmount,
    ReasonCode.AMOUNT_EXCEEDS_BALANCE: AmountExceedsBalance,
    ReasonCode.INSUFFICIENT_STOCK: InsufficientStock,
    ReasonCode.INVALID_TRANSITION: InvalidTransition,
    ReasonCode.ORDER_NOT_DELETABLE: InvalidTransition,
    ReasonCode.ORDER_NOT_APPROVED: InvalidTransition,
    ReasonCode.INVOICE_ALREADY_EXISTS: Conflict,
    ReasonCode.INVOICE_HAS_PAYMENTS: InvalidTransition,
    ReasonCode.ALREADY_RECEIVED: AlreadyReceived,
    ReasonCode.INTERNAL_ERROR: InternalError,
}

_TRANSPORT_STATUS_BY_CODE = {
    ReasonCode.METHOD_NOT_ALLOWED: 405,
}


def error_from_rejection(reason: RejectionReason) -> ErpError:
    error_class = ERROR_CLASS_BY_CODE.get(reason.code, ValidationError)
    return error_class(
        reason.message,
        code=reason.code,
        policy_name=reason.policy_name,
    )


def raise_for_rejection(reason: Optional[RejectionReason]) -> None:
    """Raise the mapped ErpError when a policy refused the operation."""
    if reason is None:
        return
    raise error_from_rejection(reason)


def http_status_for_code(code: str) -> int:
    if code in _TRANSPORT_STATUS_BY_CODE:
        return _TRANSPORT_STATUS_BY_CODE[code]
    error_class = ERROR_CLASS_BY_CODE.get(code)
    if error_class is None:
        return 400
    return error_class.http_status
