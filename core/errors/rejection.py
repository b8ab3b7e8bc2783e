"""
ERP Errors — Rejection Model
============================
Structured rejection reasons returned by policies.

A policy never raises. It returns None (allowed) or a RejectionReason
explaining the refusal. Services turn reasons into exceptions via
core.errors.raise_for_rejection.

Every rejection is:
- Deterministic (same input → same rejection)
- Machine-readable (code)
- Human-readable (message)
- Attributable (policy_name)
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RejectionReason:
    """
    Structured reason for a refused operation.

    Fields:
        code:        Machine-readable rejection code (e.g. 'INVALID_TRANSITION').
        message:     Human-readable explanation.
        policy_name: Name of the policy that caused rejection.
    """

    code: str
    message: str
    policy_name: str

    def __post_init__(self):
        if not self.code or not isinstance(self.code, str):
            raise ValueError("code must be a non-empty string.")

        if not self.message or not isinstance(self.message, str):
            raise ValueError("message must be a non-empty string.")

        if not self.policy_name or not isinstance(self.policy_name, str):
            raise ValueError("policy_name must be a non-empty string.")

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "policy_name": self.policy_name,
        }


# ══════════════════════════════════════════════════════════════
# STANDARD REJECTION CODES
# ══════════════════════════════════════════════════════════════

class ReasonCode:
    """
    Known rejection codes.

    Convention: SCREAMING_SNAKE_CASE.
    """

    # ── Authentication / authorization ────────────────────────
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"

    # ── Request shape ─────────────────────────────────────────
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"

    # ── Lifecycle ─────────────────────────────────────────────
    INVALID_TRANSITION = "INVALID_TRANSITION"
    ORDER_NOT_DELETABLE = "ORDER_NOT_DELETABLE"
    ORDER_NOT_APPROVED = "ORDER_NOT_APPROVED"
    INVOICE_ALREADY_EXISTS = "INVOICE_ALREADY_EXISTS"
    INVOICE_HAS_PAYMENTS = "INVOICE_HAS_PAYMENTS"
    ALREADY_RECEIVED = "ALREADY_RECEIVED"

    # ── Money / stock ─────────────────────────────────────────
    NON_POSITIVE_AMOUNT = "NON_POSITIVE_AMOUNT"
    AMOUNT_EXCEEDS_BALANCE = "AMOUNT_EXCEEDS_BALANCE"
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"

    # ── General ───────────────────────────────────────────────
    INTERNAL_ERROR = "INTERNAL_ERROR"
