"""
ERP HTTP API - Contracts
========================
Response envelope shared by every handler:

    {"ok": true,  "data": ..., "meta": {...}}
    {"ok": false, "error": {"code": ..., "message": ..., "details": {...}}}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class HttpApiErrorBody:
    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details),
        }


@dataclass(frozen=True)
class HttpApiResponse:
    ok: bool
    data: Any = None
    error: Optional[HttpApiErrorBody] = None
    meta: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            payload: dict[str, Any] = {"ok": True, "data": self.data}
            if self.meta:
                payload["meta"] = dict(self.meta)
            return payload
        if self.error is None:
            raise ValueError("error must be set when ok is False.")
        return {"ok": False, "error": self.error.to_dict()}
