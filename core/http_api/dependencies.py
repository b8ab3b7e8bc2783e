"""
ERP HTTP API - Dependencies
===========================
Explicit provider bundle handed to every handler.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.documents.numbering import NumberingProvider
from core.http_api.auth.provider import AuthProvider
from core.time.clock import Clock


@dataclass(frozen=True)
class HttpApiDependencies:
    auth_provider: AuthProvider
    clock: Clock
    numbering: NumberingProvider
