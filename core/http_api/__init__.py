"""
ERP HTTP API - Public API
=========================
Framework-agnostic handlers, envelopes and the dependency bundle.
Adapters (see adapters/django_api) only translate requests.
"""

from core.http_api.contracts import HttpApiErrorBody, HttpApiResponse
from core.http_api.dependencies import HttpApiDependencies
from core.http_api.errors import (
    erp_error_response,
    error_response,
    http_status_for_payload,
    map_rejection_reason,
    rejection_response,
    success_response,
)

__all__ = [
    "HttpApiErrorBody",
    "HttpApiResponse",
    "HttpApiDependencies",
    "error_response",
    "success_response",
    "map_rejection_reason",
    "rejection_response",
    "erp_error_response",
    "http_status_for_payload",
]
