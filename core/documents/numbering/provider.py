"""
ERP Documents - Numbering Provider
==================================
Protocol + InMemory implementation for policy lookup and sequence advance.

- The provider is the dependency injection point (testable, swappable).
- InMemory provider is deterministic and used in tests.
- DbNumberingProvider persists sequences in erp_document_sequences.
"""

from __future__ import annotations

import threading
from datetime import datetime
from typing import Iterable, Optional, Protocol

from core.documents.numbering.engine import SequenceState
from core.documents.numbering.models import DEFAULT_POLICIES, NumberingPolicy


class NumberingProvider(Protocol):
    def get_policy(self, doc_type: str) -> Optional[NumberingPolicy]:
        """Return the NumberingPolicy for doc_type, or None if not configured."""
        ...

    def get_and_advance(
        self,
        *,
        policy: NumberingPolicy,
        issued_at: datetime,
    ) -> str:
        """Atomically get the next document number and advance the sequence."""
        ...


def _index_policies(policies: Iterable[NumberingPolicy]) -> dict[str, NumberingPolicy]:
    indexed: dict[str, NumberingPolicy] = {}
    for policy in policies:
        indexed[policy.doc_type] = policy
    return indexed


def issue_document_number(
    provider: NumberingProvider,
    doc_type: str,
    issued_at: datetime,
) -> str:
    policy = provider.get_policy(doc_type)
    if policy is None:
        raise LookupError(f"No numbering policy configured for '{doc_type}'.")
    return provider.get_and_advance(policy=policy, issued_at=issued_at)


class InMemoryNumberingProvider:
    """
    Thread-safe in-memory numbering provider.
    """

    def __init__(self, policies: tuple[NumberingPolicy, ...] = DEFAULT_POLICIES):
        self._lock = threading.Lock()
        self._policies = _index_policies(policies)
        self._states: dict[str, SequenceState] = {
            doc_type: SequenceState(policy)
            for doc_type, policy in self._policies.items()
        }

    def get_policy(self, doc_type: str) -> Optional[NumberingPolicy]:
        return self._policies.get(doc_type)

    def get_and_advance(
        self,
        *,
        policy: NumberingPolicy,
        issued_at: datetime,
    ) -> str:
        with self._lock:
            state = self._states.get(policy.doc_type)
            if state is None:
                state = SequenceState(policy)
            doc_number, new_state = state.next_number(issued_at)
            self._states[policy.doc_type] = new_state
            return doc_number


class DbNumberingProvider:
    """
    Sequence state in the database. The sequence row is locked for the
    rest of the caller's transaction, so two requests never share a number.
    """

    def __init__(self, policies: tuple[NumberingPolicy, ...] = DEFAULT_POLICIES):
        self._policies = _index_policies(policies)

    def get_policy(self, doc_type: str) -> Optional[NumberingPolicy]:
        return self._policies.get(doc_type)

    def get_and_advance(
        self,
        *,
        policy: NumberingPolicy,
        issued_at: datetime,
    ) -> str:
        from django.db import transaction

        from core.documents.models import DocumentSequence

        with transaction.atomic():
            row, _ = DocumentSequence.objects.select_for_update().get_or_create(
                doc_type=policy.doc_type,
                defaults={"period_key": "", "next_sequence": policy.start_at},
            )
            state = SequenceState(
                policy,
                current_period_key=row.period_key,
                current_sequence=row.next_sequence,
            )
            doc_number, new_state = state.next_number(issued_at)
            row.period_key = new_state.current_period_key
            row.next_sequence = new_state.current_sequence
            row.save(update_fields=["period_key", "next_sequence", "updated_at"])
        return doc_number
