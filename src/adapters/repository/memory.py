"""
In-memory repository adapter - Implements RegistrationRepository protocol.

Process-local store for development and tests. A single lock guards the
compare-and-insert so the (email, event) uniqueness guarantee matches the
PostgreSQL adapter within one process.
"""

import threading
from dataclasses import replace
from datetime import UTC, datetime

from src.domain.models import Registration


class InMemoryRegistrationRepository:
    """
    Implements RegistrationRepository protocol with dictionaries.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_id: dict[str, Registration] = {}
        self._by_pair: dict[tuple[str, str], str] = {}

    def find_by_email_and_event(self, email: str, event_key: str) -> Registration | None:
        with self._lock:
            registration_id = self._by_pair.get((email, event_key))
            return self._by_id.get(registration_id) if registration_id else None

    def insert(self, registration: Registration) -> Registration | None:
        pair = (registration.email, registration.event_key)
        with self._lock:
            if registration.id in self._by_id:
                raise ValueError(f"Registration id already stored: {registration.id}")
            if pair in self._by_pair:
                return None
            stored = replace(registration, created_at=datetime.now(UTC))
            self._by_id[stored.id] = stored
            self._by_pair[pair] = stored.id
            return stored

    def update(self, registration: Registration) -> None:
        with self._lock:
            current = self._by_id.get(registration.id)
            if current is None:
                return
            self._by_id[registration.id] = replace(
                current,
                qr_token=registration.qr_token,
                artifact_location=registration.artifact_location,
            )

    def get(self, registration_id: str) -> Registration | None:
        with self._lock:
            return self._by_id.get(registration_id)

    def count(self) -> int:
        """Number of stored registrations."""
        with self._lock:
            return len(self._by_id)
