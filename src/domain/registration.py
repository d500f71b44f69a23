"""
Registration validator - Uniqueness gate of the ticket issuance pipeline.

The validator is the only step allowed to create a registration. It runs
before any token, artifact or message exists, so a rejected request leaves
no trace beyond the lookup.

Uniqueness is enforced twice:
- find_by_email_and_event() rejects the common duplicate case early
- insert() is an atomic compare-and-insert at the storage level, which
  closes the read-then-write race between concurrent requests
"""

import logging
import re
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field

from .exceptions import DuplicateRegistration, InvalidRegistration
from .models import PaymentStatus, Registration
from .ports import RegistrationRepository

logger = logging.getLogger(__name__)

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def new_registration_id() -> str:
    """Generate an opaque 24-character hex ticket id."""
    return uuid.uuid4().hex[:24]


@dataclass
class RegistrationValidator:
    """
    Enforces one registration per (email, event).

    Validates input, rejects duplicates and persists the new registration
    with payment_status=PENDING.
    """

    repository: RegistrationRepository
    id_factory: Callable[[], str] = field(default=new_registration_id)

    def validate(
        self,
        name: str,
        email: str,
        event_name: str,
        contact: str,
        role: str,
    ) -> Registration:
        """
        Create the registration for a new (email, event) pair.

        Args:
            name: Registrant's display name
            email: Registrant's email (will be normalized)
            event_name: Event the registrant enrolls in
            contact: Phone or other contact detail
            role: Registrant role, e.g. "Visitor" or "Speaker"

        Returns:
            The persisted Registration

        Raises:
            InvalidRegistration: If a required field is missing or malformed
            DuplicateRegistration: If the pair is already registered
        """
        fields = {
            "name": name,
            "email": email,
            "event_name": event_name,
            "contact": contact,
            "role": role,
        }
        cleaned = {key: self._require(key, value) for key, value in fields.items()}
        cleaned["email"] = self._normalize_email(cleaned["email"])
        if not _EMAIL_PATTERN.match(cleaned["email"]):
            raise InvalidRegistration("email", "not a valid email address")

        existing = self.repository.find_by_email_and_event(cleaned["email"], cleaned["event_name"])
        if existing is not None:
            logger.warning(
                "Duplicate registration rejected: %s for %s",
                cleaned["email"],
                cleaned["event_name"],
            )
            raise DuplicateRegistration(cleaned["email"], cleaned["event_name"])

        candidate = Registration(
            id=self.id_factory(),
            payment_status=PaymentStatus.PENDING,
            **cleaned,
        )
        stored = self.repository.insert(candidate)
        if stored is None:
            # Lost the race against a concurrent insert for the same pair
            logger.warning(
                "Concurrent duplicate registration rejected: %s for %s",
                candidate.email,
                candidate.event_name,
            )
            raise DuplicateRegistration(candidate.email, candidate.event_name)

        logger.info("Registration %s created for %s", stored.id, stored.event_name)
        return stored

    def _require(self, key: str, value: str | None) -> str:
        if value is None or not value.strip():
            raise InvalidRegistration(key, "is required")
        return value.strip()

    def _normalize_email(self, email: str) -> str:
        """
        Normalize email address for consistent storage and lookup.

        Applies: strip whitespace + lowercase
        """
        return email.strip().lower()
