"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from collections.abc import Sequence
from typing import Protocol

from .layout import TicketLayout
from .models import Attachment, Registration


class RegistrationRepository(Protocol):
    """Port interface for registration persistence."""

    def find_by_email_and_event(self, email: str, event_key: str) -> Registration | None:
        """
        Look up the registration for an (email, event) pair.

        Args:
            email: Normalized email address
            event_key: Event identifier (event name)

        Returns:
            The stored Registration, or None if the pair is unregistered
        """
        ...

    def insert(self, registration: Registration) -> Registration | None:
        """
        Atomically insert a registration unless the (email, event) pair exists.

        The uniqueness check and the write must be a single atomic operation
        at the storage level so concurrent requests cannot both succeed.

        Args:
            registration: New registration with its id already assigned

        Returns:
            The stored Registration (with created_at populated),
            or None if the (email, event) pair is already taken

        A reused id is not a duplicate registration; adapters raise their
        own integrity error for it.
        """
        ...

    def update(self, registration: Registration) -> None:
        """
        Persist qr_token and artifact_location of an existing registration.

        Args:
            registration: Registration carrying the values to store
        """
        ...

    def get(self, registration_id: str) -> Registration | None:
        """Fetch a registration by id."""
        ...


class ArtifactStore(Protocol):
    """Port interface for durable storage of rendered tickets."""

    def write(self, key: str, content: bytes) -> str:
        """
        Store bytes under a key.

        Returns:
            Location reference usable with read()
        """
        ...

    def read(self, location: str) -> bytes:
        """
        Load bytes previously stored.

        Raises:
            ArtifactNotFound: If nothing is stored at the location
        """
        ...


class QrEncoder(Protocol):
    """Port interface for QR symbol encoding."""

    def encode(self, data: str) -> bytes:
        """Encode data as a QR symbol and return PNG bytes."""
        ...


class DocumentWriter(Protocol):
    """Port interface for turning a ticket layout into a document."""

    content_type: str
    extension: str

    def write(self, layout: TicketLayout, qr_image: bytes) -> bytes:
        """Draw the layout with the QR image and return the document bytes."""
        ...


class MessageGateway(Protocol):
    """Port interface for outbound email delivery (best effort)."""

    def send(
        self,
        to: str,
        subject: str,
        html_body: str,
        attachments: Sequence[Attachment],
    ) -> bool:
        """
        Deliver a message.

        Returns:
            True if the message was handed off, False otherwise
        """
        ...
