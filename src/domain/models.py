"""
Domain models - Registration record and the values passed between pipeline steps.

Plain dataclasses only; persistence and transport concerns live in adapters.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum


class PaymentStatus(str, Enum):
    """
    Payment state recorded on a registration.

    The issuance pipeline only ever writes PENDING; the other values are
    set by systems outside this service.
    """

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class Registration:
    """One attendee's enrollment in one event."""

    id: str
    name: str
    email: str
    event_name: str
    contact: str
    role: str
    payment_status: PaymentStatus = PaymentStatus.PENDING
    qr_token: str | None = None
    artifact_location: str | None = None
    created_at: datetime | None = None

    @property
    def event_key(self) -> str:
        """Event identifier used for the uniqueness check."""
        return self.event_name

    @property
    def order_id(self) -> str:
        """
        Display-only order number printed on the ticket.

        Formed by appending "1" to the ticket id. It carries no uniqueness
        meaning of its own and is never used for lookups.
        """
        return f"{self.id}1"

    def with_token(self, qr_token: str) -> "Registration":
        return replace(self, qr_token=qr_token)

    def with_artifact(self, location: str) -> "Registration":
        return replace(self, artifact_location=location)


@dataclass(frozen=True)
class MintedToken:
    """Scan token and its QR rendering as PNG bytes."""

    qr_token: str
    qr_image: bytes


@dataclass(frozen=True)
class Attachment:
    """File attached to an outgoing message, optionally referenced inline."""

    filename: str
    content: bytes
    content_type: str
    inline_id: str | None = None


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of a notification attempt. Never raised, only reported."""

    delivered: bool
    recipient: str
    error: str | None = None


@dataclass(frozen=True)
class IssuedTicket:
    """Result of a successful IssueTicket call."""

    registration: Registration
    qr_image: bytes
    artifact_location: str
    dispatch: DispatchResult

    @property
    def ticket_id(self) -> str:
        return self.registration.id


@dataclass(frozen=True)
class EventDetails:
    """Static event information shown on the ticket and in the email."""

    date_label: str = "March 15 - 16, 2025"
    time_label: str = "08:00 AM - 5:00 PM (IST)"
    venue_name: str = "M Weddings & Conventions"
    venue_address_lines: tuple[str, ...] = (
        "98/99, Vanagaram-Ambattur Road",
        "Vanagaram, Chennai, Tamil Nadu - 600095, India",
    )
    venue_summary: str = "M Weddings & Conventions, Chennai, India"
    footer_text: str = "Powered by EVENT-MVP"
    brand_color: str = "#4CAF50"


@dataclass(frozen=True)
class RoleLabel:
    """Ticket class and payment wording for a registrant role."""

    ticket_class: str
    payment_label: str


UNKNOWN_ROLE_LABEL = RoleLabel("UNKNOWN ROLE", "Payment Status Unknown")


@dataclass(frozen=True)
class RoleLabelTable:
    """
    Role to label lookup with an explicit fallback.

    Roles outside the table resolve to the fallback label instead of
    failing, so registrations with unexpected roles still get a ticket.
    """

    labels: dict[str, RoleLabel] = field(
        default_factory=lambda: {
            "Visitor": RoleLabel("VISITORS REGISTRATION (PAID ENTRY)", "Payment Received"),
            "Speaker": RoleLabel("SPEAKER REGISTRATION (FREE ENTRY)", "No Payment Required"),
        }
    )
    fallback: RoleLabel = UNKNOWN_ROLE_LABEL

    def lookup(self, role: str) -> RoleLabel:
        return self.labels.get(role, self.fallback)
