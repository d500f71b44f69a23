"""
Domain exceptions - Semantic error types for ticket issuance.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
"""


class TicketingError(Exception):
    """Base class for ticket issuance domain errors."""

    pass


class DuplicateRegistration(TicketingError):
    """Email is already registered for this event."""

    def __init__(self, email: str, event_key: str) -> None:
        super().__init__(f"{email} is already registered for {event_key}")
        self.email = email
        self.event_key = event_key


class InvalidRegistration(TicketingError):
    """Required registrant field is missing or malformed."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason


class IssuanceFailed(TicketingError):
    """A step after registration failed; the registration row already exists."""

    pass


class TokenEncodingError(IssuanceFailed):
    """QR symbol could not be encoded for the scan token."""

    pass


class RenderError(IssuanceFailed):
    """Ticket document could not be produced or stored."""

    pass


class ArtifactNotFound(TicketingError):
    """No stored artifact exists at the requested location."""

    pass
