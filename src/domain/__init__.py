"""
Domain layer - Pure business logic with zero framework imports.

This package contains the ticket issuance pipeline: registration
validation, token minting, ticket rendering and notification dispatch.
It defines its own port interfaces for infrastructure abstraction,
ensuring true hexagonal architecture decoupling.
"""

from .exceptions import (
    ArtifactNotFound,
    DuplicateRegistration,
    InvalidRegistration,
    IssuanceFailed,
    RenderError,
    TicketingError,
    TokenEncodingError,
)
from .issuance import TicketIssuanceService
from .models import (
    Attachment,
    DispatchResult,
    EventDetails,
    IssuedTicket,
    PaymentStatus,
    Registration,
    RoleLabel,
    RoleLabelTable,
)
from .notification import NotificationDispatcher
from .ports import ArtifactStore, DocumentWriter, MessageGateway, QrEncoder, RegistrationRepository
from .registration import RegistrationValidator
from .rendering import TicketRenderer
from .tokens import TokenMinter, derive_token

__all__ = [
    "ArtifactNotFound",
    "ArtifactStore",
    "Attachment",
    "DispatchResult",
    "DocumentWriter",
    "DuplicateRegistration",
    "EventDetails",
    "InvalidRegistration",
    "IssuanceFailed",
    "IssuedTicket",
    "MessageGateway",
    "NotificationDispatcher",
    "PaymentStatus",
    "QrEncoder",
    "Registration",
    "RegistrationRepository",
    "RegistrationValidator",
    "RenderError",
    "RoleLabel",
    "RoleLabelTable",
    "TicketIssuanceService",
    "TicketRenderer",
    "TicketingError",
    "TokenEncodingError",
    "TokenMinter",
    "derive_token",
]
