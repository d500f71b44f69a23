"""
Ticket issuance service - The IssueTicket pipeline.

Pipeline (strictly sequential, each step at most once per request)
==================================================================

    validate -> mint -> render -> dispatch

Failure policy:
- validate: DuplicateRegistration / InvalidRegistration, nothing written
- mint:     TokenEncodingError, registration exists without a token
- render:   RenderError, registration exists without an artifact
- dispatch: never fails the request; outcome is logged and returned

A registration left behind by a mint or render failure is not rolled
back. The error propagates so the caller reports a server error and an
operator can re-issue the ticket.
"""

import logging
from dataclasses import dataclass

from .exceptions import ArtifactNotFound
from .models import IssuedTicket
from .notification import NotificationDispatcher
from .ports import ArtifactStore, RegistrationRepository
from .registration import RegistrationValidator
from .rendering import TicketRenderer
from .tokens import TokenMinter

logger = logging.getLogger(__name__)


@dataclass
class TicketIssuanceService:
    """
    Domain service for ticket issuance.

    Wires the validator, minter, renderer and dispatcher into one
    synchronous operation.
    """

    repository: RegistrationRepository
    validator: RegistrationValidator
    minter: TokenMinter
    renderer: TicketRenderer
    dispatcher: NotificationDispatcher
    artifact_store: ArtifactStore

    def issue_ticket(
        self,
        name: str,
        email: str,
        event_name: str,
        contact: str,
        role: str,
    ) -> IssuedTicket:
        """
        Register an attendee and issue their ticket.

        Returns:
            IssuedTicket with the ticket id, QR image and dispatch outcome

        Raises:
            InvalidRegistration: If input is missing or malformed
            DuplicateRegistration: If (email, event) is already registered
            TokenEncodingError: If the QR image cannot be produced
            RenderError: If the ticket document cannot be produced or stored
        """
        registration = self.validator.validate(name, email, event_name, contact, role)
        registration, minted = self.minter.mint(registration)

        location = self.renderer.render(registration, minted.qr_image)
        registration = registration.with_artifact(location)
        self.repository.update(registration)

        dispatch = self.dispatcher.dispatch(registration, location, minted.qr_image)
        if not dispatch.delivered:
            logger.warning(
                "Ticket %s issued without email delivery: %s", registration.id, dispatch.error
            )

        return IssuedTicket(
            registration=registration,
            qr_image=minted.qr_image,
            artifact_location=location,
            dispatch=dispatch,
        )

    def ticket_artifact(self, ticket_id: str) -> tuple[str, bytes]:
        """
        Load the rendered ticket for a ticket id.

        Returns:
            (filename, document bytes)

        Raises:
            ArtifactNotFound: If the ticket is unknown or was never rendered
        """
        registration = self.repository.get(ticket_id)
        if registration is None or registration.artifact_location is None:
            raise ArtifactNotFound(ticket_id)
        location = registration.artifact_location
        return location.rsplit("/", 1)[-1], self.artifact_store.read(location)
