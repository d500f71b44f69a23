"""
Ticket renderer - Produces and stores the ticket document.
"""

import logging
from dataclasses import dataclass, field

from .exceptions import RenderError
from .layout import build_ticket_layout
from .models import EventDetails, Registration
from .ports import ArtifactStore, DocumentWriter

logger = logging.getLogger(__name__)

ARTIFACT_NAMESPACE = "tickets"


def artifact_key(registration_id: str, extension: str) -> str:
    """Storage key of a ticket document, named by ticket id."""
    return f"{ARTIFACT_NAMESPACE}/{registration_id}.{extension}"


@dataclass
class TicketRenderer:
    """Lays out the ticket, draws it and writes it to the artifact store."""

    writer: DocumentWriter
    artifact_store: ArtifactStore
    event: EventDetails = field(default_factory=EventDetails)

    def render(self, registration: Registration, qr_image: bytes) -> str:
        """
        Render the ticket for a registration.

        Returns:
            Location of the stored artifact

        Raises:
            RenderError: If drawing or storing the document fails
        """
        layout = build_ticket_layout(registration, self.event)
        document = self.writer.write(layout, qr_image)

        key = artifact_key(registration.id, self.writer.extension)
        try:
            location = self.artifact_store.write(key, document)
        except OSError as e:
            raise RenderError(f"Could not store ticket {registration.id}") from e

        logger.info("Ticket artifact for %s stored at %s", registration.id, location)
        return location
