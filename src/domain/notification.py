"""
Notification dispatcher - Emails the ticket to the registrant.

Delivery is best effort and at most once. The dispatcher never raises:
every failure is logged and reported through DispatchResult, so an
undelivered email cannot turn a successful issuance into an error.
"""

import logging
from dataclasses import dataclass, field
from html import escape

from .models import (
    Attachment,
    DispatchResult,
    EventDetails,
    Registration,
    RoleLabelTable,
)
from .ports import ArtifactStore, MessageGateway

logger = logging.getLogger(__name__)

QR_INLINE_ID = "qrcode"
QR_FILENAME = "QRCode.png"

_BODY_TEMPLATE = """\
<div style="font-family: Arial, sans-serif; color: #333; max-width: 600px; margin: 0 auto; border: 1px solid #ddd; border-radius: 10px;">
  <div style="background: {brand_color}; color: white; text-align: center; padding: 20px;">
    <h1 style="margin: 0;">Your E-Ticket</h1>
    <p>You're officially registered for <strong>{event_name}</strong></p>
  </div>
  <div style="padding: 30px;">
    <p style="font-size: 18px;">Hello <strong>{name}</strong>,</p>
    <p>Thank you for registering for <strong>{event_name}</strong>. Here are your event details:</p>
    <div style="border: 1px solid #eee; padding: 20px; border-radius: 8px; margin: 20px 0;">
      <p><strong>Date:</strong> {date_label}</p>
      <p><strong>Time:</strong> {time_label}</p>
      <p><strong>Location:</strong> {venue_summary}</p>
    </div>
  </div>
  <div style="background: #f9f9f9; padding: 30px; border-top: 1px solid #ddd;">
    <h3>Ticket Details</h3>
    <p><strong>Order ID:</strong> {order_id}</p>
    <p><strong>Ticket Class:</strong> {ticket_class}</p>
    <p><strong>Payment Status:</strong> {payment_label}</p>
  </div>
  <div style="text-align: center; padding: 30px; border-top: 1px solid #ddd;">
    <h3>Scan this QR Code at Entry</h3>
    <img src="cid:{qr_inline_id}" alt="QR Code" style="width: 250px; height: 250px;"/>
  </div>
  <div style="background: {brand_color}; color: white; text-align: center; padding: 15px;">
    <p>Thank you for joining us. We look forward to seeing you at the event!</p>
  </div>
</div>
"""


@dataclass(frozen=True)
class TicketMessage:
    """Composed email, ready for the gateway."""

    to: str
    subject: str
    html_body: str
    attachments: tuple[Attachment, ...]


@dataclass
class NotificationDispatcher:
    """Composes the ticket email and hands it to the messaging gateway."""

    gateway: MessageGateway
    artifact_store: ArtifactStore
    event: EventDetails = field(default_factory=EventDetails)
    role_labels: RoleLabelTable = field(default_factory=RoleLabelTable)
    artifact_content_type: str = "application/pdf"

    def compose(
        self, registration: Registration, artifact: bytes, artifact_name: str, qr_image: bytes
    ) -> TicketMessage:
        """Build the message for a registration."""
        label = self.role_labels.lookup(registration.role)
        html_body = _BODY_TEMPLATE.format(
            brand_color=escape(self.event.brand_color),
            event_name=escape(registration.event_name),
            name=escape(registration.name),
            date_label=escape(self.event.date_label),
            time_label=escape(self.event.time_label),
            venue_summary=escape(self.event.venue_summary),
            order_id=escape(registration.order_id),
            ticket_class=escape(label.ticket_class),
            payment_label=escape(label.payment_label),
            qr_inline_id=QR_INLINE_ID,
        )
        return TicketMessage(
            to=registration.email,
            subject=f"{registration.event_name} - Your Ticket Confirmation",
            html_body=html_body,
            attachments=(
                Attachment(QR_FILENAME, qr_image, "image/png", inline_id=QR_INLINE_ID),
                Attachment(artifact_name, artifact, self.artifact_content_type),
            ),
        )

    def dispatch(
        self, registration: Registration, artifact_location: str, qr_image: bytes
    ) -> DispatchResult:
        """
        Send the ticket email.

        Args:
            registration: Registration with qr_token set
            artifact_location: Where the rendered ticket is stored
            qr_image: PNG bytes of the QR symbol

        Returns:
            DispatchResult describing the outcome (never raises)
        """
        try:
            artifact = self.artifact_store.read(artifact_location)
            artifact_name = artifact_location.rsplit("/", 1)[-1]
            message = self.compose(registration, artifact, artifact_name, qr_image)
            delivered = self.gateway.send(
                message.to, message.subject, message.html_body, message.attachments
            )
        except Exception as e:
            logger.exception("Ticket email for %s could not be sent", registration.id)
            return DispatchResult(delivered=False, recipient=registration.email, error=str(e))

        if not delivered:
            logger.warning("Ticket email for %s was not delivered", registration.id)
            return DispatchResult(
                delivered=False, recipient=registration.email, error="gateway rejected message"
            )

        logger.info("Ticket email for %s sent to %s", registration.id, registration.email)
        return DispatchResult(delivered=True, recipient=registration.email)
