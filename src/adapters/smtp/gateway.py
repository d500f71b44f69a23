"""
SMTP message gateway adapter - Implements MessageGateway protocol.

MIME structure:

    multipart/mixed
    +-- multipart/related
    |   +-- text/html
    |   +-- image/png (Content-ID, inline)
    +-- application/pdf (attachment)

Inline images sit inside multipart/related so mail clients render them in
the body instead of listing them as attachments.

Delivery is best effort: one attempt per call, bounded by a socket timeout.
Transport errors are logged and reported as False, never raised.
"""

import logging
import smtplib
from collections.abc import Sequence
from email.mime.application import MIMEApplication
from email.mime.base import MIMEBase
from email.mime.image import MIMEImage
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from src.domain.models import Attachment

logger = logging.getLogger(__name__)


class SmtpMessageGateway:
    """
    Implements MessageGateway protocol via smtplib.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        username: str = "",
        password: str = "",
        use_tls: bool = True,
        timeout: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._sender = sender
        self._username = username
        self._password = password
        self._use_tls = use_tls
        self._timeout = timeout

    def build_message(
        self,
        to: str,
        subject: str,
        html_body: str,
        attachments: Sequence[Attachment],
    ) -> MIMEMultipart:
        root = MIMEMultipart("mixed")
        root["Subject"] = subject
        root["From"] = self._sender
        root["To"] = to

        related = MIMEMultipart("related")
        related.attach(MIMEText(html_body, "html", "utf-8"))
        root.attach(related)

        for attachment in attachments:
            if attachment.inline_id:
                part = self._inline_part(attachment)
                related.attach(part)
            else:
                part = MIMEApplication(
                    attachment.content, _subtype=attachment.content_type.split("/")[-1]
                )
                part.add_header("Content-Disposition", "attachment", filename=attachment.filename)
                root.attach(part)

        return root

    @staticmethod
    def _inline_part(attachment: Attachment) -> MIMEBase:
        subtype = attachment.content_type.split("/")[-1]
        part = MIMEImage(attachment.content, _subtype=subtype)
        part.add_header("Content-ID", f"<{attachment.inline_id}>")
        part.add_header("Content-Disposition", "inline", filename=attachment.filename)
        return part

    def send(
        self,
        to: str,
        subject: str,
        html_body: str,
        attachments: Sequence[Attachment],
    ) -> bool:
        """
        Send the message through the configured SMTP server.

        Returns:
            True if the server accepted the message, False otherwise
        """
        message = self.build_message(to, subject, html_body, attachments)
        try:
            with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as smtp:
                if self._use_tls:
                    smtp.starttls()
                if self._username:
                    smtp.login(self._username, self._password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("SMTP delivery to %s failed: %s", to, e)
            return False

        logger.info("SMTP delivery to %s accepted by %s", to, self._host)
        return True
