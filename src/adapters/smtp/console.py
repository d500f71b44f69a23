"""
Console message gateway adapter - Implements MessageGateway protocol.

This module provides a console-based implementation of the domain's
messaging port, logging outgoing ticket emails for demo purposes.
"""

import logging
from collections.abc import Sequence

from src.domain.models import Attachment

logger = logging.getLogger(__name__)


class ConsoleMessageGateway:
    """
    Implements MessageGateway protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - logs the envelope instead of sending.
    """

    def send(
        self,
        to: str,
        subject: str,
        html_body: str,
        attachments: Sequence[Attachment],
    ) -> bool:
        """
        Log the message envelope (simulates email delivery).

        In production, this is replaced with the SMTP adapter.
        Logged at INFO level so it shows up in the service logs.

        Returns:
            Always True
        """
        names = ", ".join(attachment.filename for attachment in attachments)
        logger.info("[EMAIL] To: %s Subject: %s Attachments: %s", to, subject, names)
        return True
