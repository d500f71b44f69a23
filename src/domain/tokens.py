"""
Token minter - Derives the scan token and its QR image.

The token is email + separator + registration id. It can be rebuilt from a
stored registration without a secondary lookup, but it is not secret:
anyone who knows both values can produce it.
"""

import logging
from dataclasses import dataclass

from .exceptions import TokenEncodingError
from .models import MintedToken, Registration
from .ports import QrEncoder, RegistrationRepository

logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR = "-"


def derive_token(email: str, registration_id: str, separator: str = DEFAULT_SEPARATOR) -> str:
    """Build the scan token for a registration."""
    return f"{email}{separator}{registration_id}"


@dataclass
class TokenMinter:
    """Mints the scan token, encodes it and records it on the registration."""

    repository: RegistrationRepository
    encoder: QrEncoder
    separator: str = DEFAULT_SEPARATOR

    def mint(self, registration: Registration) -> tuple[Registration, MintedToken]:
        """
        Mint the token for a freshly created registration.

        Returns:
            The registration with qr_token set, and the minted token

        Raises:
            TokenEncodingError: If the QR symbol cannot be produced
        """
        qr_token = derive_token(registration.email, registration.id, self.separator)
        try:
            qr_image = self.encoder.encode(qr_token)
        except TokenEncodingError:
            logger.error("QR encoding failed for registration %s", registration.id)
            raise

        updated = registration.with_token(qr_token)
        self.repository.update(updated)
        logger.info("Scan token minted for registration %s", registration.id)
        return updated, MintedToken(qr_token=qr_token, qr_image=qr_image)
