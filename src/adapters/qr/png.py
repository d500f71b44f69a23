"""
QR code PNG encoder - Implements QrEncoder protocol with the qrcode library.
"""

import io
import logging

import qrcode
from qrcode.exceptions import DataOverflowError

from src.domain.exceptions import TokenEncodingError

logger = logging.getLogger(__name__)

ERROR_CORRECTION_LEVELS = {
    "L": qrcode.constants.ERROR_CORRECT_L,
    "M": qrcode.constants.ERROR_CORRECT_M,
    "Q": qrcode.constants.ERROR_CORRECT_Q,
    "H": qrcode.constants.ERROR_CORRECT_H,
}


class QrCodePngEncoder:
    """
    Encodes scan tokens as PNG QR symbols.

    Error correction, box size and border are rendering settings only;
    they do not change the encoded data.
    """

    def __init__(self, error_correction: str = "M", box_size: int = 10, border: int = 4) -> None:
        try:
            self._error_correction = ERROR_CORRECTION_LEVELS[error_correction.upper()]
        except KeyError:
            raise ValueError(f"Unknown QR error correction level: {error_correction}") from None
        self._box_size = box_size
        self._border = border

    def encode(self, data: str) -> bytes:
        """
        Generate QR code image as PNG bytes.

        Raises:
            TokenEncodingError: If the data cannot be encoded
        """
        if not data:
            raise TokenEncodingError("Cannot encode an empty token")

        try:
            qr = qrcode.QRCode(
                version=None,
                error_correction=self._error_correction,
                box_size=self._box_size,
                border=self._border,
            )
            qr.add_data(data)
            qr.make(fit=True)
            img = qr.make_image(fill_color="black", back_color="white")

            buffer = io.BytesIO()
            img.save(buffer, format="PNG")
            return buffer.getvalue()
        except (DataOverflowError, ValueError, OSError) as e:
            logger.error("QR generation failed: %s", e)
            raise TokenEncodingError("QR code generation failed") from e
