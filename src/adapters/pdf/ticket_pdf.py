"""
ReportLab document writer - Implements DocumentWriter protocol.

Draws a TicketLayout onto a single A4 page:

    +-----------------------------+
    |  header band (brand color)  |  event name, date/time
    |-----------------------------|
    |    Attendee Information     |
    |       Order Details         |
    |        Event Venue          |
    |  Scan this QR code at entry |
    |          [ QR ]             |
    |-----------------------------|
    |  footer band (brand color)  |
    +-----------------------------+

The canvas runs in invariant mode (fixed creation date and document id),
so identical layouts and QR images produce identical bytes.
"""

import io
import logging

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from src.domain.exceptions import RenderError
from src.domain.layout import TicketLayout

logger = logging.getLogger(__name__)

HEADER_HEIGHT = 120
FOOTER_HEIGHT = 50
SECTION_TITLE_SIZE = 20
BODY_SIZE = 16
LINE_LEADING = 20
SECTION_GAP = 30
TEXT_COLOR = colors.HexColor("#333333")


class ReportLabTicketWriter:
    """
    Implements DocumentWriter protocol with reportlab's canvas API.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    content_type = "application/pdf"
    extension = "pdf"

    def __init__(self, pagesize: tuple[float, float] = A4) -> None:
        self._pagesize = pagesize

    def write(self, layout: TicketLayout, qr_image: bytes) -> bytes:
        """
        Draw the ticket and return PDF bytes.

        Raises:
            RenderError: If the QR image cannot be read or drawing fails
        """
        buffer = io.BytesIO()
        try:
            pdf = canvas.Canvas(buffer, pagesize=self._pagesize, invariant=1)
            pdf.setTitle(f"{layout.header_title} Ticket")
            self._draw(pdf, layout, qr_image)
            pdf.showPage()
            pdf.save()
        except (OSError, ValueError) as e:
            logger.error("Ticket PDF rendering failed: %s", e)
            raise RenderError("Ticket document could not be rendered") from e
        return buffer.getvalue()

    def _draw(self, pdf: canvas.Canvas, layout: TicketLayout, qr_image: bytes) -> None:
        width, height = self._pagesize
        center = width / 2
        brand = colors.HexColor(layout.brand_color)

        # Header band
        pdf.setFillColor(brand)
        pdf.rect(0, height - HEADER_HEIGHT, width, HEADER_HEIGHT, stroke=0, fill=1)
        pdf.setFillColor(colors.white)
        pdf.setFont("Helvetica-Bold", 28)
        pdf.drawCentredString(center, height - 55, layout.header_title)
        pdf.setFont("Helvetica", 18)
        pdf.drawCentredString(center, height - 88, layout.header_subtitle)

        # Sections
        y = height - HEADER_HEIGHT - 50
        pdf.setFillColor(TEXT_COLOR)
        pdf.setStrokeColor(TEXT_COLOR)
        for section in layout.sections:
            y = self._draw_title(pdf, section.title, center, y)
            pdf.setFont("Helvetica", BODY_SIZE)
            for line in section.lines:
                pdf.drawCentredString(center, y, line)
                y -= LINE_LEADING
            y -= SECTION_GAP

        # QR code
        pdf.setFont("Helvetica", BODY_SIZE)
        pdf.drawCentredString(center, y, layout.qr_caption)
        qr_size = width * layout.qr_fraction
        qr_y = y - 15 - qr_size
        pdf.drawImage(
            ImageReader(io.BytesIO(qr_image)),
            (width - qr_size) / 2,
            qr_y,
            width=qr_size,
            height=qr_size,
        )

        # Footer band
        pdf.setFillColor(brand)
        pdf.rect(0, 0, width, FOOTER_HEIGHT, stroke=0, fill=1)
        pdf.setFillColor(colors.white)
        pdf.setFont("Helvetica", 14)
        pdf.drawCentredString(center, FOOTER_HEIGHT / 2 - 5, layout.footer_text)

    @staticmethod
    def _draw_title(pdf: canvas.Canvas, title: str, center: float, y: float) -> float:
        """Draw an underlined section title and return the next baseline."""
        pdf.setFont("Helvetica-Bold", SECTION_TITLE_SIZE)
        pdf.drawCentredString(center, y, title)
        half = pdf.stringWidth(title, "Helvetica-Bold", SECTION_TITLE_SIZE) / 2
        pdf.line(center - half, y - 3, center + half, y - 3)
        return y - SECTION_TITLE_SIZE - 8
