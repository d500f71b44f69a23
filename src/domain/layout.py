"""
Ticket layout - Deterministic description of the printed ticket page.

The layout holds every piece of text on the ticket in top-to-bottom order.
Document writers only decide how to draw it, so the same registration
always yields the same text content regardless of the output format.
"""

from dataclasses import dataclass

from .models import EventDetails, Registration

QR_CAPTION = "Scan this QR code at entry:"

# QR image width as a fraction of the page width.
QR_PAGE_FRACTION = 0.25


@dataclass(frozen=True)
class LayoutSection:
    """Titled block of centered lines."""

    title: str
    lines: tuple[str, ...]


@dataclass(frozen=True)
class TicketLayout:
    """Ordered content of a single ticket page."""

    header_title: str
    header_subtitle: str
    sections: tuple[LayoutSection, ...]
    qr_caption: str
    qr_fraction: float
    footer_text: str
    brand_color: str

    def text_lines(self) -> list[str]:
        """Flatten the layout into the text it prints, in page order."""
        lines = [self.header_title, self.header_subtitle]
        for section in self.sections:
            lines.append(section.title)
            lines.extend(section.lines)
        lines.append(self.qr_caption)
        lines.append(self.footer_text)
        return lines


def build_ticket_layout(registration: Registration, event: EventDetails) -> TicketLayout:
    """Lay out the ticket for a registration."""
    return TicketLayout(
        header_title=registration.event_name,
        header_subtitle=f"{event.date_label}, {event.time_label}",
        sections=(
            LayoutSection(
                "Attendee Information",
                (
                    f"Name: {registration.name}",
                    f"Email: {registration.email}",
                    f"Role: {registration.role}",
                ),
            ),
            LayoutSection(
                "Order Details",
                (
                    f"Order ID: {registration.order_id}",
                    f"Ticket ID: {registration.id}",
                ),
            ),
            LayoutSection("Event Venue", (event.venue_name, *event.venue_address_lines)),
        ),
        qr_caption=QR_CAPTION,
        qr_fraction=QR_PAGE_FRACTION,
        footer_text=event.footer_text,
        brand_color=event.brand_color,
    )
