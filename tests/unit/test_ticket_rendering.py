"""
Unit tests for ticket layout and TicketRenderer.

Tests verify:
- Layout content and order match the registration
- Layout and document output are deterministic
- Artifacts are stored under tickets/<id>
- Storage failures surface as RenderError
"""

from unittest.mock import Mock

import pytest

from src.adapters.artifacts.filesystem import FilesystemArtifactStore
from src.adapters.pdf.ticket_pdf import ReportLabTicketWriter
from src.domain.exceptions import RenderError
from src.domain.layout import QR_CAPTION, build_ticket_layout
from src.domain.models import EventDetails, Registration
from src.domain.rendering import TicketRenderer, artifact_key


@pytest.fixture
def registration() -> Registration:
    return Registration(
        "T1", "Ada", "ada@x.com", "DevCon", "555-0100", "Speaker", qr_token="ada@x.com-T1"
    )


class TestTicketLayout:
    """Tests for build_ticket_layout."""

    def test_header_shows_event_and_schedule(self, registration: Registration) -> None:
        event = EventDetails(date_label="May 1, 2026", time_label="9 AM - 5 PM")

        layout = build_ticket_layout(registration, event)

        assert layout.header_title == "DevCon"
        assert layout.header_subtitle == "May 1, 2026, 9 AM - 5 PM"

    def test_sections_in_page_order(self, registration: Registration) -> None:
        layout = build_ticket_layout(registration, EventDetails())

        titles = [section.title for section in layout.sections]
        assert titles == ["Attendee Information", "Order Details", "Event Venue"]

    def test_attendee_block(self, registration: Registration) -> None:
        layout = build_ticket_layout(registration, EventDetails())

        assert layout.sections[0].lines == ("Name: Ada", "Email: ada@x.com", "Role: Speaker")

    def test_order_block_has_display_order_id(self, registration: Registration) -> None:
        """Order id is the ticket id with '1' appended."""
        layout = build_ticket_layout(registration, EventDetails())

        assert layout.sections[1].lines == ("Order ID: T11", "Ticket ID: T1")

    def test_venue_block(self, registration: Registration) -> None:
        event = EventDetails(venue_name="Hall A", venue_address_lines=("1 Main St", "Springfield"))

        layout = build_ticket_layout(registration, event)

        assert layout.sections[2].lines == ("Hall A", "1 Main St", "Springfield")

    def test_text_lines_are_deterministic(self, registration: Registration) -> None:
        first = build_ticket_layout(registration, EventDetails()).text_lines()
        second = build_ticket_layout(registration, EventDetails()).text_lines()

        assert first == second
        assert first[-2] == QR_CAPTION
        assert first[-1] == "Powered by EVENT-MVP"


class TestTicketRenderer:
    """Tests for TicketRenderer.render."""

    def test_stores_artifact_under_ticket_id(self, registration, artifact_store, encoder) -> None:
        renderer = TicketRenderer(writer=ReportLabTicketWriter(), artifact_store=artifact_store)

        location = renderer.render(registration, encoder.encode("ada@x.com-T1"))

        assert location.endswith("tickets/T1.pdf")
        assert artifact_store.read(location).startswith(b"%PDF")

    def test_same_inputs_give_same_bytes(self, registration, artifact_store, encoder) -> None:
        renderer = TicketRenderer(writer=ReportLabTicketWriter(), artifact_store=artifact_store)
        qr_image = encoder.encode("ada@x.com-T1")

        first = artifact_store.read(renderer.render(registration, qr_image))
        second = artifact_store.read(renderer.render(registration, qr_image))

        assert first == second

    def test_passes_layout_to_writer(self, registration) -> None:
        writer = Mock(extension="pdf")
        writer.write.return_value = b"doc"
        store = Mock()
        store.write.return_value = "loc"

        TicketRenderer(writer=writer, artifact_store=store).render(registration, b"png")

        layout, qr_image = writer.write.call_args[0]
        assert layout.header_title == "DevCon"
        assert qr_image == b"png"
        store.write.assert_called_once_with("tickets/T1.pdf", b"doc")

    def test_storage_error_becomes_render_error(self, registration) -> None:
        writer = Mock(extension="pdf")
        writer.write.return_value = b"doc"
        store = Mock()
        store.write.side_effect = PermissionError("read-only")

        renderer = TicketRenderer(writer=writer, artifact_store=store)

        with pytest.raises(RenderError):
            renderer.render(registration, b"png")

    def test_artifact_key(self) -> None:
        assert artifact_key("T1", "pdf") == "tickets/T1.pdf"


class TestReportLabTicketWriter:
    """Tests for the PDF document writer."""

    def test_output_is_pdf(self, registration, encoder) -> None:
        layout = build_ticket_layout(registration, EventDetails())

        document = ReportLabTicketWriter().write(layout, encoder.encode("x"))

        assert document.startswith(b"%PDF")
        assert document.rstrip().endswith(b"%%EOF")

    def test_invalid_qr_image_raises_render_error(self, registration) -> None:
        layout = build_ticket_layout(registration, EventDetails())

        with pytest.raises(RenderError):
            ReportLabTicketWriter().write(layout, b"not an image")

    def test_different_registrations_differ(self, registration, encoder) -> None:
        other = Registration("T2", "Bob", "bob@x.com", "DevCon", "555-0101", "Visitor")
        qr_image = encoder.encode("x")
        writer = ReportLabTicketWriter()

        first = writer.write(build_ticket_layout(registration, EventDetails()), qr_image)
        second = writer.write(build_ticket_layout(other, EventDetails()), qr_image)

        assert first != second


class TestFilesystemArtifactStore:
    """Tests for the filesystem artifact store."""

    def test_write_then_read(self, tmp_path) -> None:
        store = FilesystemArtifactStore(tmp_path)

        location = store.write("tickets/T1.pdf", b"data")

        assert store.read(location) == b"data"
        assert (tmp_path / "tickets" / "T1.pdf").read_bytes() == b"data"

    def test_overwrite_replaces_content(self, tmp_path) -> None:
        store = FilesystemArtifactStore(tmp_path)
        store.write("tickets/T1.pdf", b"old")

        location = store.write("tickets/T1.pdf", b"new")

        assert store.read(location) == b"new"
        assert sorted(p.name for p in (tmp_path / "tickets").iterdir()) == ["T1.pdf"]

    def test_missing_artifact_raises(self, tmp_path) -> None:
        from src.domain.exceptions import ArtifactNotFound

        store = FilesystemArtifactStore(tmp_path)

        with pytest.raises(ArtifactNotFound):
            store.read("tickets/missing.pdf")

    def test_location_outside_root_rejected(self, tmp_path) -> None:
        from src.domain.exceptions import ArtifactNotFound

        store = FilesystemArtifactStore(tmp_path / "root")

        with pytest.raises(ArtifactNotFound):
            store.read("../secret.txt")
