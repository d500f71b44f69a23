"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- In-memory registration store and temporary artifact store
- A recording message gateway
- A fully wired TicketIssuanceService with predictable ticket ids
"""

import itertools
import threading
from collections.abc import Callable, Iterator, Sequence
from pathlib import Path

import pytest

from src.adapters.artifacts.filesystem import FilesystemArtifactStore
from src.adapters.pdf.ticket_pdf import ReportLabTicketWriter
from src.adapters.qr.png import QrCodePngEncoder
from src.adapters.repository.memory import InMemoryRegistrationRepository
from src.domain.issuance import TicketIssuanceService
from src.domain.models import Attachment
from src.domain.notification import NotificationDispatcher
from src.domain.registration import RegistrationValidator
from src.domain.rendering import TicketRenderer
from src.domain.tokens import TokenMinter


class RecordingGateway:
    """MessageGateway that stores every message it is asked to send."""

    def __init__(self, succeed: bool = True) -> None:
        self.succeed = succeed
        self.sent: list[dict] = []

    def send(
        self,
        to: str,
        subject: str,
        html_body: str,
        attachments: Sequence[Attachment],
    ) -> bool:
        self.sent.append(
            {"to": to, "subject": subject, "html_body": html_body, "attachments": list(attachments)}
        )
        return self.succeed


def sequential_ids(prefix: str = "T") -> Callable[[], str]:
    """Id factory returning T1, T2, ..."""
    counter = itertools.count(1)
    lock = threading.Lock()

    def next_id() -> str:
        with lock:
            return f"{prefix}{next(counter)}"

    return next_id


@pytest.fixture
def repository() -> InMemoryRegistrationRepository:
    return InMemoryRegistrationRepository()


@pytest.fixture
def artifact_store(tmp_path: Path) -> FilesystemArtifactStore:
    return FilesystemArtifactStore(tmp_path / "artifacts")


@pytest.fixture
def gateway() -> RecordingGateway:
    return RecordingGateway()


@pytest.fixture
def encoder() -> QrCodePngEncoder:
    return QrCodePngEncoder(error_correction="M", box_size=4, border=2)


@pytest.fixture
def service(
    repository: InMemoryRegistrationRepository,
    artifact_store: FilesystemArtifactStore,
    gateway: RecordingGateway,
    encoder: QrCodePngEncoder,
) -> Iterator[TicketIssuanceService]:
    """Issuance service wired with real adapters and ids T1, T2, ..."""
    yield TicketIssuanceService(
        repository=repository,
        validator=RegistrationValidator(repository=repository, id_factory=sequential_ids()),
        minter=TokenMinter(repository=repository, encoder=encoder),
        renderer=TicketRenderer(writer=ReportLabTicketWriter(), artifact_store=artifact_store),
        dispatcher=NotificationDispatcher(gateway=gateway, artifact_store=artifact_store),
        artifact_store=artifact_store,
    )
