"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from fastapi import Depends, Request
from psycopg_pool import ConnectionPool

from src.adapters.artifacts.filesystem import FilesystemArtifactStore
from src.adapters.pdf.ticket_pdf import ReportLabTicketWriter
from src.adapters.qr.png import QrCodePngEncoder
from src.adapters.repository.postgres import PostgresRegistrationRepository
from src.adapters.smtp.console import ConsoleMessageGateway
from src.adapters.smtp.gateway import SmtpMessageGateway
from src.config.settings import Settings, get_settings
from src.domain.issuance import TicketIssuanceService
from src.domain.models import EventDetails, RoleLabel, RoleLabelTable
from src.domain.notification import NotificationDispatcher
from src.domain.ports import MessageGateway, RegistrationRepository
from src.domain.registration import RegistrationValidator
from src.domain.rendering import TicketRenderer
from src.domain.tokens import TokenMinter

# Module-level singleton - ConsoleMessageGateway is stateless
_console_gateway = ConsoleMessageGateway()


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_repository(request: Request) -> RegistrationRepository:
    """
    Resolve the registration store for this request.

    Uses the repository placed in app.state (memory backend) when present,
    otherwise wraps the connection pool.
    """
    repository = getattr(request.app.state, "repository", None)
    if repository is not None:
        return repository
    return PostgresRegistrationRepository(get_pool(request))


def get_message_gateway(settings: Settings = Depends(get_settings)) -> MessageGateway:
    """Select the email backend from settings."""
    if settings.email_backend == "smtp":
        return SmtpMessageGateway(
            host=settings.smtp_host,
            port=settings.smtp_port,
            sender=settings.mail_from,
            username=settings.smtp_username,
            password=settings.smtp_password,
            use_tls=settings.smtp_use_tls,
            timeout=settings.smtp_timeout_seconds,
        )
    return _console_gateway


def event_details_from(settings: Settings) -> EventDetails:
    return EventDetails(
        date_label=settings.event_date_label,
        time_label=settings.event_time_label,
        venue_name=settings.venue_name,
        venue_address_lines=tuple(settings.venue_address_lines),
        venue_summary=settings.venue_summary,
        footer_text=settings.footer_text,
        brand_color=settings.brand_color,
    )


def role_labels_from(settings: Settings) -> RoleLabelTable:
    return RoleLabelTable(
        labels={role: RoleLabel(*labels) for role, labels in settings.role_labels.items()},
        fallback=RoleLabel(*settings.unknown_role_label),
    )


def build_issuance_service(
    settings: Settings,
    repository: RegistrationRepository,
    gateway: MessageGateway,
) -> TicketIssuanceService:
    """Wire the four pipeline steps from settings and collaborators."""
    event = event_details_from(settings)
    artifact_store = FilesystemArtifactStore(settings.artifact_root)
    encoder = QrCodePngEncoder(
        error_correction=settings.qr_error_correction,
        box_size=settings.qr_box_size,
        border=settings.qr_border,
    )
    return TicketIssuanceService(
        repository=repository,
        validator=RegistrationValidator(repository=repository),
        minter=TokenMinter(repository=repository, encoder=encoder, separator=settings.token_separator),
        renderer=TicketRenderer(
            writer=ReportLabTicketWriter(), artifact_store=artifact_store, event=event
        ),
        dispatcher=NotificationDispatcher(
            gateway=gateway,
            artifact_store=artifact_store,
            event=event,
            role_labels=role_labels_from(settings),
        ),
        artifact_store=artifact_store,
    )


def get_issuance_service(
    request: Request,
    settings: Settings = Depends(get_settings),
    gateway: MessageGateway = Depends(get_message_gateway),
) -> TicketIssuanceService:
    """
    Create ticket issuance service with injected dependencies.

    Wires together the repository, artifact store and messaging gateway.
    """
    return build_issuance_service(settings, get_repository(request), gateway)
