"""
API v1 routes.

Defines REST endpoints for the ticket issuance API.
"""

import base64
import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from src.api.dependencies import get_issuance_service
from src.api.models import ErrorResponse, IssueTicketRequest, IssueTicketResponse
from src.domain.exceptions import (
    ArtifactNotFound,
    DuplicateRegistration,
    InvalidRegistration,
    IssuanceFailed,
)
from src.domain.issuance import TicketIssuanceService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["v1"])


@router.post(
    "/tickets",
    response_model=IssueTicketResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {"model": ErrorResponse, "description": "Already registered for this event"},
        422: {"description": "Validation error"},
        500: {"model": ErrorResponse, "description": "Ticket issuance failed"},
    },
    summary="Register and issue a ticket",
    description="Register an attendee for an event, render their ticket and email it. "
    "Email delivery is best effort and does not affect the response.",
)
def issue_ticket(
    request_data: IssueTicketRequest,
    service: TicketIssuanceService = Depends(get_issuance_service),
) -> IssueTicketResponse:
    """
    Issue a ticket for one attendee.

    - **name**, **email**, **event_name**, **contact**, **role**: registrant details

    Returns the ticket id and the QR image as a data URL.
    """
    try:
        ticket = service.issue_ticket(
            request_data.name,
            request_data.email,
            request_data.event_name,
            request_data.contact,
            request_data.role,
        )
    except DuplicateRegistration:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Registration already exists for this event",
        ) from None
    except InvalidRegistration as e:
        raise HTTPException(
            status_code=422,
            detail=str(e),
        ) from None
    except IssuanceFailed:
        logger.exception("Ticket issuance failed for event %s", request_data.event_name)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Ticket issuance failed",
        ) from None

    registration = ticket.registration
    qr_data_url = "data:image/png;base64," + base64.b64encode(ticket.qr_image).decode()
    return IssueTicketResponse(
        message="Registration successful!",
        ticket_id=ticket.ticket_id,
        name=registration.name,
        email=registration.email,
        event_name=registration.event_name,
        qr_code=qr_data_url,
    )


@router.get(
    "/tickets/{ticket_id}/artifact",
    response_class=Response,
    responses={
        200: {"content": {"application/pdf": {}}, "description": "Rendered ticket"},
        404: {"model": ErrorResponse, "description": "Ticket not found"},
    },
    summary="Download a rendered ticket",
)
def download_ticket(
    ticket_id: str,
    service: TicketIssuanceService = Depends(get_issuance_service),
) -> Response:
    """Return the stored ticket document for a ticket id."""
    try:
        filename, content = service.ticket_artifact(ticket_id)
    except ArtifactNotFound:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Ticket not found",
        ) from None
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
