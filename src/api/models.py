"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

from pydantic import AliasChoices, BaseModel, EmailStr, Field


class IssueTicketRequest(BaseModel):
    """Request model for ticket issuance."""

    name: str = Field(..., min_length=1, description="Attendee name")
    email: EmailStr
    event_name: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("event_name", "eventName"),
        description="Event to register for",
    )
    contact: str = Field(..., min_length=1, description="Phone number or other contact")
    role: str = Field(..., min_length=1, description='Attendee role, e.g. "Visitor" or "Speaker"')


class IssueTicketResponse(BaseModel):
    """Response model for a successfully issued ticket."""

    message: str
    ticket_id: str
    name: str
    email: str
    event_name: str
    qr_code: str = Field(..., description="QR image as a PNG data URL")


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
