# campus_ops/ticket/schemas.py
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from campus_ops.core.config import get_settings
from campus_ops.ticket.models import TicketCategory, TicketPriority, TicketStatus


class TicketCreate(BaseModel):
    booking_id: int
    category: TicketCategory
    priority: TicketPriority
    description: str = Field(..., min_length=1)
    contact_email: str | None = None
    contact_phone: str | None = None
    image_urls: list[str] = Field(default_factory=list)

    @field_validator("image_urls")
    @classmethod
    def cap_evidence(cls, v: list[str]) -> list[str]:
        limit = get_settings().MAX_TICKET_EVIDENCE
        if len(v) > limit:
            raise ValueError(f"at most {limit} images allowed")
        return v


class TechnicianAssignment(BaseModel):
    technician_id: int


class TicketStatusUpdate(BaseModel):
    status: TicketStatus
    # Resolution notes on RESOLVED, rejection reason on REJECTED
    remarks: str | None = None


class TicketRejection(BaseModel):
    reason: str | None = None


class TicketOut(BaseModel):
    id: int
    booking_id: int | None = None
    facility_id: int
    facility_name: str
    location: str
    user_id: int
    user_name: str
    user_email: str
    category: TicketCategory
    priority: TicketPriority
    description: str
    contact_email: str
    contact_phone: str | None = None
    image_urls: list[str] = []
    status: TicketStatus
    assigned_technician_id: int | None = None
    assigned_technician_name: str | None = None
    assigned_by: int | None = None
    rejection_reason: str | None = None
    resolution_notes: str | None = None
    comment_count: int = 0
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
