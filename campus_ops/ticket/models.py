# campus_ops/ticket/models.py
from enum import Enum

from sqlalchemy import JSON, Column, ForeignKey, Integer, String, Text
from sqlalchemy import Enum as SAEnum

from campus_ops.core.database import Base, TimestampMixin
from campus_ops.core.workflow import Workflow


class TicketStatus(str, Enum):
    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    RESOLVED = "RESOLVED"
    CLOSED = "CLOSED"
    REJECTED = "REJECTED"


class TicketCategory(str, Enum):
    ELECTRICAL = "ELECTRICAL"
    PLUMBING = "PLUMBING"
    HVAC = "HVAC"
    IT_EQUIPMENT = "IT_EQUIPMENT"
    FURNITURE = "FURNITURE"
    STRUCTURAL = "STRUCTURAL"
    CLEANING = "CLEANING"
    SAFETY = "SAFETY"
    OTHER = "OTHER"


class TicketPriority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class Ticket(TimestampMixin, Base):
    __tablename__ = "tickets"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id", ondelete="SET NULL"), index=True, nullable=True)
    facility_id = Column(Integer, index=True, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    category = Column(SAEnum(TicketCategory, native_enum=False), nullable=False)
    priority = Column(SAEnum(TicketPriority, native_enum=False), nullable=False, index=True)
    description = Column(Text, nullable=False)
    status = Column(
        SAEnum(TicketStatus, native_enum=False),
        default=TicketStatus.OPEN,
        nullable=False,
        index=True,
    )

    # Snapshot of the booking's display data at creation
    facility_name = Column(String, nullable=False)
    location = Column(String, nullable=False)
    user_name = Column(String, nullable=False)
    user_email = Column(String, nullable=False)

    contact_email = Column(String, nullable=False)
    contact_phone = Column(String, nullable=True)
    image_urls = Column(JSON, default=list, nullable=False)

    # Assignment
    assigned_technician_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=True)
    assigned_technician_name = Column(String, nullable=True)
    assigned_by = Column(Integer, ForeignKey("users.id"), nullable=True)

    rejection_reason = Column(String, nullable=True)
    resolution_notes = Column(Text, nullable=True)


_LIVE = [TicketStatus.OPEN, TicketStatus.IN_PROGRESS, TicketStatus.RESOLVED]

TICKET_WORKFLOW = Workflow(
    "Ticket",
    {
        # Driven by update_ticket_status
        "start": {"from": [TicketStatus.OPEN], "to": TicketStatus.IN_PROGRESS},
        "resolve": {"from": [TicketStatus.IN_PROGRESS], "to": TicketStatus.RESOLVED},
        "close": {"from": [TicketStatus.RESOLVED], "to": TicketStatus.CLOSED},
        "decline": {"from": [TicketStatus.OPEN], "to": TicketStatus.REJECTED},
        # Driven by assign_technician / reject_ticket
        "assign": {"from": _LIVE, "to": TicketStatus.IN_PROGRESS},
        "reject": {"from": _LIVE, "to": TicketStatus.REJECTED},
    },
    terminal=[TicketStatus.CLOSED, TicketStatus.REJECTED],
)

STATUS_UPDATE_ACTIONS = ("start", "resolve", "close", "decline")
