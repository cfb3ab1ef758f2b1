# campus_ops/booking/models.py
from enum import Enum

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Time
from sqlalchemy import Enum as SAEnum

from campus_ops.core.database import Base, TimestampMixin
from campus_ops.core.workflow import Workflow


class BookingStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"


# Statuses that occupy a facility slot
ACTIVE_STATUSES = (BookingStatus.PENDING, BookingStatus.APPROVED)


class Booking(TimestampMixin, Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    facility_id = Column(Integer, ForeignKey("facilities.id"), index=True, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    booking_date = Column(Date, index=True, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    purpose = Column(String, nullable=False)
    expected_attendees = Column(Integer, nullable=True)
    status = Column(
        SAEnum(BookingStatus, native_enum=False),
        default=BookingStatus.PENDING,
        nullable=False,
        index=True,
    )

    # Display copies taken at creation; later profile edits do not flow back.
    facility_name = Column(String, nullable=False)
    user_name = Column(String, nullable=False)
    user_email = Column(String, nullable=False)

    # Review
    admin_remarks = Column(String, nullable=True)
    reviewed_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    reviewed_at = Column(DateTime(timezone=True), nullable=True)


BOOKING_WORKFLOW = Workflow(
    "Booking",
    {
        "approve": {"from": [BookingStatus.PENDING], "to": BookingStatus.APPROVED},
        "reject": {"from": [BookingStatus.PENDING], "to": BookingStatus.REJECTED},
        "cancel": {"from": [BookingStatus.PENDING, BookingStatus.APPROVED], "to": BookingStatus.CANCELLED},
    },
    terminal=[BookingStatus.REJECTED, BookingStatus.CANCELLED],
)
