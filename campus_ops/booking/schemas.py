# campus_ops/booking/schemas.py
from datetime import date, datetime, time

from pydantic import BaseModel, Field, field_validator

from campus_ops.booking.models import BookingStatus


class BookingCreate(BaseModel):
    facility_id: int
    booking_date: date
    start_time: time
    end_time: time
    purpose: str = Field(..., min_length=1)
    expected_attendees: int | None = Field(default=None, ge=1)

    @field_validator("start_time", "end_time")
    @classmethod
    def local_time_only(cls, v: time) -> time:
        # Slots are wall-clock times at the facility; stored times carry no offset
        if v.tzinfo is not None:
            raise ValueError("time must not carry a UTC offset")
        return v


class BookingReview(BaseModel):
    # Optional on approve, required on reject (checked by the workflow)
    remarks: str | None = None


class BookingOut(BaseModel):
    id: int
    facility_id: int
    facility_name: str
    user_id: int
    user_name: str
    user_email: str
    booking_date: date
    start_time: time
    end_time: time
    purpose: str
    expected_attendees: int | None = None
    status: BookingStatus
    admin_remarks: str | None = None
    reviewed_by: int | None = None
    reviewed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
