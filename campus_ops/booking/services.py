# campus_ops/booking/services.py
# Transitions (BOOKING_WORKFLOW):
#   PENDING  -> APPROVED   approve  (ADMIN, re-checks conflicts)
#   PENDING  -> REJECTED   reject   (ADMIN, reason required)
#   PENDING | APPROVED -> CANCELLED  cancel (owner only)
# Create and approve lock the facility row before reading existing bookings.
import logging
from datetime import date

from campus_ops.booking.conflicts import find_conflict
from campus_ops.booking.models import ACTIVE_STATUSES, BOOKING_WORKFLOW, Booking, BookingStatus
from campus_ops.booking.schemas import BookingCreate, BookingReview
from campus_ops.core.database import utcnow
from campus_ops.core.errors import (
    ConflictError,
    ForbiddenError,
    InvalidArgumentError,
    NotFoundError,
)
from campus_ops.core.security import Caller, Role, require_role
from campus_ops.facility.models import Facility, FacilityStatus
from campus_ops.stores import Stores

logger = logging.getLogger(__name__)


def get_booking(stores: Stores, booking_id: int) -> Booking:
    booking = stores.bookings.find_by_id(booking_id)
    if booking is None:
        raise NotFoundError("Booking", booking_id)
    return booking


def list_my_bookings(stores: Stores, caller: Caller, status: BookingStatus | None = None) -> list[Booking]:
    return stores.bookings.find_by_user(caller.user_id, status)


def list_bookings(
    stores: Stores,
    caller: Caller,
    status: BookingStatus | None = None,
    facility_id: int | None = None,
) -> list[Booking]:
    require_role(caller, Role.ADMIN, action="list all bookings")
    return stores.bookings.find_all(status=status, facility_id=facility_id)


def list_facility_schedule(stores: Stores, facility_id: int, booking_date: date) -> list[Booking]:
    """Active bookings holding slots on ``facility_id`` for one day, by start time."""
    _get_facility(stores, facility_id)
    return stores.bookings.find_by_facility_and_date_and_status_in(
        facility_id, booking_date, ACTIVE_STATUSES,
    )


def create_booking(stores: Stores, caller: Caller, payload: BookingCreate) -> Booking:
    facility = _get_facility(stores, payload.facility_id, for_update=True)
    if facility.status != FacilityStatus.ACTIVE:
        raise InvalidArgumentError(
            f"Cannot book a facility that is currently {facility.status.value}",
            field="facility_id",
        )
    if not payload.start_time < payload.end_time:
        raise InvalidArgumentError("Start time must be before end time", field="end_time")

    _ensure_no_conflict(stores, payload.facility_id, payload.booking_date,
                        payload.start_time, payload.end_time)

    user = stores.users.find_by_id(caller.user_id)
    if user is None:
        raise NotFoundError("User", caller.user_id)

    booking = Booking(
        facility_id=facility.id,
        facility_name=facility.name,
        user_id=user.id,
        user_name=user.name,
        user_email=user.email,
        booking_date=payload.booking_date,
        start_time=payload.start_time,
        end_time=payload.end_time,
        purpose=payload.purpose,
        expected_attendees=payload.expected_attendees,
        status=BookingStatus.PENDING,
    )
    saved = stores.bookings.save(booking)
    logger.info(
        f"Booking {saved.id} created for facility {facility.id} on {saved.booking_date}",
        extra={"booking_id": saved.id, "facility_id": facility.id, "user_id": user.id},
    )
    return saved


def approve_booking(
    stores: Stores, caller: Caller, booking_id: int, payload: BookingReview | None = None,
) -> Booking:
    require_role(caller, Role.ADMIN, action="approve booking")
    facility_id = get_booking(stores, booking_id).facility_id

    # Status and conflicts are read under the facility lock; another review
    # may have committed since the booking was first loaded.
    _get_facility(stores, facility_id, for_update=True)
    booking = _lock_booking(stores, booking_id)
    new_status = BOOKING_WORKFLOW.target("approve", booking.status)
    _ensure_no_conflict(stores, booking.facility_id, booking.booking_date,
                        booking.start_time, booking.end_time, exclude_id=booking.id)

    booking.status = new_status
    booking.admin_remarks = payload.remarks if payload else None
    booking.reviewed_by = caller.user_id
    booking.reviewed_at = utcnow()
    saved = stores.bookings.save(booking)
    logger.info(
        f"Booking {booking_id} approved by {caller.user_id}",
        extra={"booking_id": booking_id, "user_id": caller.user_id},
    )
    return saved


def reject_booking(stores: Stores, caller: Caller, booking_id: int, payload: BookingReview) -> Booking:
    require_role(caller, Role.ADMIN, action="reject booking")
    booking = _lock_booking(stores, booking_id)
    new_status = BOOKING_WORKFLOW.target("reject", booking.status)

    reason = (payload.remarks or "").strip()
    if not reason:
        raise InvalidArgumentError("Rejection reason is required", field="remarks")

    booking.status = new_status
    booking.admin_remarks = reason
    booking.reviewed_by = caller.user_id
    booking.reviewed_at = utcnow()
    saved = stores.bookings.save(booking)
    logger.info(
        f"Booking {booking_id} rejected by {caller.user_id}: {reason}",
        extra={"booking_id": booking_id, "user_id": caller.user_id},
    )
    return saved


def cancel_booking(stores: Stores, caller: Caller, booking_id: int) -> Booking:
    booking = _lock_booking(stores, booking_id)
    if booking.user_id != caller.user_id:
        raise ForbiddenError("You can only cancel your own bookings")

    booking.status = BOOKING_WORKFLOW.target("cancel", booking.status)
    saved = stores.bookings.save(booking)
    logger.info(
        f"Booking {booking_id} cancelled by {caller.user_id}",
        extra={"booking_id": booking_id, "user_id": caller.user_id},
    )
    return saved


def delete_booking(stores: Stores, caller: Caller, booking_id: int) -> None:
    require_role(caller, Role.ADMIN, action="delete booking")
    booking = get_booking(stores, booking_id)
    stores.bookings.delete(booking)
    logger.info(f"Booking {booking_id} deleted", extra={"booking_id": booking_id, "user_id": caller.user_id})


def _lock_booking(stores: Stores, booking_id: int) -> Booking:
    booking = stores.bookings.find_by_id(booking_id, for_update=True)
    if booking is None:
        raise NotFoundError("Booking", booking_id)
    return booking


def _get_facility(stores: Stores, facility_id: int, *, for_update: bool = False) -> Facility:
    facility = stores.facilities.find_by_id(facility_id, for_update=for_update)
    if facility is None:
        raise NotFoundError("Facility", facility_id)
    return facility


def _ensure_no_conflict(stores, facility_id, booking_date, start, end, exclude_id=None) -> None:
    existing = stores.bookings.find_by_facility_and_date_and_status_in(
        facility_id, booking_date, ACTIVE_STATUSES,
    )
    clash = find_conflict(start, end, existing, exclude_id=exclude_id)
    if clash is not None:
        logger.warning(
            f"Booking conflict on facility {facility_id} {booking_date} with booking {clash.id}",
            extra={"facility_id": facility_id, "booking_id": clash.id, "error_code": "BOOKING_CONFLICT"},
        )
        raise ConflictError(clash)
