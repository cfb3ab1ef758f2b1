# campus_ops/booking/repository.py
from datetime import date
from typing import Iterable, Protocol

from sqlalchemy.orm import Session

from campus_ops.booking.models import Booking, BookingStatus


class BookingStore(Protocol):
    def find_by_id(self, booking_id: int, *, for_update: bool = False) -> Booking | None: ...
    def save(self, booking: Booking) -> Booking: ...
    def delete(self, booking: Booking) -> None: ...
    def find_by_facility_and_date_and_status_in(
        self, facility_id: int, booking_date: date, statuses: Iterable[BookingStatus],
    ) -> list[Booking]: ...
    def find_by_user(self, user_id: int, status: BookingStatus | None = None) -> list[Booking]: ...
    def find_all(
        self, status: BookingStatus | None = None, facility_id: int | None = None,
    ) -> list[Booking]: ...


class SqlBookingStore:
    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, booking_id: int, *, for_update: bool = False) -> Booking | None:
        query = self.db.query(Booking).filter(Booking.id == booking_id)
        if for_update:
            # Overwrite any copy already in the session with the locked row
            query = query.with_for_update().populate_existing()
        return query.first()

    def save(self, booking: Booking) -> Booking:
        self.db.add(booking)
        self.db.commit()
        self.db.refresh(booking)
        return booking

    def delete(self, booking: Booking) -> None:
        self.db.delete(booking)
        self.db.commit()

    def find_by_facility_and_date_and_status_in(
        self, facility_id: int, booking_date: date, statuses: Iterable[BookingStatus],
    ) -> list[Booking]:
        return (
            self.db.query(Booking)
            .filter(
                Booking.facility_id == facility_id,
                Booking.booking_date == booking_date,
                Booking.status.in_(list(statuses)),
            )
            .order_by(Booking.start_time, Booking.id)
            .all()
        )

    def find_by_user(self, user_id: int, status: BookingStatus | None = None) -> list[Booking]:
        query = self.db.query(Booking).filter(Booking.user_id == user_id)
        if status is not None:
            query = query.filter(Booking.status == status)
        return query.order_by(Booking.created_at.desc(), Booking.id.desc()).all()

    def find_all(
        self, status: BookingStatus | None = None, facility_id: int | None = None,
    ) -> list[Booking]:
        query = self.db.query(Booking)
        if status is not None:
            query = query.filter(Booking.status == status)
        if facility_id is not None:
            query = query.filter(Booking.facility_id == facility_id)
        return query.order_by(Booking.created_at.desc(), Booking.id.desc()).all()
