# campus_ops/stores.py
from dataclasses import dataclass

from sqlalchemy.orm import Session

from campus_ops.booking.repository import BookingStore, SqlBookingStore
from campus_ops.comment.repository import CommentStore, SqlCommentStore
from campus_ops.core.database import get_db
from campus_ops.facility.repository import FacilityStore, SqlFacilityStore
from campus_ops.ticket.repository import SqlTicketStore, TicketStore
from campus_ops.user.repository import SqlUserStore, UserStore


@dataclass
class Stores:
    """The collaborators every workflow operation reads from and writes to."""
    facilities: FacilityStore
    users: UserStore
    bookings: BookingStore
    tickets: TicketStore
    comments: CommentStore

    @classmethod
    def from_session(cls, db: Session) -> "Stores":
        return cls(
            facilities=SqlFacilityStore(db),
            users=SqlUserStore(db),
            bookings=SqlBookingStore(db),
            tickets=SqlTicketStore(db),
            comments=SqlCommentStore(db),
        )


# Request-scoped dependency built on get_db
def get_stores():
    sessions = get_db()
    try:
        yield Stores.from_session(next(sessions))
    finally:
        sessions.close()
