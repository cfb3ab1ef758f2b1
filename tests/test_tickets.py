# tests/test_tickets.py
from datetime import time
from itertools import product

import pytest
from pydantic import ValidationError

from campus_ops.booking import services as booking_service
from campus_ops.comment import services as comment_service
from campus_ops.comment.schemas import CommentCreate
from campus_ops.core.errors import (
    ForbiddenError,
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
)
from campus_ops.core.security import Role
from campus_ops.ticket import services as ticket_service
from campus_ops.ticket.models import TicketCategory, TicketPriority, TicketStatus
from campus_ops.ticket.schemas import (
    TechnicianAssignment,
    TicketCreate,
    TicketRejection,
    TicketStatusUpdate,
)
from campus_ops.user.models import User

# The only pairs update_ticket_status may perform
STATUS_TABLE = {
    (TicketStatus.OPEN, TicketStatus.IN_PROGRESS),
    (TicketStatus.IN_PROGRESS, TicketStatus.RESOLVED),
    (TicketStatus.RESOLVED, TicketStatus.CLOSED),
    (TicketStatus.OPEN, TicketStatus.REJECTED),
}


@pytest.fixture
def booking(callers, make_booking):
    return make_booking(callers["alice"], time(9, 0), time(10, 0))


@pytest.fixture
def ticket(stores, callers, booking):
    payload = TicketCreate(
        booking_id=booking.id,
        category=TicketCategory.IT_EQUIPMENT,
        priority=TicketPriority.HIGH,
        description="Projector flickers",
        image_urls=["https://img.campus.edu/1.png"],
    )
    return ticket_service.create_ticket(stores, callers["alice"], payload)


def _assign(stores, callers, ticket_id, who="manager", tech="tech"):
    return ticket_service.assign_technician(
        stores, callers[who], ticket_id, TechnicianAssignment(technician_id=callers[tech].user_id),
    )


def test_ticket_lifecycle_end_to_end(stores, callers, ticket):
    assert ticket.status == TicketStatus.OPEN

    assigned = _assign(stores, callers, ticket.id)
    assert assigned.status == TicketStatus.IN_PROGRESS
    assert assigned.assigned_technician_id == callers["tech"].user_id
    assert assigned.assigned_technician_name == "Tom Tech"
    assert assigned.assigned_by == callers["manager"].user_id

    resolved = ticket_service.update_ticket_status(
        stores, callers["tech"], ticket.id,
        TicketStatusUpdate(status=TicketStatus.RESOLVED, remarks="Replaced HDMI cable"),
    )
    assert resolved.status == TicketStatus.RESOLVED
    assert resolved.resolution_notes == "Replaced HDMI cable"

    closed = ticket_service.update_ticket_status(
        stores, callers["admin"], ticket.id, TicketStatusUpdate(status=TicketStatus.CLOSED),
    )
    assert closed.status == TicketStatus.CLOSED

    for target in TicketStatus:
        with pytest.raises(InvalidStateError):
            ticket_service.update_ticket_status(
                stores, callers["admin"], ticket.id, TicketStatusUpdate(status=target, remarks="x"),
            )


def test_create_copies_booking_display_data(ticket, booking):
    assert ticket.booking_id == booking.id
    assert ticket.facility_id == booking.facility_id
    assert ticket.facility_name == "Lab B204"
    assert ticket.location == "Lab B204"
    assert ticket.user_name == "Alice"
    assert ticket.user_email == "alice@campus.edu"
    # contact email falls back to the requester's
    assert ticket.contact_email == "alice@campus.edu"
    assert ticket.image_urls == ["https://img.campus.edu/1.png"]


def test_create_keeps_explicit_contact(stores, callers, booking):
    payload = TicketCreate(
        booking_id=booking.id, category=TicketCategory.HVAC, priority=TicketPriority.LOW,
        description="Too cold", contact_email="desk@campus.edu", contact_phone="555-0101",
    )
    created = ticket_service.create_ticket(stores, callers["alice"], payload)
    assert created.contact_email == "desk@campus.edu"
    assert created.contact_phone == "555-0101"


def test_create_against_someone_elses_booking_is_forbidden(stores, callers, booking):
    payload = TicketCreate(
        booking_id=booking.id, category=TicketCategory.OTHER,
        priority=TicketPriority.LOW, description="Not mine",
    )
    with pytest.raises(ForbiddenError):
        ticket_service.create_ticket(stores, callers["bob"], payload)


def test_create_against_missing_booking_is_not_found(stores, callers):
    payload = TicketCreate(
        booking_id=9999, category=TicketCategory.OTHER,
        priority=TicketPriority.LOW, description="Ghost",
    )
    with pytest.raises(NotFoundError):
        ticket_service.create_ticket(stores, callers["alice"], payload)


def test_create_validation_errors():
    # more than three evidence images
    with pytest.raises(ValidationError):
        TicketCreate(
            booking_id=1, category=TicketCategory.OTHER, priority=TicketPriority.LOW,
            description="Too many", image_urls=[f"https://img/{i}.png" for i in range(4)],
        )
    # empty description
    with pytest.raises(ValidationError):
        TicketCreate(booking_id=1, category=TicketCategory.OTHER, priority=TicketPriority.LOW, description="")


@pytest.mark.parametrize("current, target", list(product(TicketStatus, TicketStatus)))
def test_status_table_is_exhaustive(db, stores, callers, ticket, current, target):
    ticket.status = current
    ticket.assigned_technician_id = callers["tech"].user_id
    db.commit()

    update = TicketStatusUpdate(status=target, remarks="Duplicate report")
    if (current, target) in STATUS_TABLE:
        updated = ticket_service.update_ticket_status(stores, callers["admin"], ticket.id, update)
        assert updated.status == target
    else:
        with pytest.raises(InvalidStateError):
            ticket_service.update_ticket_status(stores, callers["admin"], ticket.id, update)


def test_start_without_technician_is_invalid_state(stores, callers, ticket):
    with pytest.raises(InvalidStateError):
        ticket_service.update_ticket_status(
            stores, callers["admin"], ticket.id, TicketStatusUpdate(status=TicketStatus.IN_PROGRESS),
        )


def test_decline_through_status_update_needs_admin_and_reason(stores, callers, ticket):
    with pytest.raises(ForbiddenError):
        ticket_service.update_ticket_status(
            stores, callers["tech"], ticket.id,
            TicketStatusUpdate(status=TicketStatus.REJECTED, remarks="spam"),
        )
    with pytest.raises(InvalidArgumentError):
        ticket_service.update_ticket_status(
            stores, callers["admin"], ticket.id, TicketStatusUpdate(status=TicketStatus.REJECTED),
        )
    declined = ticket_service.update_ticket_status(
        stores, callers["admin"], ticket.id,
        TicketStatusUpdate(status=TicketStatus.REJECTED, remarks="spam"),
    )
    assert declined.status == TicketStatus.REJECTED
    assert declined.rejection_reason == "spam"


@pytest.mark.parametrize("who", ["alice", "manager"])
def test_status_update_requires_admin_or_technician(stores, callers, ticket, who):
    _assign(stores, callers, ticket.id)
    with pytest.raises(ForbiddenError):
        ticket_service.update_ticket_status(
            stores, callers[who], ticket.id, TicketStatusUpdate(status=TicketStatus.RESOLVED),
        )


def test_resolution_notes_only_recorded_on_resolve(stores, callers, ticket):
    _assign(stores, callers, ticket.id)
    ticket_service.update_ticket_status(
        stores, callers["tech"], ticket.id, TicketStatusUpdate(status=TicketStatus.RESOLVED),
    )
    closed = ticket_service.update_ticket_status(
        stores, callers["admin"], ticket.id,
        TicketStatusUpdate(status=TicketStatus.CLOSED, remarks="looks good"),
    )
    assert closed.resolution_notes is None


def test_assign_non_technician_is_invalid_argument(stores, callers, ticket):
    for target in ("alice", "manager", "admin"):
        with pytest.raises(InvalidArgumentError):
            _assign(stores, callers, ticket.id, who="admin", tech=target)
    assert ticket_service.get_ticket(stores, ticket.id).status == TicketStatus.OPEN


def test_assign_unknown_technician_is_not_found(stores, callers, ticket):
    with pytest.raises(NotFoundError):
        ticket_service.assign_technician(
            stores, callers["admin"], ticket.id, TechnicianAssignment(technician_id=9999),
        )


@pytest.mark.parametrize("who", ["alice", "tech"])
def test_assign_requires_admin_or_manager(stores, callers, ticket, who):
    with pytest.raises(ForbiddenError):
        _assign(stores, callers, ticket.id, who=who)


def test_reassign_while_in_progress(db, stores, callers, ticket):
    other = User(name="Tina Tech", email="tina@campus.edu", role=Role.TECHNICIAN)
    db.add(other)
    db.commit()

    _assign(stores, callers, ticket.id)
    reassigned = ticket_service.assign_technician(
        stores, callers["admin"], ticket.id, TechnicianAssignment(technician_id=other.id),
    )
    assert reassigned.status == TicketStatus.IN_PROGRESS
    assert reassigned.assigned_technician_id == other.id
    assert reassigned.assigned_by == callers["admin"].user_id


@pytest.mark.parametrize("terminal", [TicketStatus.CLOSED, TicketStatus.REJECTED])
def test_assign_to_terminal_ticket_is_invalid_state(db, stores, callers, ticket, terminal):
    ticket.status = terminal
    db.commit()
    with pytest.raises(InvalidStateError):
        _assign(stores, callers, ticket.id)


def test_reject_ticket(stores, callers, ticket):
    _assign(stores, callers, ticket.id)
    with pytest.raises(ForbiddenError):
        ticket_service.reject_ticket(stores, callers["manager"], ticket.id, TicketRejection(reason="dup"))
    with pytest.raises(InvalidArgumentError):
        ticket_service.reject_ticket(stores, callers["admin"], ticket.id, TicketRejection(reason="  "))

    rejected = ticket_service.reject_ticket(
        stores, callers["admin"], ticket.id, TicketRejection(reason="Duplicate of #12"),
    )
    assert rejected.status == TicketStatus.REJECTED
    assert rejected.rejection_reason == "Duplicate of #12"

    with pytest.raises(InvalidStateError):
        ticket_service.reject_ticket(stores, callers["admin"], ticket.id, TicketRejection(reason="again"))


def test_delete_ticket_cascades_comments(stores, callers, ticket):
    comment_service.add_comment(stores, callers["alice"], ticket.id, CommentCreate(content="Any update?"))
    comment_service.add_comment(stores, callers["tech"], ticket.id, CommentCreate(content="On it"))
    assert stores.comments.count_by_ticket_id(ticket.id) == 2

    with pytest.raises(ForbiddenError):
        ticket_service.delete_ticket(stores, callers["manager"], ticket.id)

    ticket_id = ticket.id
    ticket_service.delete_ticket(stores, callers["admin"], ticket_id)
    assert stores.comments.count_by_ticket_id(ticket_id) == 0
    with pytest.raises(NotFoundError):
        ticket_service.get_ticket(stores, ticket_id)
    with pytest.raises(NotFoundError):
        ticket_service.delete_ticket(stores, callers["admin"], ticket_id)


def test_deleting_booking_clears_ticket_reference(stores, callers, booking, ticket):
    booking_service.delete_booking(stores, callers["admin"], booking.id)

    kept = ticket_service.get_ticket(stores, ticket.id)
    assert kept.booking_id is None
    # display data copied at creation survives the booking
    assert kept.facility_name == "Lab B204"
    assert kept.user_email == "alice@campus.edu"


def test_describe_ticket_counts_comments(stores, callers, ticket):
    comment_service.add_comment(stores, callers["alice"], ticket.id, CommentCreate(content="Still broken"))
    out = ticket_service.describe_ticket(stores, ticket)
    assert out.id == ticket.id
    assert out.comment_count == 1
    assert out.status == TicketStatus.OPEN


def test_listings(stores, callers, booking, ticket):
    second = ticket_service.create_ticket(
        stores, callers["alice"],
        TicketCreate(booking_id=booking.id, category=TicketCategory.CLEANING,
                     priority=TicketPriority.LOW, description="Spilled coffee"),
    )
    _assign(stores, callers, ticket.id)

    assert [t.id for t in ticket_service.list_my_tickets(stores, callers["alice"])] == [second.id, ticket.id]
    assert ticket_service.list_my_tickets(stores, callers["bob"]) == []
    assert [t.id for t in ticket_service.list_assigned_tickets(stores, callers["tech"])] == [ticket.id]

    high = ticket_service.list_tickets(stores, callers["manager"], priority=TicketPriority.HIGH)
    assert [t.id for t in high] == [ticket.id]
    open_low = ticket_service.list_tickets(
        stores, callers["admin"], status=TicketStatus.OPEN, priority=TicketPriority.LOW,
    )
    assert [t.id for t in open_low] == [second.id]

    with pytest.raises(ForbiddenError):
        ticket_service.list_tickets(stores, callers["tech"])
    with pytest.raises(ForbiddenError):
        ticket_service.list_assigned_tickets(stores, callers["alice"])

    technicians = ticket_service.list_technicians(stores, callers["manager"])
    assert [u.id for u in technicians] == [callers["tech"].user_id]
