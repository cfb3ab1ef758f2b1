# campus_ops/ticket/services.py
import logging

from campus_ops.core.errors import ForbiddenError, InvalidArgumentError, InvalidStateError, NotFoundError
from campus_ops.core.security import Caller, Role, require_role
from campus_ops.stores import Stores
from campus_ops.ticket.models import (
    STATUS_UPDATE_ACTIONS,
    TICKET_WORKFLOW,
    Ticket,
    TicketPriority,
    TicketStatus,
)
from campus_ops.ticket.schemas import (
    TechnicianAssignment,
    TicketCreate,
    TicketOut,
    TicketRejection,
    TicketStatusUpdate,
)
from campus_ops.user.models import User

logger = logging.getLogger(__name__)


def get_ticket(stores: Stores, ticket_id: int) -> Ticket:
    ticket = stores.tickets.find_by_id(ticket_id)
    if ticket is None:
        raise NotFoundError("Ticket", ticket_id)
    return ticket


def describe_ticket(stores: Stores, ticket: Ticket) -> TicketOut:
    out = TicketOut.model_validate(ticket)
    return out.model_copy(update={"comment_count": stores.comments.count_by_ticket_id(ticket.id)})


def list_my_tickets(stores: Stores, caller: Caller) -> list[Ticket]:
    return stores.tickets.find_by_user(caller.user_id)


def list_assigned_tickets(stores: Stores, caller: Caller) -> list[Ticket]:
    require_role(caller, Role.TECHNICIAN, action="list assigned tickets")
    return stores.tickets.find_by_technician(caller.user_id)


def list_tickets(
    stores: Stores,
    caller: Caller,
    status: TicketStatus | None = None,
    priority: TicketPriority | None = None,
) -> list[Ticket]:
    require_role(caller, Role.ADMIN, Role.MANAGER, action="list all tickets")
    return stores.tickets.find_all(status=status, priority=priority)


def list_technicians(stores: Stores, caller: Caller) -> list[User]:
    require_role(caller, Role.ADMIN, Role.MANAGER, action="list technicians")
    return stores.users.find_by_role(Role.TECHNICIAN)


def create_ticket(stores: Stores, caller: Caller, payload: TicketCreate) -> Ticket:
    booking = stores.bookings.find_by_id(payload.booking_id)
    if booking is None:
        raise NotFoundError("Booking", payload.booking_id)
    if booking.user_id != caller.user_id:
        raise ForbiddenError("You can only create tickets for your own bookings")

    ticket = Ticket(
        booking_id=booking.id,
        facility_id=booking.facility_id,
        facility_name=booking.facility_name,
        location=booking.facility_name,
        user_id=booking.user_id,
        user_name=booking.user_name,
        user_email=booking.user_email,
        category=payload.category,
        priority=payload.priority,
        description=payload.description,
        contact_email=payload.contact_email or booking.user_email,
        contact_phone=payload.contact_phone,
        image_urls=list(payload.image_urls),
        status=TicketStatus.OPEN,
    )
    saved = stores.tickets.save(ticket)
    logger.info(
        f"Ticket {saved.id} opened against booking {booking.id}",
        extra={"ticket_id": saved.id, "booking_id": booking.id, "user_id": caller.user_id},
    )
    return saved


def assign_technician(
    stores: Stores, caller: Caller, ticket_id: int, payload: TechnicianAssignment,
) -> Ticket:
    require_role(caller, Role.ADMIN, Role.MANAGER, action="assign technician")
    ticket = get_ticket(stores, ticket_id)
    new_status = TICKET_WORKFLOW.target("assign", ticket.status)

    technician = stores.users.find_by_id(payload.technician_id)
    if technician is None:
        raise NotFoundError("Technician", payload.technician_id)
    if technician.role != Role.TECHNICIAN:
        raise InvalidArgumentError(f"User {technician.name} is not a technician", field="technician_id")

    ticket.assigned_technician_id = technician.id
    ticket.assigned_technician_name = technician.name
    ticket.assigned_by = caller.user_id
    ticket.status = new_status
    saved = stores.tickets.save(ticket)
    logger.info(
        f"Ticket {ticket_id} assigned to technician {technician.id} by {caller.user_id}",
        extra={"ticket_id": ticket_id, "user_id": caller.user_id},
    )
    return saved


def update_ticket_status(
    stores: Stores, caller: Caller, ticket_id: int, payload: TicketStatusUpdate,
) -> Ticket:
    require_role(caller, Role.ADMIN, Role.TECHNICIAN, action="update ticket status")
    ticket = get_ticket(stores, ticket_id)
    action = TICKET_WORKFLOW.action_for(ticket.status, payload.status, STATUS_UPDATE_ACTIONS)

    if action == "start" and ticket.assigned_technician_id is None:
        raise InvalidStateError("Ticket", ticket.status.value, "start", "no technician assigned")
    if action == "decline":
        require_role(caller, Role.ADMIN, action="reject ticket")
        ticket.rejection_reason = _require_reason(payload.remarks, field="remarks")
    if action == "resolve" and payload.remarks:
        ticket.resolution_notes = payload.remarks

    previous = ticket.status
    ticket.status = payload.status
    saved = stores.tickets.save(ticket)
    logger.info(
        f"Ticket {ticket_id} moved {previous.value} -> {payload.status.value} by {caller.user_id}",
        extra={"ticket_id": ticket_id, "user_id": caller.user_id, "status": payload.status.value},
    )
    return saved


def reject_ticket(stores: Stores, caller: Caller, ticket_id: int, payload: TicketRejection) -> Ticket:
    require_role(caller, Role.ADMIN, action="reject ticket")
    ticket = get_ticket(stores, ticket_id)
    new_status = TICKET_WORKFLOW.target("reject", ticket.status)
    reason = _require_reason(payload.reason, field="reason")

    ticket.status = new_status
    ticket.rejection_reason = reason
    saved = stores.tickets.save(ticket)
    logger.info(
        f"Ticket {ticket_id} rejected by {caller.user_id}: {reason}",
        extra={"ticket_id": ticket_id, "user_id": caller.user_id},
    )
    return saved


def delete_ticket(stores: Stores, caller: Caller, ticket_id: int) -> None:
    """Remove a ticket and its comments.

    Comments go first, then the ticket, each in its own commit. A failure in
    between leaves the ticket in place, so retrying the call finishes the job.
    """
    require_role(caller, Role.ADMIN, action="delete ticket")
    ticket = get_ticket(stores, ticket_id)
    removed = stores.comments.delete_by_ticket_id(ticket_id)
    stores.tickets.delete(ticket)
    logger.info(
        f"Ticket {ticket_id} deleted with {removed} comments",
        extra={"ticket_id": ticket_id, "user_id": caller.user_id},
    )


def _require_reason(text: str | None, *, field: str) -> str:
    reason = (text or "").strip()
    if not reason:
        raise InvalidArgumentError("Rejection reason is required", field=field)
    return reason
