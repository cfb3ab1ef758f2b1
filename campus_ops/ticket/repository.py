# campus_ops/ticket/repository.py
from typing import Protocol

from sqlalchemy.orm import Session

from campus_ops.ticket.models import Ticket, TicketPriority, TicketStatus


class TicketStore(Protocol):
    def find_by_id(self, ticket_id: int) -> Ticket | None: ...
    def save(self, ticket: Ticket) -> Ticket: ...
    def delete(self, ticket: Ticket) -> None: ...
    def exists_by_id(self, ticket_id: int) -> bool: ...
    def find_by_user(self, user_id: int) -> list[Ticket]: ...
    def find_by_technician(self, technician_id: int) -> list[Ticket]: ...
    def find_all(
        self, status: TicketStatus | None = None, priority: TicketPriority | None = None,
    ) -> list[Ticket]: ...


class SqlTicketStore:
    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, ticket_id: int) -> Ticket | None:
        return self.db.query(Ticket).filter(Ticket.id == ticket_id).first()

    def save(self, ticket: Ticket) -> Ticket:
        self.db.add(ticket)
        self.db.commit()
        self.db.refresh(ticket)
        return ticket

    def delete(self, ticket: Ticket) -> None:
        self.db.delete(ticket)
        self.db.commit()

    def exists_by_id(self, ticket_id: int) -> bool:
        return self.db.query(Ticket.id).filter(Ticket.id == ticket_id).first() is not None

    def find_by_user(self, user_id: int) -> list[Ticket]:
        return self._newest_first(self.db.query(Ticket).filter(Ticket.user_id == user_id))

    def find_by_technician(self, technician_id: int) -> list[Ticket]:
        return self._newest_first(
            self.db.query(Ticket).filter(Ticket.assigned_technician_id == technician_id)
        )

    def find_all(
        self, status: TicketStatus | None = None, priority: TicketPriority | None = None,
    ) -> list[Ticket]:
        query = self.db.query(Ticket)
        if status is not None:
            query = query.filter(Ticket.status == status)
        if priority is not None:
            query = query.filter(Ticket.priority == priority)
        return self._newest_first(query)

    @staticmethod
    def _newest_first(query) -> list[Ticket]:
        return query.order_by(Ticket.created_at.desc(), Ticket.id.desc()).all()
