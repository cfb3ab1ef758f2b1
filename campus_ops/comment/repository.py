# campus_ops/comment/repository.py
from typing import Protocol

from sqlalchemy.orm import Session

from campus_ops.comment.models import TicketComment


class CommentStore(Protocol):
    def find_by_id(self, comment_id: int) -> TicketComment | None: ...
    def save(self, comment: TicketComment) -> TicketComment: ...
    def delete_by_id(self, comment_id: int) -> None: ...
    def delete_by_ticket_id(self, ticket_id: int) -> int: ...
    def find_by_ticket_id_ordered(self, ticket_id: int) -> list[TicketComment]: ...
    def count_by_ticket_id(self, ticket_id: int) -> int: ...


class SqlCommentStore:
    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, comment_id: int) -> TicketComment | None:
        return self.db.query(TicketComment).filter(TicketComment.id == comment_id).first()

    def save(self, comment: TicketComment) -> TicketComment:
        self.db.add(comment)
        self.db.commit()
        self.db.refresh(comment)
        return comment

    def delete_by_id(self, comment_id: int) -> None:
        self.db.query(TicketComment).filter(TicketComment.id == comment_id).delete()
        self.db.commit()

    def delete_by_ticket_id(self, ticket_id: int) -> int:
        deleted = self.db.query(TicketComment).filter(TicketComment.ticket_id == ticket_id).delete()
        self.db.commit()
        return deleted

    def find_by_ticket_id_ordered(self, ticket_id: int) -> list[TicketComment]:
        return (
            self.db.query(TicketComment)
            .filter(TicketComment.ticket_id == ticket_id)
            .order_by(TicketComment.created_at, TicketComment.id)
            .all()
        )

    def count_by_ticket_id(self, ticket_id: int) -> int:
        return self.db.query(TicketComment).filter(TicketComment.ticket_id == ticket_id).count()
