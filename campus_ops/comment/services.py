# campus_ops/comment/services.py
import logging

from campus_ops.comment import policy
from campus_ops.comment.models import TicketComment
from campus_ops.comment.schemas import CommentCreate, CommentUpdate
from campus_ops.core.errors import ForbiddenError, NotFoundError
from campus_ops.core.security import Caller
from campus_ops.stores import Stores

logger = logging.getLogger(__name__)


def get_comment(stores: Stores, comment_id: int) -> TicketComment:
    comment = stores.comments.find_by_id(comment_id)
    if comment is None:
        raise NotFoundError("Comment", comment_id)
    return comment


def list_comments(stores: Stores, ticket_id: int) -> list[TicketComment]:
    _ensure_ticket(stores, ticket_id)
    return stores.comments.find_by_ticket_id_ordered(ticket_id)


def add_comment(stores: Stores, caller: Caller, ticket_id: int, payload: CommentCreate) -> TicketComment:
    _ensure_ticket(stores, ticket_id)
    author = stores.users.find_by_id(caller.user_id)
    if author is None:
        raise NotFoundError("User", caller.user_id)

    comment = TicketComment(
        ticket_id=ticket_id,
        user_id=author.id,
        user_name=author.name,
        user_profile_picture=author.profile_picture,
        user_role=author.role.value,
        content=payload.content,
    )
    saved = stores.comments.save(comment)
    logger.info(
        f"Comment {saved.id} added to ticket {ticket_id}",
        extra={"comment_id": saved.id, "ticket_id": ticket_id, "user_id": author.id},
    )
    return saved


def update_comment(stores: Stores, caller: Caller, comment_id: int, payload: CommentUpdate) -> TicketComment:
    comment = get_comment(stores, comment_id)
    if not policy.can_edit(caller, comment):
        raise ForbiddenError("You can only edit your own comments")

    comment.content = payload.content
    return stores.comments.save(comment)


def delete_comment(stores: Stores, caller: Caller, comment_id: int) -> None:
    comment = get_comment(stores, comment_id)
    if not policy.can_delete(caller, comment):
        raise ForbiddenError("You can only delete your own comments")

    ticket_id = comment.ticket_id
    stores.comments.delete_by_id(comment_id)
    logger.info(
        f"Comment {comment_id} deleted by {caller.user_id}",
        extra={"comment_id": comment_id, "ticket_id": ticket_id, "user_id": caller.user_id},
    )


def _ensure_ticket(stores: Stores, ticket_id: int) -> None:
    if not stores.tickets.exists_by_id(ticket_id):
        raise NotFoundError("Ticket", ticket_id)
