# campus_ops/comment/policy.py
from campus_ops.comment.models import TicketComment
from campus_ops.core.security import Caller


def can_edit(caller: Caller, comment: TicketComment) -> bool:
    """Only the author may change a comment."""
    return comment.user_id == caller.user_id


def can_delete(caller: Caller, comment: TicketComment) -> bool:
    """The author, or an admin moderating the thread."""
    return comment.user_id == caller.user_id or caller.is_admin
