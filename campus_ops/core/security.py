# campus_ops/core/security.py
import logging
from dataclasses import dataclass
from enum import Enum

from campus_ops.core.errors import ForbiddenError

logger = logging.getLogger(__name__)


class Role(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"
    TECHNICIAN = "TECHNICIAN"
    MANAGER = "MANAGER"


@dataclass(frozen=True)
class Caller:
    """Identity the request layer has already authenticated."""
    user_id: int
    role: Role = Role.USER

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def require_role(caller: Caller, *roles: Role, action: str) -> None:
    """Raise ForbiddenError unless the caller holds one of ``roles``."""
    if caller.role in roles:
        return
    logger.warning(
        f"Role check failed for {action}: user {caller.user_id} has {caller.role.value}",
        extra={"user_id": caller.user_id, "error_code": "FORBIDDEN"},
    )
    allowed = ", ".join(r.value for r in roles)
    raise ForbiddenError(f"{action} requires one of: {allowed}")
