# campus_ops/user/repository.py
from typing import Protocol

from sqlalchemy.orm import Session

from campus_ops.core.security import Role
from campus_ops.user.models import User


class UserStore(Protocol):
    def find_by_id(self, user_id: int) -> User | None: ...
    def find_by_role(self, role: Role) -> list[User]: ...


class SqlUserStore:
    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, user_id: int) -> User | None:
        return self.db.query(User).filter(User.id == user_id).first()

    def find_by_role(self, role: Role) -> list[User]:
        return self.db.query(User).filter(User.role == role).order_by(User.name).all()
