# campus_ops/user/models.py
from sqlalchemy import Column, Integer, String
from sqlalchemy import Enum as SAEnum

from campus_ops.core.database import Base, TimestampMixin
from campus_ops.core.security import Role


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    profile_picture = Column(String, nullable=True)
    role = Column(SAEnum(Role, native_enum=False), default=Role.USER, nullable=False, index=True)
