# campus_ops/comment/models.py
from sqlalchemy import Column, ForeignKey, Integer, String, Text

from campus_ops.core.database import Base, TimestampMixin


class TicketComment(TimestampMixin, Base):
    __tablename__ = "ticket_comments"

    id = Column(Integer, primary_key=True, index=True)
    ticket_id = Column(Integer, index=True, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    # Author details as they were when the comment was posted
    user_name = Column(String, nullable=False)
    user_profile_picture = Column(String, nullable=True)
    user_role = Column(String, nullable=False)
    content = Column(Text, nullable=False)
