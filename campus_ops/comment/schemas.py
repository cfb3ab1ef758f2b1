# campus_ops/comment/schemas.py
from datetime import datetime

from pydantic import BaseModel, Field


class CommentBase(BaseModel):
    content: str = Field(..., min_length=1)


class CommentCreate(CommentBase):
    pass


class CommentUpdate(CommentBase):
    pass


class CommentOut(CommentBase):
    id: int
    ticket_id: int
    user_id: int
    user_name: str
    user_profile_picture: str | None = None
    user_role: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
