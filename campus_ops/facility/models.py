# campus_ops/facility/models.py
from enum import Enum

from sqlalchemy import Column, Integer, String
from sqlalchemy import Enum as SAEnum

from campus_ops.core.database import Base, TimestampMixin


class FacilityStatus(str, Enum):
    ACTIVE = "ACTIVE"
    OUT_OF_SERVICE = "OUT_OF_SERVICE"


class FacilityType(str, Enum):
    LECTURE_HALL = "LECTURE_HALL"
    LAB = "LAB"
    MEETING_ROOM = "MEETING_ROOM"
    PROJECTOR = "PROJECTOR"
    CAMERA = "CAMERA"
    OTHER_EQUIPMENT = "OTHER_EQUIPMENT"


class Facility(TimestampMixin, Base):
    __tablename__ = "facilities"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, index=True, nullable=False)
    type = Column(SAEnum(FacilityType, native_enum=False), nullable=False)
    location = Column(String, nullable=False)
    capacity = Column(Integer, nullable=True)  # null for equipment
    status = Column(
        SAEnum(FacilityStatus, native_enum=False),
        default=FacilityStatus.ACTIVE,
        nullable=False,
        index=True,
    )
