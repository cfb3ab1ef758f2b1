# campus_ops/facility/repository.py
from typing import Protocol

from sqlalchemy.orm import Session

from campus_ops.facility.models import Facility


class FacilityStore(Protocol):
    """Read-only view of the facility catalogue."""
    def find_by_id(self, facility_id: int, *, for_update: bool = False) -> Facility | None: ...


class SqlFacilityStore:
    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, facility_id: int, *, for_update: bool = False) -> Facility | None:
        # for_update holds the facility row until the caller's next commit,
        # which serializes conflict checks for that facility.
        query = self.db.query(Facility).filter(Facility.id == facility_id)
        if for_update:
            query = query.with_for_update()
        return query.first()
