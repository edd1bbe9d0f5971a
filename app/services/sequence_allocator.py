"""
Sequence Allocator
Hands out strictly increasing assignment_id values from a counter row that
is bumped with a single UPDATE, so two batches never read the same maximum
"""
import logging

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.assignment import TestAssignment
from app.models.sequence import SequenceCounter

logger = logging.getLogger(__name__)


class SequenceAllocator:

    def __init__(self, name: str = settings.ASSIGNMENT_SEQUENCE_NAME):
        self.name = name

    def reserve(self, db: Session, count: int = 1) -> int:
        """
        Reserve `count` consecutive ids and return the first one.
        Callers number the rest of their batch locally.
        Must be called without other pending changes on the session.
        """
        if count < 1:
            raise ValueError("count must be at least 1")

        while True:
            bumped = db.execute(
                update(SequenceCounter)
                .where(SequenceCounter.name == self.name)
                .values(value=SequenceCounter.value + count)
            )
            if bumped.rowcount:
                last = db.execute(
                    select(SequenceCounter.value).where(SequenceCounter.name == self.name)
                ).scalar_one()
                db.commit()
                first = last - count + 1
                logger.debug("Reserved %s ids %d..%d", self.name, first, last)
                return first

            self._seed(db)

    def next(self, db: Session) -> int:
        return self.reserve(db, 1)

    def _seed(self, db: Session) -> None:
        """Create the counter, continuing after any ids already stored"""
        current_max = db.query(func.max(TestAssignment.assignment_id)).scalar() or 0
        db.add(SequenceCounter(name=self.name, value=current_max))
        try:
            db.commit()
            logger.info("Seeded sequence %s at %d", self.name, current_max)
        except IntegrityError:
            # another request created it first
            db.rollback()


# Singleton instance
sequence_allocator = SequenceAllocator()
