"""
Test Assignment Generator
Builds the test assignments for candidates joining a board. Only candidates
whose job links a test get one; the rest are skipped without error since
not every job requires a test.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, List, Mapping, Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.states import AssignmentStatus, CompletionStatus
from app.core.timeutils import utcnow
from app.models.assignment import TestAssignment
from app.models.job import Job
from app.services.sequence_allocator import SequenceAllocator, sequence_allocator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssignmentRequest:
    candidate_id: str
    job_id: Optional[int]


class TestAssignmentGenerator:
    __test__ = False

    def __init__(self, allocator: SequenceAllocator = sequence_allocator, expiry_days: Optional[int] = None):
        self.allocator = allocator
        self.expiry_days = expiry_days

    @property
    def expiry_window(self) -> timedelta:
        days = self.expiry_days if self.expiry_days is not None else settings.TEST_ASSIGNMENT_EXPIRY_DAYS
        return timedelta(days=days)

    def generate(
        self,
        db: Session,
        entries: Iterable[AssignmentRequest],
        jobs_by_id: Mapping[int, Job],
        board_id: Optional[str],
        assigned_by: str,
        now: Optional[datetime] = None
    ) -> List[TestAssignment]:
        """
        One unsaved assignment per entry whose job has a linked test.
        A single block of ids is reserved for the whole batch.
        """
        eligible = []
        for entry in entries:
            job = jobs_by_id.get(entry.job_id)
            if job is None or not job.test_id:
                continue
            eligible.append((entry, job))

        if not eligible:
            return []

        now = now or utcnow()
        expiry = now + self.expiry_window
        next_id = self.allocator.reserve(db, len(eligible))

        assignments = []
        for entry, job in eligible:
            assignments.append(TestAssignment(
                assignment_id=next_id,
                candidate_id=entry.candidate_id,
                test_id=job.test_id,
                job_id=job.job_id,
                board_id=board_id,
                assigned_by=assigned_by,
                assignment_status=AssignmentStatus.ACTIVE.value,
                completion_status=CompletionStatus.PENDING.value,
                scheduled_date=now,
                expiry_date=expiry,
            ))
            next_id += 1

        return assignments

    def persist(self, db: Session, assignments: List[TestAssignment]) -> List[TestAssignment]:
        """Insert the batch; an empty batch writes nothing"""
        if not assignments:
            return assignments

        db.add_all(assignments)
        db.commit()
        for assignment in assignments:
            db.refresh(assignment)

        logger.info(
            "Created %d test assignments (ids %d..%d)",
            len(assignments), assignments[0].assignment_id, assignments[-1].assignment_id
        )
        return assignments


# Singleton instance
assignment_generator = TestAssignmentGenerator()
