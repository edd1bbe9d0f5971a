"""
Job Vacancy Guard
Decides whether one more candidate may be bound to a job without exceeding
its vacancy count. A candidate counts against a job through any of its
job_id, applied_job_id or current_job_id fields.
"""
import logging
from typing import Iterable, List, Mapping, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.core.exceptions import BusinessRuleViolation
from app.models.candidate import Candidate, JOB_REFERENCE_FIELDS
from app.models.job import Job

logger = logging.getLogger(__name__)

FIELD_LABELS = {
    "job_id": "job ID",
    "applied_job_id": "applied job ID",
    "current_job_id": "current job ID",
}


class JobVacancyGuard:
    """
    Vacancy checks for the candidate create/update paths.

    The job rows are locked with FOR UPDATE in ascending id order before
    counting, so on databases that honour row locks a second binder of the
    same job waits until the first commits its candidate and then counts it.
    """

    def count_bound(self, db: Session, job_id: int, exclude_candidate_id: Optional[str] = None) -> int:
        """Candidates bound to a job through any of the three job fields"""
        query = db.query(func.count(Candidate.id)).filter(
            or_(
                Candidate.job_id == job_id,
                Candidate.applied_job_id == job_id,
                Candidate.current_job_id == job_id,
            )
        )
        if exclude_candidate_id:
            query = query.filter(Candidate.id != exclude_candidate_id)
        return query.scalar() or 0

    def has_vacancy(
        self,
        db: Session,
        job_id: Optional[int],
        exclude_candidate_id: Optional[str] = None
    ) -> bool:
        """
        True if one more candidate fits.
        No job id needs no check; a missing job has no vacancy;
        vacancy_count 0 means unlimited.
        """
        if not job_id:
            return True

        job = db.query(Job).filter(Job.job_id == job_id).first()
        if not job:
            logger.warning("Vacancy check against unknown job %s", job_id)
            return False

        if not job.vacancy_count:
            return True

        assigned = self.count_bound(db, job_id, exclude_candidate_id)
        return assigned < job.vacancy_count

    def lock_jobs(self, db: Session, job_ids: Iterable[int]) -> List[int]:
        """
        Lock the job rows in ascending id order and return the ids locked.
        Every binder takes the locks in the same order, so two requests
        binding the same pair of jobs cannot wait on each other.
        """
        ordered = sorted(set(job_ids))
        for job_id in ordered:
            db.query(Job.job_id).filter(Job.job_id == job_id).with_for_update().first()
        return ordered

    def ensure_vacancies(
        self,
        db: Session,
        values: Mapping[str, Optional[int]],
        existing: Optional[Candidate] = None
    ) -> None:
        """
        Check every job reference field independently; any failure rejects
        the whole create/update. On update only fields that change are checked
        and the candidate itself is not counted.
        """
        exclude_id = existing.id if existing is not None else None

        to_check = []
        for field in JOB_REFERENCE_FIELDS:
            job_id = values.get(field)
            if not job_id:
                continue
            if existing is not None and getattr(existing, field) == job_id:
                continue
            to_check.append((field, job_id))

        self.lock_jobs(db, [job_id for _, job_id in to_check])

        for field, job_id in to_check:
            if not self.has_vacancy(db, job_id, exclude_candidate_id=exclude_id):
                raise BusinessRuleViolation(
                    f"Cannot assign candidate to {FIELD_LABELS[field]} {job_id}. "
                    f"Maximum vacancy limit reached."
                )


# Singleton instance
vacancy_guard = JobVacancyGuard()
