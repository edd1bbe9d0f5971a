"""
Candidate Aggregator
Collects the applicants of a set of jobs into one deduplicated list and
remembers which job each candidate was found under
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from sqlalchemy.orm import Session

from app.models.candidate import Candidate
from app.models.job import Job
from app.services.schema_compat import unique_job_ids

logger = logging.getLogger(__name__)


@dataclass
class AggregatedCandidates:
    candidates: List[Candidate] = field(default_factory=list)
    job_of: Dict[str, int] = field(default_factory=dict)

    def __len__(self):
        return len(self.candidates)


class CandidateAggregator:

    def resolve_jobs(self, db: Session, job_ids: Iterable[int]) -> List[Job]:
        """Jobs that exist, in request order; unknown ids are logged and skipped"""
        jobs = []
        for job_id in unique_job_ids(job_ids):
            job = db.query(Job).filter(Job.job_id == job_id).first()
            if not job:
                logger.warning("Job with ID %s not found, skipping", job_id)
                continue
            jobs.append(job)
        return jobs

    def aggregate(self, db: Session, jobs: Iterable[Job]) -> AggregatedCandidates:
        """
        Applicants of every job, each candidate once.
        When a candidate turns up under several jobs the earliest job wins.
        """
        jobs = list(jobs)
        result = AggregatedCandidates()

        for job in jobs:
            applicants = db.query(Candidate).filter(
                Candidate.applied_job_id == job.job_id
            ).order_by(Candidate.added_on, Candidate.id).all()

            if not applicants:
                logger.info("No candidates found for job ID %s", job.job_id)
                continue

            for candidate in applicants:
                if candidate.id in result.job_of:
                    continue
                result.job_of[candidate.id] = job.job_id
                result.candidates.append(candidate)

        logger.info(
            "Aggregated %d unique candidates across jobs %s",
            len(result.candidates), [job.job_id for job in jobs]
        )
        return result


# Singleton instance
candidate_aggregator = CandidateAggregator()
