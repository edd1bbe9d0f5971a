"""
Candidate database model
A candidate is tied to a job through three historically overlapping fields:
job_id, applied_job_id and current_job_id
"""
import uuid
from sqlalchemy import Column, Integer, String, Text, DateTime
from app.core.database import Base
from app.core.states import CandidateType, HiringStatus
from app.core.timeutils import utcnow

JOB_REFERENCE_FIELDS = ("job_id", "applied_job_id", "current_job_id")


class Candidate(Base):
    __tablename__ = "candidates"

    id = Column(String(50), primary_key=True, index=True, default=lambda: uuid.uuid4().hex)
    cand_name = Column(String(200), nullable=False)
    cand_email = Column(String(200), nullable=False)
    cand_cnic_no = Column(String(50), nullable=False, unique=True)
    cand_mobile_no = Column(String(50), nullable=True)
    cand_remarks = Column(Text, nullable=True)

    candidate_type = Column(String(20), default=CandidateType.INITIAL.value)
    hiring_status = Column(String(30), default=HiringStatus.APPLIED.value)

    # Job references
    job_id = Column(Integer, nullable=True, index=True)
    applied_job_id = Column(Integer, nullable=True, index=True)
    current_job_id = Column(Integer, nullable=True, index=True)

    user_account = Column(String(50), nullable=True)  # Linked portal user, notification target

    added_by = Column(String(50), nullable=True)
    added_on = Column(DateTime, default=utcnow)
    updated_by = Column(String(50), nullable=True)
    updated_on = Column(DateTime, nullable=True)

    @property
    def associated_job_id(self):
        """The job a candidate joins a board for: current job first, then applied job"""
        return self.current_job_id or self.applied_job_id

    def __repr__(self):
        return f"<Candidate {self.cand_name} for Job #{self.applied_job_id}>"
