"""
Test assignment database model
assignment_id is the public sequential identifier, allocated by
app/services/sequence_allocator.py and independent of the storage id
"""
from sqlalchemy import Column, Integer, Float, String, Text, DateTime, ForeignKey, JSON
from app.core.database import Base
from app.core.states import AssignmentStatus, CompletionStatus
from app.core.timeutils import utcnow


class TestAssignment(Base):
    __tablename__ = "test_assignments"
    __test__ = False

    id = Column(Integer, primary_key=True, autoincrement=True)
    assignment_id = Column(Integer, nullable=False, unique=True, index=True)
    test_id = Column(Integer, nullable=False)
    candidate_id = Column(String(50), ForeignKey("candidates.id"), nullable=False, index=True)
    job_id = Column(Integer, default=0, index=True)
    board_id = Column(String(50), ForeignKey("boards.id", ondelete="SET NULL"), nullable=True, index=True)
    assigned_by = Column(String(50), nullable=False)

    hiring_stage = Column(String(20), default="screening")
    assignment_status = Column(Integer, default=AssignmentStatus.ACTIVE.value)

    # Scheduling
    scheduled_date = Column(DateTime, nullable=False)
    expiry_date = Column(DateTime, nullable=False)
    start_time = Column(DateTime, nullable=True)
    end_time = Column(DateTime, nullable=True)

    # Results
    completion_status = Column(String(20), default=CompletionStatus.PENDING.value)
    score = Column(Float, default=0)
    domain_scores = Column(JSON, nullable=True)
    subdomain_scores = Column(JSON, nullable=True)
    feedback = Column(Text, nullable=True)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    @property
    def is_completed(self) -> bool:
        return self.completion_status == CompletionStatus.COMPLETED.value

    def __repr__(self):
        return f"<TestAssignment #{self.assignment_id} test={self.test_id} candidate={self.candidate_id}>"
