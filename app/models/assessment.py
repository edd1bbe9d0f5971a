"""
Board assessment model - one per (board, candidate, evaluator)
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.core.timeutils import utcnow


class Assessment(Base):
    __tablename__ = "assessments"
    __table_args__ = (
        UniqueConstraint("board_id", "candidate_id", "evaluator_id", name="uq_assessment_evaluator"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    board_id = Column(String(50), ForeignKey("boards.id", ondelete="CASCADE"), nullable=False, index=True)
    candidate_id = Column(String(50), ForeignKey("candidates.id"), nullable=False, index=True)
    evaluator_id = Column(String(50), nullable=False)

    scores = Column(JSON, default=dict)
    notes = Column(Text, default="")
    decision = Column(String(20), default="")  # hire, consider, reject, pending
    status = Column(String(20), default="in_progress")  # in_progress, completed

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    board = relationship("Board", back_populates="assessments")

    def __repr__(self):
        return f"<Assessment board={self.board_id} candidate={self.candidate_id} by {self.evaluator_id}>"
