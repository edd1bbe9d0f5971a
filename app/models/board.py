"""
Evaluation board database models
A board groups one or more jobs and the candidates evaluated for them.
Older boards only carry the scalar job_id; newer ones carry the job_ids list
and keep job_id mirroring job_ids[0] for older readers.
"""
import uuid
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.core.states import AssessmentStatus, BoardStatus, BoardType
from app.core.timeutils import utcnow


class Board(Base):
    __tablename__ = "boards"

    id = Column(String(50), primary_key=True, index=True, default=lambda: uuid.uuid4().hex)
    board_name = Column(String(200), nullable=False)
    board_description = Column(Text, nullable=True)
    board_type = Column(String(20), default=BoardType.INITIAL.value)
    board_date = Column(DateTime, default=utcnow)
    status = Column(String(20), default=BoardStatus.DRAFT.value)

    # Job association, see app/services/schema_compat.py
    job_ids = Column(JSON, nullable=True)
    job_id = Column(Integer, nullable=True)

    created_by = Column(String(50), nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    candidates = relationship(
        "BoardCandidate",
        back_populates="board",
        cascade="all, delete-orphan",
        order_by="BoardCandidate.id",
    )
    assessments = relationship("Assessment", back_populates="board", cascade="all, delete-orphan")

    @property
    def candidate_ids(self):
        return [entry.candidate_id for entry in self.candidates]

    def find_candidate(self, candidate_id: str):
        for entry in self.candidates:
            if entry.candidate_id == candidate_id:
                return entry
        return None

    def __repr__(self):
        return f"<Board {self.board_name} jobs={self.job_ids or self.job_id}>"


class BoardCandidate(Base):
    """A candidate on a board, remembering which of the board's jobs they belong to"""
    __tablename__ = "board_candidates"
    __table_args__ = (UniqueConstraint("board_id", "candidate_id", name="uq_board_candidate"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    board_id = Column(String(50), ForeignKey("boards.id", ondelete="CASCADE"), nullable=False, index=True)
    candidate_id = Column(String(50), ForeignKey("candidates.id"), nullable=False, index=True)
    assessment_status = Column(String(20), default=AssessmentStatus.NOT_STARTED.value)
    assigned_date = Column(DateTime, default=utcnow)
    job_id = Column(Integer, nullable=True)

    # Relationships
    board = relationship("Board", back_populates="candidates")
    candidate = relationship("Candidate", lazy="joined")

    # Populated candidate fields for responses
    @property
    def cand_name(self):
        return self.candidate.cand_name if self.candidate else None

    @property
    def cand_email(self):
        return self.candidate.cand_email if self.candidate else None

    def __repr__(self):
        return f"<BoardCandidate {self.candidate_id} on Board {self.board_id}>"
