"""
Board Assessment Service
Each evaluator keeps one assessment per candidate on a board. Saving it
moves the candidate's board entry to the matching assessment status.
"""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.core.states import AssessmentStatus, transition
from app.models.assessment import Assessment
from app.models.board import Board, BoardCandidate
from app.models.candidate import Candidate
from app.schemas.assessment import AssessmentSave

logger = logging.getLogger(__name__)


class AssessmentService:

    def _board_entry(self, db: Session, board_id: str, candidate_id: str) -> BoardCandidate:
        board = db.query(Board).filter(Board.id == board_id).first()
        if not board:
            raise NotFoundError("Board not found")

        entry = board.find_candidate(candidate_id)
        if entry is None:
            if not db.query(Candidate).filter(Candidate.id == candidate_id).first():
                raise NotFoundError("Candidate not found")
            raise NotFoundError("Candidate not found in this board")
        return entry

    def _find(self, db: Session, board_id: str, candidate_id: str, evaluator_id: str) -> Optional[Assessment]:
        return db.query(Assessment).filter(
            Assessment.board_id == board_id,
            Assessment.candidate_id == candidate_id,
            Assessment.evaluator_id == evaluator_id
        ).first()

    def get_assessment(self, db: Session, board_id: str, candidate_id: str, evaluator_id: str) -> Optional[Assessment]:
        """The evaluator's assessment, or None when they have not started one"""
        self._board_entry(db, board_id, candidate_id)
        return self._find(db, board_id, candidate_id, evaluator_id)

    def save_assessment(
        self,
        db: Session,
        board_id: str,
        candidate_id: str,
        evaluator_id: str,
        data: AssessmentSave
    ) -> Assessment:
        entry = self._board_entry(db, board_id, candidate_id)
        target = data.status or AssessmentStatus.IN_PROGRESS.value

        # validate before writing anything
        entry_status = transition("assessment", entry.assessment_status, target)

        assessment = self._find(db, board_id, candidate_id, evaluator_id)
        if assessment is None:
            assessment = Assessment(
                board_id=board_id,
                candidate_id=candidate_id,
                evaluator_id=evaluator_id,
                scores={},
                notes="",
                decision="",
            )
            db.add(assessment)

        if data.scores is not None:
            assessment.scores = dict(data.scores)
        if data.notes is not None:
            assessment.notes = data.notes
        if data.decision is not None:
            assessment.decision = data.decision
        assessment.status = target
        entry.assessment_status = entry_status

        db.commit()
        db.refresh(assessment)
        logger.info(
            "Assessment by %s for candidate %s on board %s saved as %s",
            evaluator_id, candidate_id, board_id, target
        )
        return assessment


# Singleton instance
assessment_service = AssessmentService()
