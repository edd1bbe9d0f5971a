"""
Evaluation Board API Endpoints
HR creates boards from jobs, adds candidates and evaluators record assessments
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional
from app.api.deps import get_current_user_id
from app.core.database import get_db
from app.schemas.assessment import AssessmentSave, AssessmentResponse
from app.schemas.board import (
    AssignCandidatesRequest, AssignCandidatesResponse, BoardCandidateRow, BoardCreate,
    BoardListItem, BoardResponse, BoardUpdate, DispatchReportResponse, MessageResponse
)
from app.services.assessment_service import assessment_service
from app.services.board_orchestrator import board_orchestrator

router = APIRouter(prefix="/boards", tags=["Evaluation Boards"])


@router.post("/", response_model=BoardResponse, status_code=status.HTTP_201_CREATED)
def create_board(
    board_data: BoardCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Create an evaluation board

    Collects the applicants of every selected job into the board and
    assigns each job's linked test to its candidates.
    `job_ids` is preferred; a single legacy `job_id` is still accepted.
    """
    return board_orchestrator.create_board(db, board_data, user_id)


@router.get("/", response_model=List[BoardListItem])
def list_boards(db: Session = Depends(get_db)):
    """List boards with the names of their jobs"""
    return board_orchestrator.list_boards(db)


@router.get("/{board_id}", response_model=BoardResponse)
def get_board(board_id: str, db: Session = Depends(get_db)):
    return board_orchestrator.get_board(db, board_id)


@router.put("/{board_id}", response_model=BoardResponse)
def update_board(board_id: str, board_data: BoardUpdate, db: Session = Depends(get_db)):
    """Update board details or status"""
    return board_orchestrator.update_board(db, board_id, board_data)


@router.delete("/{board_id}", response_model=MessageResponse)
def delete_board(board_id: str, db: Session = Depends(get_db)):
    board_orchestrator.delete_board(db, board_id)
    return MessageResponse(message="Board deleted successfully")


@router.post("/{board_id}/candidates", response_model=AssignCandidatesResponse)
def assign_candidates(
    board_id: str,
    request: AssignCandidatesRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Add candidates to an existing board

    Candidates already on the board are skipped. A candidate whose job is
    not yet on the board brings that job with it.
    """
    result = board_orchestrator.assign_candidates(db, board_id, request.candidate_ids, user_id)
    return AssignCandidatesResponse(
        message=result.message,
        assigned=result.assigned,
        already_present=result.already_present,
        failed=result.failed,
        failed_candidate_ids=result.failed_candidate_ids,
        new_job_ids=result.new_job_ids,
        assignments_created=len(result.issued.assignments),
        notifications=DispatchReportResponse(**result.issued.report.as_dict()),
        data=BoardResponse.model_validate(result.board),
    )


@router.get("/{board_id}/candidates", response_model=List[BoardCandidateRow])
def get_board_candidates(board_id: str, db: Session = Depends(get_db)):
    """Board candidates with their latest test results"""
    return board_orchestrator.get_board_candidates(db, board_id)


@router.delete("/{board_id}/candidates/{candidate_id}", response_model=MessageResponse)
def remove_candidate(board_id: str, candidate_id: str, db: Session = Depends(get_db)):
    board_orchestrator.remove_candidate(db, board_id, candidate_id)
    return MessageResponse(message="Candidate removed from board successfully")


@router.get("/{board_id}/candidates/{candidate_id}/assessment", response_model=Optional[AssessmentResponse])
def get_assessment(
    board_id: str,
    candidate_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """The calling evaluator's assessment, null if not started"""
    return assessment_service.get_assessment(db, board_id, candidate_id, user_id)


@router.post("/{board_id}/candidates/{candidate_id}/assessment", response_model=AssessmentResponse)
def save_assessment(
    board_id: str,
    candidate_id: str,
    assessment_data: AssessmentSave,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """Create or update the calling evaluator's assessment"""
    return assessment_service.save_assessment(db, board_id, candidate_id, user_id, assessment_data)
