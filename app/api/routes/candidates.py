"""
Candidate API Endpoints
Binding a candidate to a job goes through the vacancy guard
"""
from enum import Enum
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional
from app.api.deps import get_current_user_id
from app.core.database import get_db
from app.core.exceptions import BusinessRuleViolation, NotFoundError
from app.core.states import transition
from app.core.timeutils import utcnow
from app.models.candidate import Candidate
from app.schemas.candidate import CandidateCreate, CandidateUpdate, CandidateResponse
from app.services.vacancy_guard import vacancy_guard

router = APIRouter(prefix="/candidates", tags=["Candidates"])


def _plain(values: dict) -> dict:
    return {key: value.value if isinstance(value, Enum) else value for key, value in values.items()}


def _ensure_unique_cnic(db: Session, cnic: str, exclude_id: Optional[str] = None):
    query = db.query(Candidate).filter(Candidate.cand_cnic_no == cnic)
    if exclude_id:
        query = query.filter(Candidate.id != exclude_id)
    if query.first():
        raise BusinessRuleViolation(f"Candidate with CNIC {cnic} already exists")


@router.post("/", response_model=CandidateResponse, status_code=status.HTTP_201_CREATED)
def create_candidate(
    candidate_data: CandidateCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Register a candidate
    Every job field that is set must have a free vacancy
    """
    values = _plain(candidate_data.model_dump())
    _ensure_unique_cnic(db, values["cand_cnic_no"])
    vacancy_guard.ensure_vacancies(db, values)

    candidate = Candidate(**values, added_by=user_id)
    db.add(candidate)
    db.commit()
    db.refresh(candidate)
    return candidate


@router.get("/", response_model=List[CandidateResponse])
def list_candidates(
    applied_job_id: Optional[int] = None,
    hiring_status: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db)
):
    """List candidates, optionally for one job"""
    query = db.query(Candidate)
    if applied_job_id is not None:
        query = query.filter(Candidate.applied_job_id == applied_job_id)
    if hiring_status:
        query = query.filter(Candidate.hiring_status == hiring_status)

    return query.order_by(Candidate.added_on, Candidate.id).offset(skip).limit(limit).all()


@router.get("/{candidate_id}", response_model=CandidateResponse)
def get_candidate(candidate_id: str, db: Session = Depends(get_db)):
    candidate = db.query(Candidate).filter(Candidate.id == candidate_id).first()
    if not candidate:
        raise NotFoundError("Candidate not found")
    return candidate


@router.put("/{candidate_id}", response_model=CandidateResponse)
def update_candidate(
    candidate_id: str,
    candidate_data: CandidateUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """
    Update a candidate
    Only job fields that change are checked against vacancies
    """
    candidate = db.query(Candidate).filter(Candidate.id == candidate_id).first()
    if not candidate:
        raise NotFoundError("Candidate not found")

    values = _plain(candidate_data.model_dump(exclude_unset=True))
    if values.get("cand_cnic_no"):
        _ensure_unique_cnic(db, values["cand_cnic_no"], exclude_id=candidate.id)
    vacancy_guard.ensure_vacancies(db, values, existing=candidate)

    target_status = values.pop("hiring_status", None)
    if target_status is not None:
        candidate.hiring_status = transition("hiring", candidate.hiring_status, target_status)

    for field, value in values.items():
        setattr(candidate, field, value)
    candidate.updated_by = user_id
    candidate.updated_on = utcnow()

    db.commit()
    db.refresh(candidate)
    return candidate
