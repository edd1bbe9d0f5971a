"""
Job API Endpoints
HR Dashboard uses these to manage job postings and their linked tests
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from sqlalchemy import func, or_
from typing import List
from app.api.deps import get_current_user_id
from app.core.database import get_db
from app.core.exceptions import BusinessRuleViolation, NotFoundError
from app.models.candidate import Candidate
from app.models.job import Job
from app.schemas.job import JobCreate, JobUpdate, JobResponse, JobVacancyResponse
from app.services.vacancy_guard import vacancy_guard

router = APIRouter(prefix="/jobs", tags=["Jobs"])


def _get_job(db: Session, job_id: int) -> Job:
    job = db.query(Job).filter(Job.job_id == job_id).first()
    if not job:
        raise NotFoundError("Job not found")
    return job


def _with_candidate_count(db: Session, job: Job) -> JobResponse:
    response = JobResponse.model_validate(job)
    response.candidate_count = db.query(func.count(Candidate.id)).filter(
        Candidate.applied_job_id == job.job_id
    ).scalar()
    return response


@router.post("/", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
def create_job(
    job_data: JobCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id)
):
    """Create a new job vacancy"""
    if db.query(Job).filter(Job.job_id == job_data.job_id).first():
        raise BusinessRuleViolation(f"Job with ID {job_data.job_id} already exists")

    job = Job(**job_data.model_dump(), created_by=user_id)
    db.add(job)
    db.commit()
    db.refresh(job)
    return _with_candidate_count(db, job)


@router.get("/", response_model=List[JobResponse])
def list_jobs(
    skip: int = 0,
    limit: int = 100,
    job_status: int = None,
    db: Session = Depends(get_db)
):
    """List jobs with applicant counts"""
    query = db.query(Job)
    if job_status is not None:
        query = query.filter(Job.job_status == job_status)

    jobs = query.order_by(Job.job_id).offset(skip).limit(limit).all()
    return [_with_candidate_count(db, job) for job in jobs]


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """Get a specific job by ID"""
    return _with_candidate_count(db, _get_job(db, job_id))


@router.put("/{job_id}", response_model=JobResponse)
def update_job(job_id: int, job_data: JobUpdate, db: Session = Depends(get_db)):
    """Update a job; linking or unlinking a test affects future boards only"""
    job = _get_job(db, job_id)

    update_data = job_data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(job, field, value)

    db.commit()
    db.refresh(job)
    return _with_candidate_count(db, job)


@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_job(job_id: int, db: Session = Depends(get_db)):
    """Delete a job that no candidate references"""
    job = _get_job(db, job_id)

    in_use = db.query(func.count(Candidate.id)).filter(
        or_(
            Candidate.job_id == job_id,
            Candidate.applied_job_id == job_id,
            Candidate.current_job_id == job_id,
        )
    ).scalar()
    if in_use:
        raise BusinessRuleViolation(f"Job {job_id} still has {in_use} candidates")

    db.delete(job)
    db.commit()
    return None


@router.get("/{job_id}/vacancy", response_model=JobVacancyResponse)
def get_job_vacancy(job_id: int, db: Session = Depends(get_db)):
    """How many candidates are bound to a job and whether one more fits"""
    job = _get_job(db, job_id)
    return JobVacancyResponse(
        job_id=job.job_id,
        vacancy_count=job.vacancy_count or 0,
        assigned=vacancy_guard.count_bound(db, job.job_id),
        has_vacancy=vacancy_guard.has_vacancy(db, job.job_id),
    )
