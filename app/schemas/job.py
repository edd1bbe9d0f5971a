"""
Pydantic schemas for Job API
"""
from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime


class JobBase(BaseModel):
    """Base job schema"""
    job_name: str
    job_description: Optional[str] = None
    job_scale: Optional[str] = None
    org_id: int = 1000
    inst_id: Optional[int] = None
    dept_id: Optional[int] = None
    cat_id: Optional[int] = None
    test_id: Optional[int] = None
    vacancy_count: int = 0
    min_qualification: Optional[str] = None
    job_type: Optional[str] = "Full-time"
    job_status: int = 1

    @field_validator('test_id', mode='before')
    @classmethod
    def empty_test_to_none(cls, v):
        """The job form sends an empty string when no test is linked"""
        if v in ("", 0, "0"):
            return None
        return v

    @field_validator('vacancy_count')
    @classmethod
    def non_negative_vacancy(cls, v):
        if v < 0:
            raise ValueError("Vacancy count cannot be negative")
        return v


class JobCreate(JobBase):
    """Schema for creating a new job"""
    job_id: int


class JobUpdate(BaseModel):
    """Schema for updating a job"""
    job_name: Optional[str] = None
    job_description: Optional[str] = None
    job_scale: Optional[str] = None
    org_id: Optional[int] = None
    inst_id: Optional[int] = None
    dept_id: Optional[int] = None
    cat_id: Optional[int] = None
    test_id: Optional[int] = None
    vacancy_count: Optional[int] = None
    min_qualification: Optional[str] = None
    job_type: Optional[str] = None
    job_status: Optional[int] = None

    @field_validator('test_id', mode='before')
    @classmethod
    def empty_test_to_none(cls, v):
        if v in ("", 0, "0"):
            return None
        return v


class JobResponse(JobBase):
    """Response schema for job details"""
    job_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    candidate_count: Optional[int] = 0

    class Config:
        from_attributes = True


class JobVacancyResponse(BaseModel):
    job_id: int
    vacancy_count: int
    assigned: int
    has_vacancy: bool
