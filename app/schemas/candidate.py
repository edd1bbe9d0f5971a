"""
Pydantic schemas for Candidate API
"""
from pydantic import BaseModel, EmailStr, field_validator
from typing import Optional
from datetime import datetime

from app.core.states import CandidateType, HiringStatus


def _empty_job_to_none(v):
    # The candidate form posts 0 or "" for "no job"
    if v in ("", 0, "0"):
        return None
    return v


class CandidateBase(BaseModel):
    cand_name: str
    cand_email: EmailStr
    cand_cnic_no: str
    cand_mobile_no: Optional[str] = None
    cand_remarks: Optional[str] = None
    candidate_type: CandidateType = CandidateType.INITIAL
    job_id: Optional[int] = None
    applied_job_id: Optional[int] = None
    current_job_id: Optional[int] = None
    user_account: Optional[str] = None

    @field_validator('job_id', 'applied_job_id', 'current_job_id', mode='before')
    @classmethod
    def empty_job(cls, v):
        return _empty_job_to_none(v)


class CandidateCreate(CandidateBase):
    hiring_status: HiringStatus = HiringStatus.APPLIED


class CandidateUpdate(BaseModel):
    cand_name: Optional[str] = None
    cand_email: Optional[EmailStr] = None
    cand_cnic_no: Optional[str] = None
    cand_mobile_no: Optional[str] = None
    cand_remarks: Optional[str] = None
    candidate_type: Optional[CandidateType] = None
    hiring_status: Optional[HiringStatus] = None
    job_id: Optional[int] = None
    applied_job_id: Optional[int] = None
    current_job_id: Optional[int] = None
    user_account: Optional[str] = None

    @field_validator('job_id', 'applied_job_id', 'current_job_id', mode='before')
    @classmethod
    def empty_job(cls, v):
        return _empty_job_to_none(v)


class CandidateResponse(BaseModel):
    id: str
    cand_name: str
    cand_email: str
    cand_cnic_no: str
    cand_mobile_no: Optional[str] = None
    candidate_type: str
    hiring_status: str
    job_id: Optional[int] = None
    applied_job_id: Optional[int] = None
    current_job_id: Optional[int] = None
    user_account: Optional[str] = None
    added_on: Optional[datetime] = None
    updated_on: Optional[datetime] = None

    class Config:
        from_attributes = True
