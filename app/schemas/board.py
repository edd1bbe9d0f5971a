"""
Pydantic schemas for Evaluation Board API
Responses always expose both `job_ids` and the legacy `job_id` mirror
"""
from pydantic import BaseModel, field_validator, model_validator
from typing import Any, Dict, List, Optional
from datetime import datetime

from app.core.states import AssessmentStatus, BoardStatus, BoardType
from app.services.schema_compat import serialize_job_fields


class BoardCreate(BaseModel):
    board_name: str
    board_description: Optional[str] = None
    board_type: BoardType = BoardType.INITIAL
    board_date: Optional[datetime] = None
    job_id: Optional[int] = None
    job_ids: Optional[List[int]] = None

    @field_validator('board_name', mode='before')
    @classmethod
    def require_board_name(cls, v):
        if v is None or not str(v).strip():
            raise ValueError("Board name is required")
        return str(v).strip()


class BoardUpdate(BaseModel):
    """Generic attribute merge; no workflow is re-run"""
    board_name: Optional[str] = None
    board_description: Optional[str] = None
    board_type: Optional[BoardType] = None
    board_date: Optional[datetime] = None
    status: Optional[BoardStatus] = None
    job_id: Optional[int] = None
    job_ids: Optional[List[int]] = None

    @field_validator('board_name')
    @classmethod
    def non_blank_name(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Board name is required")
        return v.strip() if v else v


class BoardCandidateResponse(BaseModel):
    candidate_id: str
    cand_name: Optional[str] = None
    cand_email: Optional[str] = None
    assessment_status: str = AssessmentStatus.NOT_STARTED.value
    assigned_date: Optional[datetime] = None
    job_id: Optional[int] = None

    class Config:
        from_attributes = True


class BoardResponse(BaseModel):
    id: str
    board_name: str
    board_description: Optional[str] = None
    board_type: Optional[str] = None
    board_date: Optional[datetime] = None
    status: str
    job_ids: Optional[List[int]] = None
    job_id: Optional[int] = None
    candidates: List[BoardCandidateResponse] = []
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @model_validator(mode='after')
    def mirror_legacy_job_id(self):
        fields = serialize_job_fields(self.job_ids, self.job_id)
        self.job_ids = fields["job_ids"]
        self.job_id = fields["job_id"]
        return self

    class Config:
        from_attributes = True


class BoardJobDetail(BaseModel):
    job_id: int
    job_name: Optional[str] = None
    test_id: Optional[int] = None


class BoardListItem(BoardResponse):
    job_details: List[BoardJobDetail] = []
    candidate_count: int = 0


class AssignCandidatesRequest(BaseModel):
    candidate_ids: List[str]

    @field_validator('candidate_ids')
    @classmethod
    def require_candidates(cls, v):
        if not v:
            raise ValueError("Please provide candidate IDs to assign")
        return v


class DispatchReportResponse(BaseModel):
    candidate_sent: int = 0
    admin_sent: int = 0
    failed: int = 0
    skipped: int = 0


class AssignCandidatesResponse(BaseModel):
    message: str
    assigned: int
    already_present: int
    failed: int
    failed_candidate_ids: List[str] = []
    new_job_ids: List[int] = []
    assignments_created: int = 0
    notifications: Optional[DispatchReportResponse] = None
    data: BoardResponse


class TestScores(BaseModel):
    assignment_pk: int
    assignment_id: int
    completion_status: str
    overall_score: float = 0
    domain_scores: List[Dict[str, Any]] = []
    subdomain_scores: List[Dict[str, Any]] = []
    completion_date: Optional[datetime] = None
    expiry_date: Optional[datetime] = None
    scheduled_date: Optional[datetime] = None


class BoardCandidateRow(BaseModel):
    """Candidate row of the board read-model"""
    id: str
    cand_name: str
    cand_email: Optional[str] = None
    cand_cnic_no: Optional[str] = None
    candidate_type: Optional[str] = None
    hiring_status: Optional[str] = None
    applied_job_id: Optional[int] = None
    current_job_id: Optional[int] = None
    assessment_status: str
    assigned_date: Optional[datetime] = None
    job_id: Optional[int] = None
    test_scores: Optional[TestScores] = None


class MessageResponse(BaseModel):
    message: str
