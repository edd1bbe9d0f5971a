"""
Pydantic schemas for board assessments
"""
from pydantic import BaseModel
from typing import Any, Dict, Literal, Optional
from datetime import datetime


class AssessmentSave(BaseModel):
    scores: Optional[Dict[str, Any]] = None
    notes: Optional[str] = None
    decision: Optional[Literal["hire", "consider", "reject", "pending", ""]] = None
    status: Optional[Literal["in_progress", "completed"]] = None


class AssessmentResponse(BaseModel):
    id: int
    board_id: str
    candidate_id: str
    evaluator_id: str
    scores: Dict[str, Any] = {}
    notes: Optional[str] = ""
    decision: Optional[str] = ""
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
