"""
Pydantic schemas for Test API
"""
from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class TestCreate(BaseModel):
    test_id: int
    test_name: str
    description: Optional[str] = None
    instruction: Optional[str] = None
    test_duration: int = 60
    test_status: int = 1


class TestResponse(TestCreate):
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
