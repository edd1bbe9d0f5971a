"""
Pydantic schemas for in-app notifications
"""
from pydantic import BaseModel
from typing import Any, Dict, Optional
from datetime import datetime


class NotificationResponse(BaseModel):
    id: int
    user_id: str
    title: str
    message: str
    type: str
    priority: str
    category: str
    data: Dict[str, Any] = {}
    action_url: Optional[str] = None
    action_text: Optional[str] = None
    read: bool = False
    read_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
