"""
Shared route dependencies
"""
from typing import Optional

from fastapi import Header

from app.core.config import settings


def get_current_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    """Acting user from the X-User-Id header; the portal's auth layer sets it upstream"""
    return x_user_id or settings.SYSTEM_USER_ID
