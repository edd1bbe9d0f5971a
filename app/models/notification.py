"""
In-app notification model
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, JSON
from app.core.database import Base
from app.core.timeutils import utcnow


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(50), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    message = Column(String(1000), nullable=False)
    type = Column(String(30), default="info")  # test_assignment, board_creation, system, ...
    priority = Column(String(10), default="medium")  # low, medium, high, urgent
    category = Column(String(20), default="general")  # tests, boards, candidates, ...
    data = Column(JSON, default=dict)
    action_url = Column(Text, nullable=True)
    action_text = Column(String(100), nullable=True)
    read = Column(Boolean, default=False)
    read_at = Column(DateTime, nullable=True)
    expires_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow)

    def __repr__(self):
        return f"<Notification {self.type} for {self.user_id}>"
