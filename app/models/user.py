"""
Portal user model
Only the fields notifications need; accounts are managed elsewhere
"""
import uuid
from sqlalchemy import Column, String, DateTime
from app.core.database import Base
from app.core.timeutils import utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(String(50), primary_key=True, index=True, default=lambda: uuid.uuid4().hex)
    username = Column(String(100), nullable=False, unique=True)
    email = Column(String(200), nullable=True)
    role = Column(String(30), nullable=False, default="candidate", index=True)  # admin, hr, candidate
    created_at = Column(DateTime, default=utcnow)

    def __repr__(self):
        return f"<User {self.username} ({self.role})>"
