"""
Named integer counters backing sequential identifiers
"""
from sqlalchemy import Column, Integer, String
from app.core.database import Base


class SequenceCounter(Base):
    __tablename__ = "sequence_counters"

    name = Column(String(50), primary_key=True)
    value = Column(Integer, nullable=False, default=0)  # last id handed out

    def __repr__(self):
        return f"<SequenceCounter {self.name}={self.value}>"
