"""
Test (psychometric / technical assessment) database model
"""
from sqlalchemy import Column, Integer, String, Text, DateTime
from app.core.database import Base
from app.core.timeutils import utcnow


class Test(Base):
    __tablename__ = "tests"
    __test__ = False  # keep pytest from collecting the model

    test_id = Column(Integer, primary_key=True, index=True, autoincrement=False)
    test_name = Column(String(200), nullable=False)
    description = Column(Text)
    instruction = Column(Text)
    test_duration = Column(Integer, default=60)  # minutes
    test_status = Column(Integer, default=1)  # 1 = Active, 0 = Inactive
    created_at = Column(DateTime, default=utcnow)

    def __repr__(self):
        return f"<Test #{self.test_id} {self.test_name}>"
