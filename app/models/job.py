"""
Job position database model
"""
from sqlalchemy import Column, Integer, String, Text, DateTime
from app.core.database import Base
from app.core.timeutils import utcnow


class Job(Base):
    __tablename__ = "jobs"

    job_id = Column(Integer, primary_key=True, index=True, autoincrement=False)
    job_name = Column(String(200), nullable=False)
    job_description = Column(Text)
    job_scale = Column(String(50))

    # Reference data owned by other parts of the portal
    org_id = Column(Integer, nullable=False, default=1000, index=True)
    inst_id = Column(Integer, nullable=True)
    dept_id = Column(Integer, nullable=True)
    cat_id = Column(Integer, nullable=True)

    test_id = Column(Integer, nullable=True)  # Linked test, not every job has one
    vacancy_count = Column(Integer, default=0)  # 0 = unlimited
    min_qualification = Column(String(200))
    job_type = Column(String(50), default="Full-time")  # Full-time, Part-time, Contract, Internship
    job_status = Column(Integer, default=1)  # 1 = Active, 0 = Inactive

    created_by = Column(String(50), nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    @property
    def has_test(self) -> bool:
        return bool(self.test_id)

    def __repr__(self):
        return f"<Job #{self.job_id} {self.job_name}>"
