from __future__ import annotations

import os
import tempfile
from pathlib import Path

# Settings are read at import time, so point them at a scratch database first
_DB_DIR = Path(tempfile.mkdtemp(prefix="evaluation-boards-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_DIR / 'test.db'}"
os.environ["EMAIL_ENABLED"] = "false"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

import app.models  # noqa: E402,F401
from app.core.database import Base, SessionLocal, engine  # noqa: E402
from app.main import app as fastapi_app  # noqa: E402
from app.models import Candidate, Job, Test, User  # noqa: E402


class Seeder:
    """Inserts reference rows straight into the database"""

    def __init__(self, session) -> None:
        self.session = session
        self._cnic = 0

    def _save(self, obj):
        self.session.add(obj)
        self.session.commit()
        self.session.refresh(obj)
        return obj

    def test(self, test_id: int, test_name: str = "Aptitude Test") -> Test:
        return self._save(Test(test_id=test_id, test_name=test_name))

    def job(self, job_id: int, test_id: int | None = None, vacancy_count: int = 0, job_name: str | None = None) -> Job:
        return self._save(Job(
            job_id=job_id,
            job_name=job_name or f"Job {job_id}",
            test_id=test_id,
            vacancy_count=vacancy_count,
        ))

    def candidate(self, name: str, applied_job_id: int | None = None, **fields) -> Candidate:
        self._cnic += 1
        fields.setdefault("cand_email", f"{name.lower().replace(' ', '.')}@example.com")
        fields.setdefault("cand_cnic_no", f"35202-{self._cnic:07d}-1")
        return self._save(Candidate(cand_name=name, applied_job_id=applied_job_id, **fields))

    def user(self, user_id: str, role: str = "candidate", email: str | None = None) -> User:
        return self._save(User(id=user_id, username=user_id, email=email, role=role))


@pytest.fixture(autouse=True)
def reset_db() -> None:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    with SessionLocal() as session:
        yield session


@pytest.fixture
def seed(db) -> Seeder:
    return Seeder(db)


@pytest.fixture
def client() -> TestClient:
    return TestClient(fastapi_app)
