"""
Database engine and sessions for the evaluation board portal

Boards, test assignments and notifications commit independently within a
request, so every service takes the request's Session and commits its own
step. Two services depend on PostgreSQL row semantics: the assignment id
counter (single-statement UPDATE) and the vacancy guard (SELECT ... FOR UPDATE).
SQLite, the local default, accepts both statements but ignores FOR UPDATE.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from app.core.config import settings

_is_sqlite = settings.DATABASE_URL.startswith("sqlite")

engine = create_engine(
    settings.DATABASE_URL,
    # the same SQLite file is used from FastAPI's worker threads
    connect_args={"check_same_thread": False} if _is_sqlite else {},
    pool_pre_ping=True,
    echo=settings.DEBUG
)

# expire_on_commit stays on: orchestrator steps re-read the board after each commit
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Request-scoped session; uncommitted work is rolled back on close"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Create the board, candidate, assignment, notification and counter tables"""
    from app.models import (  # noqa: F401
        assessment, assignment, board, candidate, job, notification, sequence, test, user
    )
    Base.metadata.create_all(bind=engine)
