"""
Evaluation Board Portal
=======================
Board formation and test-assignment service of the HR administration portal

Flow:
1. HR links tests to job vacancies
2. Candidates are registered against jobs within their vacancy limits
3. HR forms an evaluation board from one or more jobs
4. Applicants of those jobs join the board, deduplicated
5. Candidates of jobs with a linked test get a test assignment
6. Candidates and admins are notified in-app and by email
7. Evaluators record assessments per board candidate
"""
import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from sqlalchemy.exc import IntegrityError

from app.core.config import settings
from app.core.database import init_db
from app.core.exceptions import PortalError
from app.core.logging_config import configure_logging
from app.api import api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize logging and database on startup"""
    configure_logging()
    logger.info("Starting %s", settings.APP_NAME)
    init_db()
    logger.info("Database initialized")
    yield
    logger.info("Shutting down")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="""
## Evaluation Board Portal API

### Features:
- **Jobs & Tests**: Job vacancies with an optional linked test and a vacancy limit
- **Candidates**: Registration against jobs, enforcing vacancy limits
- **Evaluation Boards**: Boards over one or more jobs with their applicants
- **Test Assignments**: Sequentially numbered assignments for jobs with a test
- **Notifications**: In-app and email notices for candidates and admins
- **Assessments**: One assessment per evaluator and board candidate
    """,
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware for frontend access
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PortalError)
async def portal_error_handler(request: Request, exc: PortalError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Field errors answer 400 with their messages joined"""
    messages = []
    for error in exc.errors():
        message = str(error.get("msg", ""))
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        messages.append(message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": ", ".join(messages)}
    )


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "A record with these values already exists or violates a constraint"}
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error", "error": str(exc)}
    )


# Include API routes
app.include_router(api_router, prefix="/api/v1")


# Health check endpoint
@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": settings.APP_NAME}


@app.get("/")
def root():
    """Root endpoint with API info"""
    return {
        "service": settings.APP_NAME,
        "version": "1.0.0",
        "docs": "/docs",
        "endpoints": {
            "jobs": "/api/v1/jobs",
            "candidates": "/api/v1/candidates",
            "tests": "/api/v1/tests",
            "boards": "/api/v1/boards",
            "notifications": "/api/v1/notifications"
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
