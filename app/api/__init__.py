from fastapi import APIRouter
from app.api.routes import jobs, candidates, tests, boards, notifications

api_router = APIRouter()

# Include all route modules
api_router.include_router(jobs.router)
api_router.include_router(candidates.router)
api_router.include_router(tests.router)
api_router.include_router(boards.router)
api_router.include_router(notifications.router)
