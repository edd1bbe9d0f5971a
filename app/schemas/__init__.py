from app.schemas.job import JobCreate, JobUpdate, JobResponse, JobVacancyResponse
from app.schemas.candidate import CandidateCreate, CandidateUpdate, CandidateResponse
from app.schemas.test import TestCreate, TestResponse
from app.schemas.board import (
    BoardCreate, BoardUpdate, BoardResponse, BoardListItem, BoardCandidateRow,
    AssignCandidatesRequest, AssignCandidatesResponse, MessageResponse
)
from app.schemas.assessment import AssessmentSave, AssessmentResponse
from app.schemas.notification import NotificationResponse
