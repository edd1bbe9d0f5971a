from app.models.job import Job
from app.models.candidate import Candidate, JOB_REFERENCE_FIELDS
from app.models.user import User
from app.models.test import Test
from app.models.board import Board, BoardCandidate
from app.models.assignment import TestAssignment
from app.models.assessment import Assessment
from app.models.notification import Notification
from app.models.sequence import SequenceCounter
