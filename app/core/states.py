"""
Status enums and transition tables
Every status change on a board, a board candidate entry or a candidate
goes through `transition()` so invalid moves are rejected in one place
"""
import enum
from typing import Dict, FrozenSet, Type

from app.core.exceptions import InvalidTransition


class BoardStatus(str, enum.Enum):
    DRAFT = "draft"
    SCHEDULED = "scheduled"
    ACTIVE = "active"
    COMPLETED = "completed"


class BoardType(str, enum.Enum):
    INITIAL = "initial"
    PROBATION = "probation"
    OTHER = "other"


class AssessmentStatus(str, enum.Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class HiringStatus(str, enum.Enum):
    APPLIED = "applied"
    SHORTLISTED = "shortlisted"
    INTERVIEWED = "interviewed"
    TEST_ASSIGNED = "test_assigned"
    TEST_COMPLETED = "test_completed"
    BOARD_ASSIGNED = "board_assigned"
    BOARD_COMPLETED = "board_completed"
    PROBATION = "probation"
    HIRED = "hired"
    REJECTED = "rejected"


class CandidateType(str, enum.Enum):
    INITIAL = "initial"
    PROBATION = "probation"
    HIRED = "hired"
    REJECTED = "rejected"


class CompletionStatus(str, enum.Enum):
    PENDING = "pending"
    STARTED = "started"
    COMPLETED = "completed"
    EXPIRED = "expired"


class AssignmentStatus(int, enum.Enum):
    INACTIVE = 0
    ACTIVE = 1


def _table(mapping: Dict[enum.Enum, tuple]) -> Dict[str, FrozenSet[str]]:
    return {src.value: frozenset(dst.value for dst in targets) for src, targets in mapping.items()}


BOARD_TRANSITIONS = _table({
    BoardStatus.DRAFT: (BoardStatus.SCHEDULED, BoardStatus.ACTIVE),
    BoardStatus.SCHEDULED: (BoardStatus.DRAFT, BoardStatus.ACTIVE),
    BoardStatus.ACTIVE: (BoardStatus.COMPLETED,),
    BoardStatus.COMPLETED: (),
})

# Evaluators may reopen a completed assessment
ASSESSMENT_TRANSITIONS = _table({
    AssessmentStatus.NOT_STARTED: (AssessmentStatus.IN_PROGRESS, AssessmentStatus.COMPLETED),
    AssessmentStatus.IN_PROGRESS: (AssessmentStatus.COMPLETED,),
    AssessmentStatus.COMPLETED: (AssessmentStatus.IN_PROGRESS,),
})

_PIPELINE = (
    HiringStatus.SHORTLISTED,
    HiringStatus.INTERVIEWED,
    HiringStatus.TEST_ASSIGNED,
    HiringStatus.TEST_COMPLETED,
    HiringStatus.BOARD_ASSIGNED,
    HiringStatus.BOARD_COMPLETED,
    HiringStatus.PROBATION,
    HiringStatus.HIRED,
)


def _forward_from(status: HiringStatus) -> tuple:
    later = _PIPELINE[_PIPELINE.index(status) + 1:] if status in _PIPELINE else _PIPELINE
    return later + (HiringStatus.REJECTED,)


HIRING_TRANSITIONS = _table({
    HiringStatus.APPLIED: _forward_from(HiringStatus.APPLIED),
    HiringStatus.SHORTLISTED: _forward_from(HiringStatus.SHORTLISTED),
    HiringStatus.INTERVIEWED: _forward_from(HiringStatus.INTERVIEWED),
    # a test may be re-assigned after completion, and a board may be re-run
    HiringStatus.TEST_ASSIGNED: _forward_from(HiringStatus.TEST_ASSIGNED),
    HiringStatus.TEST_COMPLETED: _forward_from(HiringStatus.TEST_COMPLETED) + (HiringStatus.TEST_ASSIGNED,),
    HiringStatus.BOARD_ASSIGNED: _forward_from(HiringStatus.BOARD_ASSIGNED),
    HiringStatus.BOARD_COMPLETED: _forward_from(HiringStatus.BOARD_COMPLETED) + (HiringStatus.BOARD_ASSIGNED,),
    HiringStatus.PROBATION: (HiringStatus.HIRED, HiringStatus.REJECTED),
    HiringStatus.HIRED: (),
    HiringStatus.REJECTED: (),
})

_TABLES = {
    "board": (BoardStatus, BOARD_TRANSITIONS),
    "assessment": (AssessmentStatus, ASSESSMENT_TRANSITIONS),
    "hiring": (HiringStatus, HIRING_TRANSITIONS),
}


def can_transition(entity: str, current: str, target: str) -> bool:
    table = _TABLES[entity][1]
    if current == target:
        return True
    return target in table.get(current, frozenset())


def transition(entity: str, current: str, target: str) -> str:
    """
    Validate a status change and return the new value.
    Unknown values and moves missing from the table raise InvalidTransition.
    """
    enum_cls: Type[enum.Enum] = _TABLES[entity][0]
    valid = {member.value for member in enum_cls}
    if target not in valid:
        raise InvalidTransition(entity, str(current), str(target))
    if current is None:
        return target
    if not can_transition(entity, current, target):
        raise InvalidTransition(entity, current, target)
    return target
