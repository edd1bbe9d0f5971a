"""
Evaluation Board Orchestrator
Handles the board lifecycle:
1. Create a board from one or more jobs, snapshotting their applicants
2. Add candidates to an existing board, growing its job set when needed
3. Issue tests for candidates whose job links one and notify them
4. Read model of board candidates with their latest test scores
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import BusinessRuleViolation, NotFoundError
from app.core.states import AssessmentStatus, AssignmentStatus, BoardStatus, CompletionStatus, transition
from app.core.timeutils import utcnow
from app.models.assignment import TestAssignment
from app.models.board import Board, BoardCandidate
from app.models.candidate import Candidate
from app.models.job import Job
from app.schemas.board import BoardCandidateRow, BoardCreate, BoardJobDetail, BoardListItem, BoardUpdate, TestScores
from app.services.assignment_generator import AssignmentRequest, TestAssignmentGenerator, assignment_generator
from app.services.candidate_aggregator import CandidateAggregator, candidate_aggregator
from app.services.notification_dispatcher import DispatchReport, NotificationDispatcher, notification_dispatcher
from app.services.schema_compat import (
    board_job_ids, extend_board_jobs, normalize_requested_job_ids, set_board_jobs, unique_job_ids
)

logger = logging.getLogger(__name__)


@dataclass
class IssuedTests:
    assignments: List[TestAssignment] = field(default_factory=list)
    report: DispatchReport = field(default_factory=DispatchReport)


@dataclass
class AssignResult:
    board: Board
    message: str
    assigned: int = 0
    already_present: int = 0
    failed_candidate_ids: List[str] = field(default_factory=list)
    new_job_ids: List[int] = field(default_factory=list)
    issued: IssuedTests = field(default_factory=IssuedTests)

    @property
    def failed(self) -> int:
        return len(self.failed_candidate_ids)


class BoardOrchestrator:

    def __init__(
        self,
        aggregator: CandidateAggregator = candidate_aggregator,
        generator: TestAssignmentGenerator = assignment_generator,
        dispatcher: NotificationDispatcher = notification_dispatcher
    ):
        self.aggregator = aggregator
        self.generator = generator
        self.dispatcher = dispatcher

    def get_board(self, db: Session, board_id: str) -> Board:
        board = db.query(Board).filter(Board.id == board_id).first()
        if not board:
            raise NotFoundError("Board not found")
        return board

    def create_board(self, db: Session, data: BoardCreate, actor_id: str) -> Board:
        """
        Create a board for the selected jobs with all of their applicants,
        then issue tests for the jobs that link one.
        """
        job_ids = normalize_requested_job_ids(data.job_ids, data.job_id)
        if not job_ids:
            raise BusinessRuleViolation("At least one job must be selected to create a board.")

        jobs = self.aggregator.resolve_jobs(db, job_ids)
        if not jobs:
            raise NotFoundError("None of the selected jobs were found.")

        pool = self.aggregator.aggregate(db, jobs)
        now = utcnow()

        board = Board(
            board_name=data.board_name,
            board_description=data.board_description,
            board_type=data.board_type.value,
            board_date=data.board_date or now,
            status=BoardStatus.DRAFT.value,
            created_by=actor_id,
        )
        set_board_jobs(board, job_ids)

        for candidate in pool.candidates:
            board.candidates.append(BoardCandidate(
                candidate_id=candidate.id,
                assessment_status=AssessmentStatus.NOT_STARTED.value,
                assigned_date=now,
                job_id=pool.job_of[candidate.id],
            ))

        db.add(board)
        db.commit()
        db.refresh(board)
        logger.info("Created board %s with %d candidates for jobs %s", board.id, len(pool), job_ids)

        entries = [AssignmentRequest(candidate.id, pool.job_of[candidate.id]) for candidate in pool.candidates]
        self._issue_tests(
            db, board, entries,
            {job.job_id: job for job in jobs},
            {candidate.id: candidate for candidate in pool.candidates},
            actor_id,
        )

        db.refresh(board)
        return board

    def assign_candidates(self, db: Session, board_id: str, candidate_ids: Iterable[str], actor_id: str) -> AssignResult:
        """
        Add candidates to a board. Candidates already on it are left alone,
        so repeating a request writes nothing new.
        """
        board = self.get_board(db, board_id)

        job_ids = board_job_ids(board)
        if not job_ids:
            raise NotFoundError("No jobs associated with this board")

        jobs_by_id = {job.job_id: job for job in self.aggregator.resolve_jobs(db, job_ids)}
        if not jobs_by_id:
            raise NotFoundError("None of the board's jobs were found")

        requested = list(dict.fromkeys(candidate_ids))
        present = set(board.candidate_ids)
        already_present = [cid for cid in requested if cid in present]
        remaining = [cid for cid in requested if cid not in present]

        if not remaining:
            return AssignResult(
                board=board,
                message="All candidates are already assigned to this board",
                already_present=len(already_present),
            )

        found = {
            candidate.id: candidate
            for candidate in db.query(Candidate).filter(Candidate.id.in_(remaining)).all()
        }
        failed = [cid for cid in remaining if cid not in found]
        if failed:
            logger.warning("Candidates not found, not assigned to board %s: %s", board.id, failed)

        now = utcnow()
        default_job_id = job_ids[0]
        queued_jobs: List[int] = []
        entries: List[AssignmentRequest] = []

        for cid in remaining:
            candidate = found.get(cid)
            if candidate is None:
                continue

            job_id = candidate.associated_job_id or default_job_id
            if job_id not in job_ids and job_id not in queued_jobs:
                queued_jobs.append(job_id)

            board.candidates.append(BoardCandidate(
                candidate_id=candidate.id,
                assessment_status=AssessmentStatus.NOT_STARTED.value,
                assigned_date=now,
                job_id=job_id,
            ))
            entries.append(AssignmentRequest(candidate.id, job_id))

        new_job_ids = extend_board_jobs(board, queued_jobs) if queued_jobs else []
        for job in self.aggregator.resolve_jobs(db, new_job_ids):
            jobs_by_id[job.job_id] = job

        db.commit()
        db.refresh(board)
        if new_job_ids:
            logger.info("Board %s extended with jobs %s", board.id, new_job_ids)

        issued = self._issue_tests(db, board, entries, jobs_by_id, found, actor_id)
        db.refresh(board)

        return AssignResult(
            board=board,
            message=f"{len(entries)} candidates assigned to board successfully",
            assigned=len(entries),
            already_present=len(already_present),
            failed_candidate_ids=failed,
            new_job_ids=new_job_ids,
            issued=issued,
        )

    def _issue_tests(
        self,
        db: Session,
        board: Board,
        entries: List[AssignmentRequest],
        jobs_by_id: Dict[int, Job],
        candidates_by_id: Dict[str, Candidate],
        actor_id: str
    ) -> IssuedTests:
        """Generate and store test assignments, then notify; notifications never fail the call"""
        assignments = self.generator.generate(db, entries, jobs_by_id, board.id, actor_id)
        if not assignments:
            return IssuedTests()

        self.generator.persist(db, assignments)
        report = self.dispatcher.dispatch(db, assignments, candidates_by_id, actor_id)
        return IssuedTests(assignments=assignments, report=report)

    def get_board_candidates(self, db: Session, board_id: str) -> List[BoardCandidateRow]:
        """
        Board candidates with their latest active test assignment.
        Assignments created before boards recorded board_id are found by job
        and get the board id written back.
        """
        board = self.get_board(db, board_id)
        if not board.candidates:
            return []

        candidate_ids = board.candidate_ids
        active = db.query(TestAssignment).filter(
            TestAssignment.candidate_id.in_(candidate_ids),
            TestAssignment.assignment_status == AssignmentStatus.ACTIVE.value
        )

        assignments = active.filter(TestAssignment.board_id == board.id).order_by(TestAssignment.id).all()
        if not assignments:
            job_ids = board_job_ids(board)
            if job_ids:
                assignments = active.filter(TestAssignment.job_id.in_(job_ids)).order_by(TestAssignment.id).all()
                self._backfill_board_id(db, board.id, assignments)

        latest = {}
        for assignment in assignments:
            latest[assignment.candidate_id] = assignment

        rows = []
        for entry in board.candidates:
            candidate = entry.candidate
            if candidate is None:
                continue
            assignment = latest.get(candidate.id)
            rows.append(BoardCandidateRow(
                id=candidate.id,
                cand_name=candidate.cand_name,
                cand_email=candidate.cand_email,
                cand_cnic_no=candidate.cand_cnic_no,
                candidate_type=candidate.candidate_type,
                hiring_status=candidate.hiring_status,
                applied_job_id=candidate.applied_job_id,
                current_job_id=candidate.current_job_id,
                assessment_status=entry.assessment_status or AssessmentStatus.NOT_STARTED.value,
                assigned_date=entry.assigned_date,
                job_id=entry.job_id or candidate.associated_job_id,
                test_scores=self._test_scores(assignment) if assignment else None,
            ))
        return rows

    def _backfill_board_id(self, db: Session, board_id: str, assignments: List[TestAssignment]) -> None:
        orphans = [assignment for assignment in assignments if assignment.board_id is None]
        if not orphans:
            return

        for assignment in orphans:
            assignment.board_id = board_id
        try:
            db.commit()
            logger.info("Backfilled board %s onto %d test assignments", board_id, len(orphans))
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Could not backfill board %s onto test assignments", board_id)

    def _test_scores(self, assignment: TestAssignment) -> TestScores:
        completed = assignment.completion_status == CompletionStatus.COMPLETED.value
        return TestScores(
            assignment_pk=assignment.id,
            assignment_id=assignment.assignment_id,
            completion_status=assignment.completion_status,
            overall_score=assignment.score or 0,
            domain_scores=(assignment.domain_scores or []) if completed else [],
            subdomain_scores=(assignment.subdomain_scores or []) if completed else [],
            completion_date=assignment.end_time if completed else None,
            expiry_date=assignment.expiry_date,
            scheduled_date=assignment.scheduled_date,
        )

    def list_boards(self, db: Session) -> List[BoardListItem]:
        boards = db.query(Board).order_by(Board.created_at.desc()).all()

        all_job_ids = {job_id for board in boards for job_id in board_job_ids(board)}
        jobs = {}
        if all_job_ids:
            jobs = {job.job_id: job for job in db.query(Job).filter(Job.job_id.in_(all_job_ids)).all()}

        items = []
        for board in boards:
            item = BoardListItem.model_validate(board)
            for job_id in item.job_ids:
                job = jobs.get(job_id)
                item.job_details.append(BoardJobDetail(
                    job_id=job_id,
                    job_name=job.job_name if job else None,
                    test_id=job.test_id if job else None,
                ))
            item.candidate_count = len(board.candidates)
            items.append(item)
        return items

    def update_board(self, db: Session, board_id: str, data: BoardUpdate) -> Board:
        """
        Merge the given attributes; candidates and tests are not touched.
        Requested job_ids come first, followed by any existing jobs they leave out.
        """
        board = self.get_board(db, board_id)
        values = data.model_dump(exclude_unset=True)

        target_status = values.pop("status", None)
        job_ids = values.pop("job_ids", None)
        job_id = values.pop("job_id", None)

        for key, value in values.items():
            if isinstance(value, Enum):
                value = value.value
            setattr(board, key, value)

        if target_status is not None:
            board.status = transition("board", board.status, target_status.value)

        # jobs are reordered or added, never dropped
        if job_ids is not None:
            requested = unique_job_ids(job_ids)
            if not requested:
                raise BusinessRuleViolation("A board must keep at least one job.")
            set_board_jobs(board, requested + board_job_ids(board))
        elif job_id:
            set_board_jobs(board, [job_id] + board_job_ids(board))

        db.commit()
        db.refresh(board)
        return board

    def delete_board(self, db: Session, board_id: str) -> None:
        """Delete the board with its candidates and assessments; test assignments stay"""
        board = self.get_board(db, board_id)

        db.query(TestAssignment).filter(TestAssignment.board_id == board.id).update(
            {TestAssignment.board_id: None}, synchronize_session=False
        )
        db.delete(board)
        db.commit()
        logger.info("Deleted board %s", board_id)

    def remove_candidate(self, db: Session, board_id: str, candidate_id: str) -> None:
        board = self.get_board(db, board_id)
        if not board.candidates:
            raise NotFoundError("No candidates assigned to this board")

        entry = board.find_candidate(candidate_id)
        if entry is None:
            raise NotFoundError("Candidate not found in this board")

        for assessment in list(board.assessments):
            if assessment.candidate_id == candidate_id:
                board.assessments.remove(assessment)
        board.candidates.remove(entry)
        db.commit()
        logger.info("Removed candidate %s from board %s", candidate_id, board_id)


# Singleton instance
board_orchestrator = BoardOrchestrator()
