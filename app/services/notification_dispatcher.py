"""
Notification Dispatcher
Best-effort fan-out after test assignments are stored. Each recipient is
attempted on its own; a failure is logged and counted, never raised, and
never undoes the board or assignment writes that came before it.
"""
import logging
from collections import defaultdict
from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List, Mapping

from sqlalchemy.orm import Session

from app.models.assignment import TestAssignment
from app.models.candidate import Candidate
from app.models.test import Test
from app.models.user import User
from app.services.notification_helper import AssignmentNotice, NotificationHelper, notification_helper

logger = logging.getLogger(__name__)


@dataclass
class DispatchReport:
    candidate_sent: int = 0
    admin_sent: int = 0
    failed: int = 0
    skipped: int = 0

    def as_dict(self) -> dict:
        return asdict(self)


class NotificationDispatcher:

    def __init__(self, helper: NotificationHelper = notification_helper):
        self.helper = helper

    def dispatch(
        self,
        db: Session,
        assignments: Iterable[TestAssignment],
        candidates_by_id: Mapping[str, Candidate],
        actor_id: str
    ) -> DispatchReport:
        report = DispatchReport()

        by_test: Dict[int, List[TestAssignment]] = defaultdict(list)
        for assignment in assignments:
            by_test[assignment.test_id].append(assignment)
        if not by_test:
            return report

        try:
            tests = db.query(Test).filter(Test.test_id.in_(list(by_test))).all()
        except Exception:
            logger.exception("Could not load tests for assignment notifications")
            report.failed += sum(len(group) for group in by_test.values())
            return report
        tests_by_id = {test.test_id: test for test in tests}

        for test_id, group in by_test.items():
            test = tests_by_id.get(test_id)
            if test is None:
                logger.warning("Test %s not found, skipping %d notifications", test_id, len(group))
                report.skipped += len(group)
                continue

            for assignment in group:
                candidate = candidates_by_id.get(assignment.candidate_id)
                if candidate is None or not candidate.user_account:
                    report.skipped += 1
                    continue

                notice = AssignmentNotice(
                    assignment_id=assignment.assignment_id,
                    test_id=test_id,
                    test_name=test.test_name,
                    due_date=assignment.expiry_date,
                )
                self._notify_candidate(db, notice, candidate, report)
                self._notify_admins(db, notice, candidate, actor_id, report)

        logger.info("Assignment notifications: %s", report.as_dict())
        return report

    def _notify_candidate(self, db: Session, notice: AssignmentNotice, candidate: Candidate, report: DispatchReport):
        try:
            user = db.get(User, candidate.user_account)
            if user is None:
                # account id without a user row still gets the in-app notification
                user = User(id=candidate.user_account, username=candidate.cand_name, email=candidate.cand_email)
            self.helper.notify_test_assignment(db, notice, user, candidate)
            report.candidate_sent += 1
        except Exception:
            db.rollback()
            report.failed += 1
            logger.exception("Error sending notification to candidate %s", candidate.cand_name)

    def _notify_admins(
        self,
        db: Session,
        notice: AssignmentNotice,
        candidate: Candidate,
        actor_id: str,
        report: DispatchReport
    ):
        try:
            sent = self.helper.notify_admin_test_assignment(db, notice, candidate, actor_id)
            report.admin_sent += len(sent)
        except Exception:
            db.rollback()
            report.failed += 1
            logger.exception("Error sending admin notifications for candidate %s", candidate.cand_name)


# Singleton instance
notification_dispatcher = NotificationDispatcher()
