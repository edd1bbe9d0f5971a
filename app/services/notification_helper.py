"""
Notification Helper
Creates in-app notifications for candidates and admins and sends the
matching candidate email. Errors creating notifications propagate to the
caller; email delivery problems are only logged.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.candidate import Candidate
from app.models.notification import Notification
from app.models.user import User
from app.services.email_service import EmailService, email_service

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssignmentNotice:
    assignment_id: int
    test_id: int
    test_name: str
    due_date: Optional[datetime]


class NotificationHelper:

    def __init__(self, mailer: EmailService = email_service):
        self.mailer = mailer

    def _create(self, db: Session, **fields) -> Notification:
        notification = Notification(**fields)
        db.add(notification)
        db.commit()
        db.refresh(notification)
        return notification

    def notify_test_assignment(
        self,
        db: Session,
        notice: AssignmentNotice,
        candidate_user: User,
        candidate: Optional[Candidate] = None
    ) -> Notification:
        """Tell the candidate's portal account about a new test"""
        due = notice.due_date.strftime("%Y-%m-%d") if notice.due_date else "the due date"
        notification = self._create(
            db,
            user_id=candidate_user.id,
            title="New Test Assigned",
            message=f"You have been assigned a new test: {notice.test_name}. Please complete it by {due}.",
            type="test_assignment",
            priority="medium",
            category="tests",
            data={
                "assignment_id": notice.assignment_id,
                "test_name": notice.test_name,
                "due_date": notice.due_date.isoformat() if notice.due_date else None,
                "test_id": notice.test_id,
            },
            action_url=f"/take-test/{notice.assignment_id}",
            action_text="Take Test",
            expires_at=notice.due_date,
        )

        email = (candidate.cand_email if candidate else None) or candidate_user.email
        if email:
            name = candidate.cand_name if candidate else candidate_user.username
            if not self.mailer.send_test_assignment_email(
                email, name, notice.test_name, notice.assignment_id, notice.due_date
            ):
                logger.info("Test assignment email not delivered to %s", email)

        return notification

    def notify_admin_test_assignment(
        self,
        db: Session,
        notice: AssignmentNotice,
        candidate: Candidate,
        assigned_by: str
    ) -> List[Notification]:
        """One low-priority notification per admin, except the one who assigned"""
        admins = db.query(User).filter(
            User.role == settings.ADMIN_ROLE,
            User.id != assigned_by
        ).all()

        notifications = []
        for admin in admins:
            notifications.append(self._create(
                db,
                user_id=admin.id,
                title="Test Assignment Created",
                message=f"{candidate.cand_name} has been assigned the test: {notice.test_name}.",
                type="test_assignment",
                priority="low",
                category="tests",
                data={
                    "assignment_id": notice.assignment_id,
                    "test_name": notice.test_name,
                    "candidate_name": candidate.cand_name,
                    "candidate_id": candidate.id,
                    "assigned_by": assigned_by,
                    "due_date": notice.due_date.isoformat() if notice.due_date else None,
                    "test_id": notice.test_id,
                },
                action_url="/test-assignments",
                action_text="View Assignments",
            ))
        return notifications


# Singleton instance
notification_helper = NotificationHelper()
