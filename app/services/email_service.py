"""
Email Service for sending notifications to candidates
Handles: Test assignment emails
Sends through Resend when RESEND_API_KEY is set, otherwise SMTP
"""
import logging
import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from datetime import datetime
from typing import Optional

import resend

from app.core.config import settings

logger = logging.getLogger(__name__)


class EmailService:
    """Service for sending HR-related emails"""

    def __init__(self):
        self.enabled = settings.EMAIL_ENABLED
        self.smtp_host = settings.SMTP_HOST
        self.smtp_port = settings.SMTP_PORT
        self.smtp_user = settings.SMTP_USER
        self.smtp_password = settings.SMTP_PASSWORD
        self.resend_api_key = settings.RESEND_API_KEY
        self.email_from = settings.EMAIL_FROM
        self.company_name = settings.COMPANY_NAME
        self.portal_url = settings.PORTAL_URL.rstrip("/")

    def _send_email(self, to_email: str, subject: str, html_body: str) -> bool:
        """Send an email; returns False instead of raising on delivery failure"""
        if not self.enabled:
            logger.debug("Email disabled, not sending '%s' to %s", subject, to_email)
            return False

        sender = f"{self.company_name} HR <{self.email_from}>"
        try:
            if self.resend_api_key:
                resend.api_key = self.resend_api_key
                resend.Emails.send({
                    "from": sender,
                    "to": [to_email],
                    "subject": subject,
                    "html": html_body,
                })
                return True

            msg = MIMEMultipart("alternative")
            msg["Subject"] = subject
            msg["From"] = sender
            msg["To"] = to_email
            msg.attach(MIMEText(html_body, "html"))

            with smtplib.SMTP(self.smtp_host, self.smtp_port) as server:
                server.starttls()
                if self.smtp_user and self.smtp_password:
                    server.login(self.smtp_user, self.smtp_password)
                server.sendmail(self.email_from, to_email, msg.as_string())

            return True
        except Exception:
            logger.exception("Email sending failed to %s", to_email)
            return False

    def _wrap(self, title: str, color: str, content: str) -> str:
        return f"""
        <!DOCTYPE html>
        <html>
        <head>
            <style>
                body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; }}
                .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
                .header {{ background: {color}; color: white; padding: 20px; text-align: center; }}
                .content {{ padding: 20px; background: #f9f9f9; }}
                .box {{ background: #fff; border: 2px solid {color}; padding: 20px; border-radius: 8px; margin: 20px 0; }}
                .footer {{ text-align: center; padding: 20px; font-size: 12px; color: #666; }}
                .btn {{ display: inline-block; background: #4CAF50; color: white; padding: 12px 24px; text-decoration: none; border-radius: 5px; }}
            </style>
        </head>
        <body>
            <div class="container">
                <div class="header"><h1>{title}</h1></div>
                <div class="content">
                    {content}
                    <p>Best regards,<br>
                    <strong>HR Team</strong><br>
                    {self.company_name}</p>
                </div>
                <div class="footer">
                    <p>This is an automated message from {self.company_name} Recruitment System.</p>
                </div>
            </div>
        </body>
        </html>
        """

    def send_test_assignment_email(
        self,
        to_email: str,
        candidate_name: str,
        test_name: str,
        assignment_id: int,
        due_date: Optional[datetime]
    ) -> bool:
        """Tell a candidate a test was assigned and when it expires"""
        due = due_date.strftime("%A, %B %d, %Y") if due_date else "the date shown in the portal"
        subject = f"New Test Assigned: {test_name} - {self.company_name}"

        content = f"""
                    <p>Dear <strong>{candidate_name}</strong>,</p>
                    <p>You have been assigned a new test as part of your evaluation.</p>
                    <div class="box">
                        <p><strong>Test:</strong> {test_name}</p>
                        <p><strong>Assignment:</strong> #{assignment_id}</p>
                        <p><strong>Complete by:</strong> {due}</p>
                    </div>
                    <a href="{self.portal_url}/take-test/{assignment_id}" class="btn">Take Test</a>
        """
        return self._send_email(to_email, subject, self._wrap("New Test Assigned", "#2196F3", content))


# Singleton instance
email_service = EmailService()
