"""
Administrator notification fan-out for assignment decisions.

Delivery is best-effort: a failure for one recipient or channel is logged and
the remaining recipients are still attempted. Nothing raised here may undo an
already committed decision.
"""

from dataclasses import dataclass, field
from datetime import datetime
from html import escape
from typing import List, Optional
from uuid import UUID

from subscheduler.application.interfaces.repositories import (
    AdminRecipient,
    NotificationRepositoryInterface,
)
from subscheduler.application.interfaces.services import EmailSenderInterface
from subscheduler.config.logging import get_logger
from subscheduler.domain.value_objects.assignment_status import AssignmentDecision
from subscheduler.domain.value_objects.org_calendar import (
    ORG_TIMEZONE,
    format_org_date,
)
from subscheduler.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from subscheduler.infrastructure.monitoring.metrics import record_admin_notification

logger = get_logger(__name__)


@dataclass
class AssignmentNotice:
    """Content of one decision notification."""

    job_id: UUID
    decision: AssignmentDecision
    subcontractor_name: str
    property_name: Optional[str]
    work_order_number: str
    scheduled_date: Optional[datetime] = None
    reason_code: Optional[str] = None
    reason_text: Optional[str] = None


@dataclass
class NotificationReport:
    """What the fan-out managed to deliver."""

    recipients: int = 0
    emails_sent: int = 0
    in_app_created: int = 0
    failures: List[str] = field(default_factory=list)


class AdminNotifier:
    """Sends decision notifications to the configured administrators."""

    def __init__(
        self,
        notification_repo: NotificationRepositoryInterface,
        email_sender: EmailSenderInterface,
        transaction_service: TransactionService,
        tz_name: str = ORG_TIMEZONE,
    ):
        self.notification_repo = notification_repo
        self.email_sender = email_sender
        self.transaction_service = transaction_service
        self.tz_name = tz_name

    def _readable_date(self, notice: AssignmentNotice) -> Optional[str]:
        if not notice.scheduled_date:
            return None
        return format_org_date(notice.scheduled_date, self.tz_name)

    def build_subject(self, notice: AssignmentNotice) -> str:
        return (
            f"[Assignment {notice.decision.value}] {notice.work_order_number} - "
            f"{notice.property_name or 'Job'}"
        )

    def build_summary(self, notice: AssignmentNotice) -> str:
        readable_date = self._readable_date(notice)
        scheduled = f" scheduled {readable_date}" if readable_date else ""
        return (
            f"Subcontractor {notice.subcontractor_name} {notice.decision.value} "
            f"assignment for {notice.property_name or 'job'} "
            f"({notice.work_order_number}){scheduled}."
        )

    def build_reason_line(self, notice: AssignmentNotice) -> str:
        if notice.decision != AssignmentDecision.DECLINED:
            return "Reason: n/a"
        reason = f"Reason: {notice.reason_code or 'n/a'}"
        if notice.reason_text:
            reason = f"{reason} - {notice.reason_text}"
        return reason

    def build_text(self, notice: AssignmentNotice) -> str:
        return f"{self.build_summary(notice)}\n\n{self.build_reason_line(notice)}"

    def build_html(self, notice: AssignmentNotice) -> str:
        readable_date = self._readable_date(notice)
        accepted = notice.decision == AssignmentDecision.ACCEPTED
        color = "#16a34a" if accepted else "#dc2626"
        parts = [
            '<div style="font-family: Arial, sans-serif; color: #111827; '
            "background: #f8fafc; padding: 16px; border-radius: 12px; "
            'border: 1px solid #e5e7eb; max-width: 520px;">',
            f'<p style="margin: 0 0 8px 0; font-size: 14px; color: #6b7280;">'
            f"{'Accepted' if accepted else 'Declined'} by "
            f"{escape(notice.subcontractor_name)}</p>",
            f'<h2 style="margin: 0 0 12px 0; font-size: 18px; font-weight: 700;">'
            f"{escape(notice.property_name or 'Job')} &bull; "
            f"{notice.work_order_number}</h2>",
        ]
        if readable_date:
            parts.append(
                f'<p style="margin: 0 0 8px 0; font-size: 14px; color: #374151;">'
                f"Scheduled: {readable_date}</p>"
            )
        parts.append(
            f'<p style="margin: 0 0 8px 0; font-size: 14px; color: #374151;">'
            f'Decision: <strong style="color:{color};">'
            f"{notice.decision.value.capitalize()}</strong></p>"
        )
        if not accepted:
            parts.append(
                f'<p style="margin: 0 0 6px 0; font-size: 13px; color: #374151;">'
                f"{escape(self.build_reason_line(notice))}</p>"
            )
        parts.append(
            '<p style="margin: 12px 0 0 0; font-size: 13px; color: #6b7280;">'
            "This is an automated assignment notification.</p>"
        )
        parts.append("</div>")
        return "\n".join(parts)

    async def notify_admins(self, notice: AssignmentNotice) -> NotificationReport:
        """Email and notify in-app every configured recipient."""
        report = NotificationReport()

        try:
            recipients = await self.notification_repo.get_admin_recipients()
        except Exception as e:
            logger.warning(
                "Failed to load assignment notification recipients",
                job_id=str(notice.job_id),
                error=str(e),
            )
            report.failures.append("recipients")
            return report

        if not recipients:
            logger.info(
                "No assignment notification recipients configured",
                job_id=str(notice.job_id),
            )
            return report

        subject = self.build_subject(notice)
        summary = self.build_summary(notice)
        text = self.build_text(notice)
        html = self.build_html(notice)

        for recipient in recipients:
            report.recipients += 1
            await self._send_email(recipient, notice, subject, html, text, report)
            await self._create_in_app(recipient, notice, subject, summary, report)

        logger.info(
            "Assignment notifications dispatched",
            job_id=str(notice.job_id),
            decision=notice.decision.value,
            recipients=report.recipients,
            emails_sent=report.emails_sent,
            in_app_created=report.in_app_created,
            failures=len(report.failures),
        )

        return report

    async def _send_email(
        self,
        recipient: AdminRecipient,
        notice: AssignmentNotice,
        subject: str,
        html: str,
        text: str,
        report: NotificationReport,
    ) -> None:
        if not recipient.email:
            return

        try:
            await self.email_sender.send_email(
                to=recipient.email, subject=subject, html=html, text=text
            )
            report.emails_sent += 1
            record_admin_notification("email", "success")
        except Exception as e:
            report.failures.append(f"email:{recipient.user_id}")
            record_admin_notification("email", "failed")
            logger.warning(
                "Failed to send assignment notification email",
                job_id=str(notice.job_id),
                user_id=str(recipient.user_id),
                error=str(e),
            )

    async def _create_in_app(
        self,
        recipient: AdminRecipient,
        notice: AssignmentNotice,
        subject: str,
        summary: str,
        report: NotificationReport,
    ) -> None:
        try:
            await self.transaction_service.execute_in_transaction(
                lambda: self.notification_repo.create_notification(
                    user_id=recipient.user_id,
                    title=subject,
                    message=summary,
                    notification_type="system",
                    reference_id=notice.job_id,
                    reference_type="job",
                ),
                name="admin_notification",
            )
            report.in_app_created += 1
            record_admin_notification("in_app", "success")
        except Exception as e:
            report.failures.append(f"in_app:{recipient.user_id}")
            record_admin_notification("in_app", "failed")
            logger.warning(
                "Failed to create in-app assignment notification",
                job_id=str(notice.job_id),
                user_id=str(recipient.user_id),
                error=str(e),
            )
