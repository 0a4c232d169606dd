"""
Notification service - transactional email through the Resend HTTP API.

Every public method here is best-effort: failures are logged and reported
as False, never raised, so a slow or broken email provider cannot fail a
company submission or an approval.
"""
import html
from datetime import datetime, timezone
from typing import List, Optional, Sequence
from uuid import UUID

import httpx

from app.core.config import settings
from app.core.exceptions import DependencyFailureException
from app.core.logging import get_logger

logger = get_logger(__name__)


def _new_company_html(company_name: str, company_id: UUID, submitted_by: Optional[str], admin_url: str) -> str:
    year = datetime.now(timezone.utc).year
    return f"""<!DOCTYPE html>
<html>
  <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
    <h1 style="color: #01204C;">Control Compass</h1>
    <h2>New Company Pending Approval</h2>
    <p><strong>Company Name:</strong> {html.escape(company_name)}</p>
    <p><strong>Company ID:</strong> {company_id}</p>
    <p><strong>Submitted by:</strong> {html.escape(submitted_by or "Unknown")}</p>
    <p><strong>Status:</strong> PENDING</p>
    <p>A new company has been submitted to the Control Compass directory and is awaiting your approval.</p>
    <p><a href="{html.escape(admin_url)}">Review Company</a></p>
    <p style="font-size: 12px; color: #6c757d;">&copy; {year} Control Compass. All rights reserved.</p>
  </body>
</html>"""


def _company_approved_html(company_name: str, company_url: str, recipient_name: Optional[str]) -> str:
    greeting = f"Hi {html.escape(recipient_name)}," if recipient_name else "Hello,"
    return f"""<!DOCTYPE html>
<html>
  <body style="font-family: Arial, sans-serif; background-color: #FAFAFA;">
    <div style="max-width: 600px; margin: 0 auto; background-color: #ffffff; padding: 30px;">
      <h1 style="color: #01204C;">Company Approved!</h1>
      <p>{greeting}</p>
      <p>Great news! Your company <strong>{html.escape(company_name)}</strong> has been approved and is now live on Control Compass.</p>
      <p>Your company profile is now visible to potential customers searching for industrial controls and automation services.</p>
      <p><a href="{html.escape(company_url)}">View Your Company Profile</a></p>
    </div>
  </body>
</html>"""


class NotificationService:
    """Sends admin and owner emails."""

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        # Tests inject a client backed by httpx.MockTransport.
        self._client = client

    async def notify_new_company(
        self,
        *,
        company_id: UUID,
        company_name: str,
        submitted_by: Optional[str],
    ) -> bool:
        """Tell the admins a company is waiting for review."""
        admin_url = f"{settings.app_url.rstrip('/')}/admin/companies/{company_id}"
        return await self._send_best_effort(
            event="new_company",
            to=settings.admin_notification_emails,
            subject=f"New Company Pending Approval: {company_name}",
            body=_new_company_html(company_name, company_id, submitted_by, admin_url),
            company_id=company_id,
        )

    async def notify_company_approved(
        self,
        *,
        company_id: UUID,
        company_name: str,
        company_slug: str,
        recipients: Sequence[str],
        recipient_name: Optional[str] = None,
    ) -> bool:
        """Tell a company's owners their listing is live."""
        company_url = f"{settings.app_url.rstrip('/')}/companies/{company_slug}"
        return await self._send_best_effort(
            event="company_approved",
            to=list(recipients),
            subject=f"{company_name} is now live on Control Compass",
            body=_company_approved_html(company_name, company_url, recipient_name),
            company_id=company_id,
        )

    async def _send_best_effort(
        self,
        *,
        event: str,
        to: List[str],
        subject: str,
        body: str,
        company_id: UUID,
    ) -> bool:
        if not to:
            logger.info("notification_skipped", notification=event, reason="no_recipients", company_id=str(company_id))
            return False
        if not settings.resend_api_key:
            logger.info("notification_skipped", notification=event, reason="email_disabled", company_id=str(company_id))
            return False

        try:
            await self._send(to=to, subject=subject, body=body)
        except DependencyFailureException as exc:
            logger.error(
                "notification_failed",
                notification=event,
                company_id=str(company_id),
                error=exc.message,
            )
            return False

        logger.info("notification_sent", notification=event, company_id=str(company_id), recipients=len(to))
        return True

    async def _send(self, *, to: List[str], subject: str, body: str) -> None:
        """
        POST one email to Resend.

        Raises:
            DependencyFailureException: On transport errors or non-2xx responses.
        """
        payload = {
            "from": settings.email_from,
            "to": to,
            "subject": subject,
            "html": body,
        }
        headers = {"Authorization": f"Bearer {settings.resend_api_key}"}

        try:
            if self._client is not None:
                response = await self._client.post(settings.resend_api_url, json=payload, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=settings.email_timeout_seconds) as client:
                    response = await client.post(settings.resend_api_url, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            raise DependencyFailureException(f"Email transport error: {exc}") from exc

        if response.status_code >= 400:
            raise DependencyFailureException(
                f"Email provider returned {response.status_code}: {response.text[:200]}"
            )
