"""
Admin service - the listing review workflow.

Admin identity is established by the route dependency before anything here
runs; this module only moves listings between states.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import CompanyNotFoundException
from app.core.logging import get_logger
from app.models.base import utcnow
from app.models.company import COMPANY_STATUS_APPROVED, COMPANY_STATUS_PENDING, COMPANY_STATUS_REJECTED
from app.models.user_company import RELATION_OWNER
from app.repositories.company_repository import CompanyRepository
from app.schemas.admin import CompanyStatusBrief, CompanyStatusResponse
from app.schemas.company import CompanyOwnerBrief, PendingCompanyResponse
from app.services.company_service import to_response
from app.services.notification_service import NotificationService

logger = get_logger(__name__)


class AdminService:
    """Approves, rejects and lists listings awaiting review."""

    def __init__(
        self,
        company_repo: Optional[CompanyRepository] = None,
        notifications: Optional[NotificationService] = None,
    ):
        self.company_repo = company_repo or CompanyRepository()
        self.notifications = notifications or NotificationService()

    async def approve(self, db: AsyncSession, admin_id: UUID, company_id: UUID) -> CompanyStatusResponse:
        return await self._set_status(db, admin_id, company_id, COMPANY_STATUS_APPROVED)

    async def reject(self, db: AsyncSession, admin_id: UUID, company_id: UUID) -> CompanyStatusResponse:
        return await self._set_status(db, admin_id, company_id, COMPANY_STATUS_REJECTED)

    async def _set_status(
        self,
        db: AsyncSession,
        admin_id: UUID,
        company_id: UUID,
        target: str,
    ) -> CompanyStatusResponse:
        """
        Move a listing to `target` from any state.

        Reaching a state the listing already has is a success with no write.
        Child collections are never touched.

        Raises:
            CompanyNotFoundException: Unknown company id.
        """
        company = await self.company_repo.get_by_id(db, company_id)
        if not company:
            raise CompanyNotFoundException()

        if company.status == target:
            logger.info("company_status_unchanged", company_id=str(company_id), status=target)
            return CompanyStatusResponse(
                changed=False,
                company=CompanyStatusBrief.model_validate(company),
            )

        previous = company.status
        try:
            company = await self.company_repo.update(db, company, status=target, updated_at=utcnow())
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "company_status_changed",
            company_id=str(company_id),
            from_status=previous,
            to_status=target,
            admin_id=str(admin_id),
        )

        response = CompanyStatusResponse(
            changed=True,
            company=CompanyStatusBrief.model_validate(company),
        )
        if target == COMPANY_STATUS_APPROVED:
            await self._notify_owners(db, response.company)
        return response

    async def _notify_owners(self, db: AsyncSession, company: CompanyStatusBrief) -> None:
        """Best-effort: the status change is already committed."""
        try:
            members = await self.company_repo.get_members(db, [company.id], relation=RELATION_OWNER)
        except SQLAlchemyError as exc:
            await db.rollback()
            logger.error(
                "notification_failed",
                notification="company_approved",
                company_id=str(company.id),
                error=str(exc),
            )
            return

        owners = [user for _, user in members.get(company.id, [])]
        recipients = [user.email for user in owners if user.email]

        await self.notifications.notify_company_approved(
            company_id=company.id,
            company_name=company.name,
            company_slug=company.slug,
            recipients=recipients,
            recipient_name=owners[0].name if len(owners) == 1 else None,
        )

    async def list_pending(self, db: AsyncSession) -> List[PendingCompanyResponse]:
        """PENDING listings, newest first, with children and owner contacts."""
        companies = await self.company_repo.find_by_status(db, COMPANY_STATUS_PENDING)
        company_ids = [c.id for c in companies]
        children = await self.company_repo.load_children(db, company_ids)
        members = await self.company_repo.get_members(db, company_ids)

        pending = []
        for company in companies:
            base = to_response(company, children.get(company.id))
            owners = [
                CompanyOwnerBrief(
                    user_id=link.user_id,
                    relation=link.relation,
                    name=user.name,
                    email=user.email,
                )
                for link, user in members.get(company.id, [])
            ]
            pending.append(PendingCompanyResponse(**base.model_dump(), owners=owners))
        return pending
