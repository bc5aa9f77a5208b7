"""Admin-side user management: listing, statistics, edits, (de)activation."""

import logging
import uuid
from typing import List, Optional, Tuple

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from influencer_network.exceptions import ValidationError
from influencer_network.models.user import User
from influencer_network.schemas.user import AdminUserUpdate, UserStats
from influencer_network.services.base import apply_changes, flush_changes, get_or_404
from influencer_network.services.query import PaginationParams, paginate, search_clause

logger = logging.getLogger(__name__)


class UserService:

    async def list_users(
        self,
        db: AsyncSession,
        params: PaginationParams,
        role: Optional[str] = None,
        is_active: Optional[bool] = None,
        is_email_verified: Optional[bool] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[User], int]:
        stmt = select(User)
        if role:
            stmt = stmt.where(User.role == role)
        if is_active is not None:
            stmt = stmt.where(User.is_active == is_active)
        if is_email_verified is not None:
            stmt = stmt.where(User.is_email_verified == is_email_verified)
        clause = search_clause(search, [User.full_name, User.email])
        if clause is not None:
            stmt = stmt.where(clause)
        return await paginate(db, stmt.order_by(desc(User.created_at)), params)

    async def get_user(self, db: AsyncSession, user_id: uuid.UUID) -> User:
        return await get_or_404(db, User, user_id)

    async def get_stats(self, db: AsyncSession) -> UserStats:
        total = (await db.execute(select(func.count(User.id)))).scalar() or 0
        active = (await db.execute(
            select(func.count(User.id)).where(User.is_active.is_(True))
        )).scalar() or 0
        verified = (await db.execute(
            select(func.count(User.id)).where(User.is_email_verified.is_(True))
        )).scalar() or 0
        rows = await db.execute(select(User.role, func.count(User.id)).group_by(User.role))

        return UserStats(
            total_users=total,
            active_users=active,
            verified_users=verified,
            inactive_users=total - active,
            unverified_users=total - verified,
            role_breakdown={role: count for role, count in rows.all()},
        )

    async def update_user(self, db: AsyncSession, user_id: uuid.UUID, data: AdminUserUpdate) -> User:
        user = await get_or_404(db, User, user_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if "first_name" in changes or "last_name" in changes:
            user.set_names(
                changes.pop("first_name", user.first_name),
                changes.pop("last_name", user.last_name),
            )
        apply_changes(user, changes)
        await flush_changes(db)
        logger.info("User %s updated by admin: %s", user.id, sorted(changes))
        return user

    async def delete_user(self, db: AsyncSession, user_id: uuid.UUID, acting_user: User) -> None:
        if user_id == acting_user.id:
            raise ValidationError("You cannot delete your own account")
        user = await get_or_404(db, User, user_id)
        await db.delete(user)
        await flush_changes(db)
        logger.info("User %s deleted by %s", user_id, acting_user.id)

    async def set_active(self, db: AsyncSession, user_id: uuid.UUID, active: bool) -> User:
        user = await get_or_404(db, User, user_id)
        apply_changes(user, {"is_active": active})
        await flush_changes(db)
        logger.info("User %s %s", user.id, "activated" if active else "deactivated")
        return user


user_service = UserService()
