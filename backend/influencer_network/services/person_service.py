"""People (influencer roster) CRUD with tag and availability filters."""

import logging
import uuid
from typing import List, Optional, Tuple

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from influencer_network.database import utcnow
from influencer_network.models.person import Person
from influencer_network.schemas.person import PersonCreate, PersonUpdate
from influencer_network.services.base import apply_changes, flush_changes, get_or_404
from influencer_network.services.query import (
    PaginationParams,
    json_array_contains_any,
    paginate,
    search_clause,
)

logger = logging.getLogger(__name__)


class PersonService:

    async def list_people(
        self,
        db: AsyncSession,
        params: PaginationParams,
        status: Optional[str] = None,
        availability_status: Optional[str] = None,
        tags: Optional[List[str]] = None,
        assigned_to: Optional[uuid.UUID] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[Person], int]:
        stmt = select(Person)
        if status:
            stmt = stmt.where(Person.status == status)
        if availability_status:
            stmt = stmt.where(Person.availability_status == availability_status)
        if tags:
            stmt = stmt.where(json_array_contains_any(Person.tags, [t.lower() for t in tags]))
        if assigned_to:
            stmt = stmt.where(Person.assigned_to == assigned_to)
        clause = search_clause(
            search, [Person.full_name, Person.email, Person.short_bio, Person.long_bio]
        )
        if clause is not None:
            stmt = stmt.where(clause)
        return await paginate(db, stmt.order_by(desc(Person.created_at)), params)

    async def get_person(self, db: AsyncSession, person_id: uuid.UUID) -> Person:
        return await get_or_404(db, Person, person_id)

    async def create_person(self, db: AsyncSession, data: PersonCreate, assigned_to: uuid.UUID) -> Person:
        values = data.model_dump(mode="json")
        if values.get("email"):
            values["email"] = values["email"].lower()
        # JSON mode stringifies these; columns want native types
        values["default_rate_card_id"] = data.default_rate_card_id
        values["next_available_date"] = data.next_available_date

        person = Person(**values, assigned_to=assigned_to, last_activity=utcnow())
        db.add(person)
        await flush_changes(db)
        logger.info("Person %s created: %s", person.id, person.full_name)
        return person

    async def update_person(self, db: AsyncSession, person_id: uuid.UUID, data: PersonUpdate) -> Person:
        person = await get_or_404(db, Person, person_id)
        changes = data.model_dump(mode="json", exclude_unset=True)
        for field in ("default_rate_card_id", "next_available_date"):
            if field in changes:
                changes[field] = getattr(data, field)
        if changes.get("email"):
            changes["email"] = changes["email"].lower()
        changes["last_activity"] = utcnow()
        apply_changes(person, changes)
        await flush_changes(db)
        return person

    async def delete_person(self, db: AsyncSession, person_id: uuid.UUID) -> None:
        person = await get_or_404(db, Person, person_id)
        await db.delete(person)
        await flush_changes(db)
        logger.info("Person %s deleted", person_id)


person_service = PersonService()
