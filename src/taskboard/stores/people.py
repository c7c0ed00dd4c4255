"""People who can be assigned to tasks."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import select

from taskboard.core.exceptions import InvalidArgumentError
from taskboard.core.types import Person
from taskboard.storage.database import commit_or_raise
from taskboard.storage.models import PersonModel

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class PeopleStore:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(
        self, name: str | None, email: str | None = None, person_id: str | None = None
    ) -> Person:
        """Add a person; *person_id* lets callers reuse an external user id.

        Raises:
            InvalidArgumentError: Missing name or an id already in use
        """
        if not name or not name.strip():
            raise InvalidArgumentError("name", "person name is required")
        if person_id and await self.session.get(PersonModel, person_id) is not None:
            raise InvalidArgumentError("id", f"person {person_id!r} already exists")

        model = PersonModel(name=name, email=email or None)
        if person_id:
            model.id = person_id
        self.session.add(model)
        await commit_or_raise(self.session, "create_person")
        await self.session.refresh(model)
        logger.info("Created person id=%s", model.id)
        return model.to_domain()

    async def list(self) -> list[Person]:
        result = await self.session.execute(select(PersonModel).order_by(PersonModel.name))
        return [m.to_domain() for m in result.scalars().all()]


__all__ = ["PeopleStore"]
