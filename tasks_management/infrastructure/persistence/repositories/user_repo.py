"""User repository: identity resolution over the app_user table."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from tasks_management.application.dtos.user import UserResult
from tasks_management.domain.exceptions import ResourceNotFoundException, ValidationException
from tasks_management.infrastructure.persistence.models.user import User
from tasks_management.infrastructure.persistence.repositories.base import BaseRepository
from tasks_management.infrastructure.persistence.repositories.counter_repo import (
    CounterRepository,
)

USER_COUNTER_NAME = "user"


def _to_result(u: User) -> UserResult:
    """Map User ORM to UserResult DTO."""
    return UserResult(
        user_id=u.user_id,
        company_id=u.company_id,
        screen_name=u.screen_name,
        first_name=u.first_name,
        last_name=u.last_name,
        email=u.email,
    )


class UserRepository(BaseRepository[User]):
    """User repository. Implements IUserRepository."""

    def __init__(self, db: AsyncSession, counter_repo: CounterRepository | None = None) -> None:
        super().__init__(db, User)
        self.counter_repo = counter_repo or CounterRepository(db)

    async def resolve(self, user_id: int) -> UserResult:
        """Return the identity; raise ResourceNotFoundException if unknown."""
        user = await self.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        return _to_result(user)

    async def create_user(
        self,
        company_id: int,
        screen_name: str,
        first_name: str = "",
        last_name: str = "",
        email: str | None = None,
        user_id: int | None = None,
    ) -> UserResult:
        """Create an identity (seeding and tests). user_id defaults to the next counter value."""
        if not screen_name or not screen_name.strip():
            raise ValidationException("screen_name must not be empty", field="screen_name")
        if user_id is None:
            user_id = await self.counter_repo.increment(USER_COUNTER_NAME)
        user = User(
            user_id=user_id,
            company_id=company_id,
            screen_name=screen_name.strip(),
            first_name=first_name,
            last_name=last_name,
            email=email,
        )
        created = await self.create(user)
        return _to_result(created)
