"""
User repository - encapsulates all user data access.
Email uniqueness is enforced by the database; violations surface as DuplicateEmailError.
"""

import logging
from contextlib import asynccontextmanager

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from task_manager.core.errors import DuplicateEmailError
from task_manager.db.models.user import User
from task_manager.db.repositories.base_repository import BaseRepository

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when the integrity error comes from a UNIQUE constraint (PostgreSQL or SQLite)."""
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code:
        return code == UNIQUE_VIOLATION
    return "unique" in str(orig).lower()


class UserRepository(BaseRepository[User]):
    """User-specific queries. Extends base CRUD with email lookups."""

    def __init__(self, session):
        super().__init__(session, User)

    @asynccontextmanager
    async def _unique_email(self):
        """Apply changes inside a savepoint so a duplicate email leaves earlier work in the session intact.

        Pending changes must be made inside the block; begin_nested() flushes whatever is already pending.
        """
        try:
            async with self.session.begin_nested():
                yield
                await self.session.flush()
        except IntegrityError as exc:
            if is_unique_violation(exc):
                raise DuplicateEmailError("Email already exists") from exc
            raise

    async def create(self, name: str, email: str) -> User:
        user = User(name=name, email=email)
        async with self._unique_email():
            self.session.add(user)
        await self.session.refresh(user)
        return user

    async def find_by_id(self, id: int) -> User | None:
        return await self.get_by_id(id)

    async def find_by_email(self, email: str) -> User | None:
        """Lookup only. Create/update rely on the unique constraint instead."""
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def find_all(self) -> list[User]:
        """All users, newest first."""
        result = await self.session.execute(
            select(User).order_by(User.created_at.desc(), User.id.desc())
        )
        return list(result.scalars().all())

    async def update(self, id: int, name: str, email: str) -> User | None:
        """Replace name and email. None if the row is gone."""
        user = await self.get_by_id(id)
        if user is None:
            return None
        async with self._unique_email():
            user.name = name
            user.email = email
            user.updated_at = func.now()
        await self.session.refresh(user)
        return user

    async def delete(self, id: int) -> int | None:
        # Tasks owned by this user are left in place (no cascade, no restrict)
        return await self.delete_by_id(id)
