"""User Repository — persistence adapter for the users table.

Invariants:
    - list() returns users in insertion (id) order; [] when empty
    - create() surfaces a UNIQUE violation as EmailAlreadyExistsError and every
      other SQLAlchemy failure as DatabaseError (raw driver message)
    - The session is rolled back before any error leaves create()
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from userhub.core.domain_types import UserId
from userhub.core.errors import DatabaseError, EmailAlreadyExistsError
from userhub.infrastructure.database import is_unique_violation, raw_message
from userhub.models.user import User

logger = logging.getLogger(__name__)


class UserRepository:
    """Reads and inserts User rows through an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def list(self) -> list[User]:
        try:
            result = await self._db.execute(select(User).order_by(User.id))
        except SQLAlchemyError as e:
            raise DatabaseError(raw_message(e), "query") from e
        return list(result.scalars().all())

    async def get(self, user_id: UserId) -> User | None:
        try:
            return await self._db.get(User, user_id)
        except SQLAlchemyError as e:
            raise DatabaseError(raw_message(e), "query") from e

    async def create(self, name: str, email: str) -> User:
        """Insert one user and return it with its assigned id."""
        user = User(name=name, email=email)
        self._db.add(user)
        try:
            await self._db.commit()
            await self._db.refresh(user)
        except IntegrityError as e:
            await self._db.rollback()
            if is_unique_violation(e):
                logger.info("Duplicate email rejected by storage")
                raise EmailAlreadyExistsError() from e
            raise DatabaseError(raw_message(e), "commit") from e
        except SQLAlchemyError as e:
            await self._db.rollback()
            raise DatabaseError(raw_message(e), "commit") from e
        return user
