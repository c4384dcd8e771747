"""Concrete repository implementation for User backed by SQLAlchemy."""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from article_hub.application.interfaces import UserRepository
from article_hub.domain.entities import User
from article_hub.domain.exceptions import DuplicateEntityError
from article_hub.infrastructure.database.models import UserModel


class SQLAlchemyUserRepository(UserRepository):
    """Implements the UserRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: UserModel) -> User:
        return User(id=model.id, email=model.email)

    async def get_by_id(self, user_id: str) -> User | None:
        result = await self._session.get(UserModel, user_id)
        return self._to_entity(result) if result else None

    async def get_by_email(self, email: str) -> User | None:
        result = await self._session.execute(
            select(UserModel).where(UserModel.email == email)
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, user: User) -> User:
        model = UserModel(id=user.id, email=user.email)
        try:
            # SAVEPOINT keeps the request transaction usable after a lost race.
            async with self._session.begin_nested():
                self._session.add(model)
        except IntegrityError as exc:
            # SQLite names the column ("users.email"), PostgreSQL the index ("ix_users_email").
            if "email" in str(exc.orig).lower():
                raise DuplicateEntityError("User", "email", user.email) from exc
            raise DuplicateEntityError("User", "id", user.id) from exc
        return self._to_entity(model)
