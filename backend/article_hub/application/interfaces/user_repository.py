"""Port for local user persistence."""

from abc import ABC, abstractmethod

from article_hub.domain.entities import User


class UserRepository(ABC):
    """Users are created lazily on first login and never mutated here."""

    @abstractmethod
    async def get_by_id(self, user_id: str) -> User | None:
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> User | None:
        ...

    @abstractmethod
    async def create(self, user: User) -> User:
        """Persist a new user.

        Raises ``DuplicateEntityError`` when the id or email is already taken.
        """
        ...
