"""SQLAlchemy ORM model for the User entity."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from article_hub.infrastructure.database.base import Base


class UserModel(Base):
    """ORM model — maps to the 'users' table. The id is the provider subject id."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, email='{self.email}')>"
