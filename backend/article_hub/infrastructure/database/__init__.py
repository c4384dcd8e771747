from .base import Base
from .session import Database
from .models import ArticleModel, UserModel

__all__ = [
    "Base",
    "Database",
    "ArticleModel",
    "UserModel",
]
