from .article_repository import ALL_CATEGORIES, ArticleRepository
from .identity_provider import IdentityProvider
from .user_repository import UserRepository

__all__ = [
    "ALL_CATEGORIES",
    "ArticleRepository",
    "IdentityProvider",
    "UserRepository",
]
