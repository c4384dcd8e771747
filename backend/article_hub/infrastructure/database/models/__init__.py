from .article import ArticleModel
from .user import UserModel

__all__ = [
    "ArticleModel",
    "UserModel",
]
