from .article_service import ArticleDetail, ArticleService, EditorView
from .auth_service import AuthService
from .identity_service import IdentityService

__all__ = [
    "ArticleDetail",
    "ArticleService",
    "EditorView",
    "AuthService",
    "IdentityService",
]
