from .article import Article
from .tree import ArticleNode, CategoryTree
from .user import AuthSession, ExternalIdentity, ProviderTokens, User

__all__ = [
    "Article",
    "ArticleNode",
    "CategoryTree",
    "AuthSession",
    "ExternalIdentity",
    "ProviderTokens",
    "User",
]
