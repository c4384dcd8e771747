from .article import (
    ArticleCreate,
    ArticleDetailResponse,
    ArticleFields,
    ArticleResponse,
    ArticleSummary,
    ArticleTreeNode,
    ArticleUpdate,
    CategoryTreeResponse,
    EditorTreeResponse,
)
from .auth import (
    LoginRequest,
    MessageResponse,
    SessionResponse,
    SignupRequest,
    UserResponse,
)

__all__ = [
    "ArticleCreate",
    "ArticleDetailResponse",
    "ArticleFields",
    "ArticleResponse",
    "ArticleSummary",
    "ArticleTreeNode",
    "ArticleUpdate",
    "CategoryTreeResponse",
    "EditorTreeResponse",
    "LoginRequest",
    "MessageResponse",
    "SessionResponse",
    "SignupRequest",
    "UserResponse",
]
