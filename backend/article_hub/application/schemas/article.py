"""Pydantic DTOs (Data Transfer Objects) for the Article feature."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class ArticleFields(BaseModel):
    """Editable article fields as submitted by the editor form.

    Required-field checks happen in ``ArticleService`` so that every missing
    field is reported at once.
    """

    title: str = Field("", max_length=255, examples=["Getting Started"])
    category: str = Field("", max_length=100, examples=["Technology"])
    content: str = Field("", examples=["This is a knowledge base article."])
    parent_id: str | None = Field(None, max_length=36)

    @field_validator("parent_id", mode="before")
    @classmethod
    def _blank_parent_is_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ArticleCreate(ArticleFields):
    """Schema for creating a new article."""


class ArticleUpdate(ArticleFields):
    """Schema for updating an existing article — replaces every editable field."""


class ArticleSummary(BaseModel):
    """Minimal article reference used for parents, children and tree nodes."""

    id: str
    title: str
    slug: str
    category: str

    model_config = {"from_attributes": True}


class ArticleResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    title: str
    slug: str
    category: str
    content: str
    parent_id: str | None
    author_id: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ArticleDetailResponse(ArticleResponse):
    """A single article together with its parent and direct children."""

    parent: ArticleSummary | None = None
    children: list[ArticleSummary] = []


class ArticleTreeNode(ArticleSummary):
    """A root article in the editor tree with its children."""

    children: list[ArticleSummary] = []


class CategoryTreeResponse(BaseModel):
    category: str
    articles: list[ArticleTreeNode]


class EditorTreeResponse(BaseModel):
    """Editor navigation tree plus the currently selected article, if any."""

    tree: list[CategoryTreeResponse]
    current_article: ArticleResponse | None = None
