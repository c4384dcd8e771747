"""Application service (use case) for Article operations."""

import logging
from dataclasses import dataclass, field

from article_hub.application.interfaces import ArticleRepository
from article_hub.application.schemas import ArticleCreate, ArticleFields, ArticleUpdate
from article_hub.domain.article_tree import build_category_tree
from article_hub.domain.entities import Article, AuthSession, CategoryTree
from article_hub.domain.exceptions import (
    DuplicateSlugError,
    EntityNotFoundError,
    SlugConflictError,
    ValidationError,
)
from article_hub.domain.slug import slugify

logger = logging.getLogger(__name__)


@dataclass
class ArticleDetail:
    """An article with its parent (if any) and its direct children."""

    article: Article
    parent: Article | None = None
    children: list[Article] = field(default_factory=list)


@dataclass
class EditorView:
    """What the editor page needs: the navigation tree and the open article."""

    tree: list[CategoryTree]
    current_article: Article | None = None


@dataclass
class _CleanFields:
    title: str
    slug: str
    category: str
    content: str
    parent_id: str | None


class ArticleService:
    """Orchestrates article business logic. Depends on the repository port (DI).

    Every write takes the caller's ``AuthSession`` explicitly; the session
    user becomes the article's author.
    """

    def __init__(self, repository: ArticleRepository):
        self._repository = repository

    # ── Reads ──

    async def get_article(self, article_id: str) -> Article:
        article = await self._repository.get_by_id(article_id)
        if article is None:
            raise EntityNotFoundError("Article", article_id)
        return article

    async def get_article_detail(self, article_id: str) -> ArticleDetail:
        article = await self.get_article(article_id)
        parent = None
        if article.parent_id is not None:
            parent = await self._repository.get_by_id(article.parent_id)
        children = await self._repository.get_children(article.id)
        return ArticleDetail(article=article, parent=parent, children=children)

    async def list_articles(
        self,
        *,
        search: str | None = None,
        category: str | None = None,
    ) -> list[Article]:
        search = search.strip() if search else None
        return await self._repository.get_all(search=search or None, category=category or None)

    async def list_categories(self) -> list[str]:
        return await self._repository.get_categories()

    async def get_editor_tree(
        self,
        session: AuthSession,
        current_article_id: str | None = None,
    ) -> EditorView:
        articles = await self._repository.get_all_for_tree()
        current = None
        if current_article_id:
            current = await self._repository.get_by_id(current_article_id)
        logger.debug(
            "Editor tree for user %s: %d articles", session.user.id, len(articles)
        )
        return EditorView(tree=build_category_tree(articles), current_article=current)

    # ── Writes ──

    async def create_article(self, data: ArticleCreate, session: AuthSession) -> Article:
        fields = await self._validate(data)
        await self._ensure_slug_available(fields.slug)

        article = Article(
            title=fields.title,
            slug=fields.slug,
            category=fields.category,
            content=fields.content,
            parent_id=fields.parent_id,
            author_id=session.user.id,
        )
        try:
            created = await self._repository.create(article)
        except SlugConflictError as exc:
            logger.warning("Slug '%s' was taken concurrently during create", exc.slug)
            raise DuplicateSlugError(exc.slug) from exc

        logger.info(
            "Created article %s (slug=%s, author=%s)", created.id, created.slug, created.author_id
        )
        return created

    async def update_article(
        self,
        article_id: str,
        data: ArticleUpdate,
        session: AuthSession,
    ) -> Article:
        article = await self.get_article(article_id)
        fields = await self._validate(data, article_id=article_id)
        await self._ensure_slug_available(fields.slug, exclude_id=article_id)

        article.update(
            title=fields.title,
            slug=fields.slug,
            category=fields.category,
            content=fields.content,
            parent_id=fields.parent_id,
            author_id=session.user.id,
        )
        try:
            updated = await self._repository.update(article)
        except SlugConflictError as exc:
            logger.warning("Slug '%s' was taken concurrently during update", exc.slug)
            raise DuplicateSlugError(exc.slug) from exc

        logger.info(
            "Updated article %s (slug=%s, author=%s)", updated.id, updated.slug, updated.author_id
        )
        return updated

    async def delete_article(self, article_id: str, session: AuthSession) -> None:
        await self._repository.delete(article_id)
        logger.info("Deleted article %s (by %s)", article_id, session.user.id)

    # ── Helpers ──

    async def _ensure_slug_available(self, slug: str, exclude_id: str | None = None) -> None:
        existing = await self._repository.find_by_slug(slug, exclude_id=exclude_id)
        if existing is not None:
            logger.info("Rejected duplicate slug '%s' (owned by %s)", slug, existing.id)
            raise DuplicateSlugError(slug)

    async def _validate(self, data: ArticleFields, article_id: str | None = None) -> _CleanFields:
        """Check required fields and the parent reference, reporting all problems at once."""
        title = data.title.strip()
        category = data.category.strip()
        errors: dict[str, str] = {}

        if not title:
            errors["title"] = "Title is required"
        if not category:
            errors["category"] = "Category is required"
        if not data.content.strip():
            errors["content"] = "Content is required"

        slug = slugify(title)
        if title and not slug:
            errors["title"] = "Title must contain at least one letter or digit"

        if data.parent_id is not None:
            parent_error = await self._check_parent(data.parent_id, article_id)
            if parent_error:
                errors["parent_id"] = parent_error

        if errors:
            raise ValidationError(errors)

        return _CleanFields(
            title=title,
            slug=slug,
            category=category,
            content=data.content,
            parent_id=data.parent_id,
        )

    async def _check_parent(self, parent_id: str, article_id: str | None) -> str | None:
        # Hierarchy is one level deep: parents are roots, nested articles have no children.
        if parent_id == article_id:
            return "An article cannot be its own parent"
        parent = await self._repository.get_by_id(parent_id)
        if parent is None:
            return f"Parent article '{parent_id}' does not exist"
        if not parent.is_root:
            return "Parent article must be a top-level article"
        if article_id is not None and await self._repository.get_children(article_id):
            return "An article that has child articles cannot be nested"
        return None
