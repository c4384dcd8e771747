"""Concrete repository implementation backed by SQLAlchemy."""

from datetime import datetime, timezone

from sqlalchemy import or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from article_hub.application.interfaces import ALL_CATEGORIES, ArticleRepository
from article_hub.domain.entities import Article
from article_hub.domain.exceptions import EntityNotFoundError, SlugConflictError
from article_hub.infrastructure.database.models import ArticleModel


def _is_slug_violation(exc: IntegrityError) -> bool:
    """Both SQLite ("articles.slug") and PostgreSQL ("ix_articles_slug") name the column."""
    return "slug" in str(exc.orig).lower()


def _as_utc(value: datetime) -> datetime:
    """SQLite returns ``DateTime(timezone=True)`` values without their offset; they were written as UTC."""
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


class SQLAlchemyArticleRepository(ArticleRepository):
    """Implements the ArticleRepository port using SQLAlchemy async sessions.

    Writes run inside a SAVEPOINT so that a unique-slug violation only undoes
    the failed statement, leaving the request transaction usable.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ArticleModel) -> Article:
        """Map ORM model → domain entity."""
        return Article(
            id=model.id,
            title=model.title,
            slug=model.slug,
            category=model.category,
            content=model.content,
            parent_id=model.parent_id,
            author_id=model.author_id,
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )

    def _to_model(self, entity: Article) -> ArticleModel:
        """Map domain entity → ORM model (for creation)."""
        return ArticleModel(
            id=entity.id,
            title=entity.title,
            slug=entity.slug,
            category=entity.category,
            content=entity.content,
            parent_id=entity.parent_id,
            author_id=entity.author_id,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    async def get_by_id(self, article_id: str) -> Article | None:
        result = await self._session.get(ArticleModel, article_id)
        return self._to_entity(result) if result else None

    async def find_by_slug(self, slug: str, exclude_id: str | None = None) -> Article | None:
        stmt = select(ArticleModel).where(ArticleModel.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(ArticleModel.id != exclude_id)
        result = await self._session.execute(stmt.limit(1))
        model = result.scalars().first()
        return self._to_entity(model) if model else None

    async def get_all(
        self,
        *,
        search: str | None = None,
        category: str | None = None,
    ) -> list[Article]:
        stmt = select(ArticleModel)

        if search:
            stmt = stmt.where(
                or_(
                    ArticleModel.title.icontains(search, autoescape=True),
                    ArticleModel.category.icontains(search, autoescape=True),
                )
            )
        if category and category != ALL_CATEGORIES:
            stmt = stmt.where(ArticleModel.category == category)

        stmt = stmt.order_by(ArticleModel.updated_at.desc(), ArticleModel.id)
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def get_all_for_tree(self) -> list[Article]:
        stmt = select(ArticleModel).order_by(ArticleModel.category, ArticleModel.title)
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def get_categories(self) -> list[str]:
        stmt = select(ArticleModel.category).distinct().order_by(ArticleModel.category)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def get_children(self, article_id: str) -> list[Article]:
        stmt = (
            select(ArticleModel)
            .where(ArticleModel.parent_id == article_id)
            .order_by(ArticleModel.title)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, article: Article) -> Article:
        model = self._to_model(article)
        try:
            async with self._session.begin_nested():
                self._session.add(model)
        except IntegrityError as exc:
            if _is_slug_violation(exc):
                raise SlugConflictError(article.slug) from exc
            raise
        return self._to_entity(model)

    async def update(self, article: Article) -> Article:
        model = await self._session.get(ArticleModel, article.id)
        if model is None:
            raise EntityNotFoundError("Article", article.id)
        try:
            async with self._session.begin_nested():
                model.title = article.title
                model.slug = article.slug
                model.category = article.category
                model.content = article.content
                model.parent_id = article.parent_id
                model.author_id = article.author_id
                model.updated_at = article.updated_at
        except IntegrityError as exc:
            if _is_slug_violation(exc):
                raise SlugConflictError(article.slug) from exc
            raise
        return self._to_entity(model)

    async def delete(self, article_id: str) -> None:
        model = await self._session.get(ArticleModel, article_id)
        if model is None:
            raise EntityNotFoundError("Article", article_id)
        await self._session.execute(
            update(ArticleModel)
            .where(ArticleModel.parent_id == article_id)
            .values(parent_id=None)
        )
        await self._session.delete(model)
        await self._session.flush()
