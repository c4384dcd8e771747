"""Abstract repository interfaces (ports) — define the contract, not the implementation."""

from abc import ABC, abstractmethod

from article_hub.domain.entities import Article

ALL_CATEGORIES = "all"


class ArticleRepository(ABC):
    """Port for article persistence — implemented in the infrastructure layer.

    The store is the final arbiter of slug uniqueness: ``create`` and
    ``update`` raise ``SlugConflictError`` when another article owns the slug.
    """

    @abstractmethod
    async def get_by_id(self, article_id: str) -> Article | None:
        """Retrieve a single article by its ID."""
        ...

    @abstractmethod
    async def find_by_slug(self, slug: str, exclude_id: str | None = None) -> Article | None:
        """Exact, case-sensitive slug lookup, optionally ignoring one article."""
        ...

    @abstractmethod
    async def get_all(
        self,
        *,
        search: str | None = None,
        category: str | None = None,
    ) -> list[Article]:
        """List articles, most recently updated first.

        ``search`` matches title or category as a case-insensitive substring.
        ``category`` is an exact match unless it equals ``ALL_CATEGORIES``.
        """
        ...

    @abstractmethod
    async def get_all_for_tree(self) -> list[Article]:
        """List every article ordered by category, then title."""
        ...

    @abstractmethod
    async def get_categories(self) -> list[str]:
        """Distinct categories in alphabetical order."""
        ...

    @abstractmethod
    async def get_children(self, article_id: str) -> list[Article]:
        """Direct children of an article, ordered by title."""
        ...

    @abstractmethod
    async def create(self, article: Article) -> Article:
        """Persist a new article and return it."""
        ...

    @abstractmethod
    async def update(self, article: Article) -> Article:
        """Update an existing article. Raises ``EntityNotFoundError`` if absent."""
        ...

    @abstractmethod
    async def delete(self, article_id: str) -> None:
        """Delete an article, orphaning its children to root.

        Raises ``EntityNotFoundError`` if absent.
        """
        ...
