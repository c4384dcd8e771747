"""Unit tests for the ArticleService."""

import pytest

from article_hub.application.interfaces import ALL_CATEGORIES, ArticleRepository
from article_hub.application.schemas import ArticleCreate, ArticleUpdate
from article_hub.application.services import ArticleService
from article_hub.domain.entities import Article, AuthSession, User
from article_hub.domain.exceptions import (
    DuplicateSlugError,
    EntityNotFoundError,
    SlugConflictError,
    ValidationError,
)


class FakeArticleRepository(ArticleRepository):
    """In-memory fake repository for unit testing."""

    def __init__(self):
        self._articles: dict[str, Article] = {}

    async def get_by_id(self, article_id: str) -> Article | None:
        return self._articles.get(article_id)

    async def find_by_slug(self, slug: str, exclude_id: str | None = None) -> Article | None:
        for article in self._articles.values():
            if article.slug == slug and article.id != exclude_id:
                return article
        return None

    async def get_all(self, *, search=None, category=None) -> list[Article]:
        articles = list(self._articles.values())
        if search:
            needle = search.lower()
            articles = [
                a for a in articles
                if needle in a.title.lower() or needle in a.category.lower()
            ]
        if category and category != ALL_CATEGORIES:
            articles = [a for a in articles if a.category == category]
        return sorted(articles, key=lambda a: a.updated_at, reverse=True)

    async def get_all_for_tree(self) -> list[Article]:
        return sorted(self._articles.values(), key=lambda a: (a.category, a.title))

    async def get_categories(self) -> list[str]:
        return sorted({a.category for a in self._articles.values()})

    async def get_children(self, article_id: str) -> list[Article]:
        children = [a for a in self._articles.values() if a.parent_id == article_id]
        return sorted(children, key=lambda a: a.title)

    async def create(self, article: Article) -> Article:
        if await self.find_by_slug(article.slug):
            raise SlugConflictError(article.slug)
        self._articles[article.id] = article
        return article

    async def update(self, article: Article) -> Article:
        if article.id not in self._articles:
            raise EntityNotFoundError("Article", article.id)
        if await self.find_by_slug(article.slug, exclude_id=article.id):
            raise SlugConflictError(article.slug)
        self._articles[article.id] = article
        return article

    async def delete(self, article_id: str) -> None:
        if article_id not in self._articles:
            raise EntityNotFoundError("Article", article_id)
        del self._articles[article_id]
        for article in self._articles.values():
            if article.parent_id == article_id:
                article.parent_id = None


class RacingArticleRepository(FakeArticleRepository):
    """Simulates a concurrent writer claiming the slug between check and insert."""

    async def find_by_slug(self, slug: str, exclude_id: str | None = None) -> Article | None:
        return None

    async def create(self, article: Article) -> Article:
        raise SlugConflictError(article.slug)


@pytest.fixture
def repository() -> FakeArticleRepository:
    return FakeArticleRepository()


@pytest.fixture
def service(repository: FakeArticleRepository) -> ArticleService:
    return ArticleService(repository)


@pytest.fixture
def session() -> AuthSession:
    return AuthSession(user=User(id="user-1", email="editor@example.com"), external_session_id="s-1")


def _create(title: str, category: str = "Tech", content: str = "Body", parent_id: str | None = None):
    return ArticleCreate(title=title, category=category, content=content, parent_id=parent_id)


@pytest.mark.asyncio
async def test_create_article_derives_slug_and_author(service: ArticleService, session: AuthSession):
    article = await service.create_article(
        _create("Hello World!", content="x"), session
    )
    assert article.slug == "hello-world"
    assert article.author_id == session.user.id
    assert article.category == "Tech"
    assert article.parent_id is None


@pytest.mark.asyncio
async def test_create_article_trims_title_and_category(service: ArticleService, session: AuthSession):
    article = await service.create_article(_create("  Spaced  ", category=" News "), session)
    assert article.title == "Spaced"
    assert article.category == "News"


@pytest.mark.asyncio
async def test_create_article_reports_every_missing_field(service: ArticleService, session: AuthSession):
    with pytest.raises(ValidationError) as exc_info:
        await service.create_article(ArticleCreate(title=" ", category="", content="\n"), session)
    assert set(exc_info.value.fields) == {"title", "category", "content"}


@pytest.mark.asyncio
async def test_create_article_rejects_title_without_slug(service: ArticleService, session: AuthSession):
    with pytest.raises(ValidationError) as exc_info:
        await service.create_article(_create("!!! ???"), session)
    assert exc_info.value.fields == ["title"]


@pytest.mark.asyncio
async def test_duplicate_title_is_rejected(service: ArticleService, session: AuthSession):
    await service.create_article(_create("Release Notes"), session)
    with pytest.raises(DuplicateSlugError) as exc_info:
        await service.create_article(_create("release   notes!"), session)
    assert exc_info.value.slug == "release-notes"


@pytest.mark.asyncio
async def test_late_store_collision_becomes_duplicate_slug(session: AuthSession):
    service = ArticleService(RacingArticleRepository())
    with pytest.raises(DuplicateSlugError):
        await service.create_article(_create("Contended"), session)


@pytest.mark.asyncio
async def test_update_to_own_title_is_allowed(service: ArticleService, session: AuthSession):
    created = await service.create_article(_create("Stable Title", content="v1"), session)
    updated = await service.update_article(
        created.id,
        ArticleUpdate(title="Stable Title", category="Tech", content="v2"),
        session,
    )
    assert updated.slug == "stable-title"
    assert updated.content == "v2"
    assert updated.updated_at >= created.created_at


@pytest.mark.asyncio
async def test_update_to_other_articles_title_is_rejected(service: ArticleService, session: AuthSession):
    await service.create_article(_create("First"), session)
    second = await service.create_article(_create("Second"), session)
    with pytest.raises(DuplicateSlugError):
        await service.update_article(
            second.id, ArticleUpdate(title="First", category="Tech", content="Body"), session
        )


@pytest.mark.asyncio
async def test_update_sets_author_to_current_user(service: ArticleService, session: AuthSession):
    created = await service.create_article(_create("Handover"), session)
    other = AuthSession(user=User(id="user-2", email="other@example.com"), external_session_id="s-2")
    updated = await service.update_article(
        created.id, ArticleUpdate(title="Handover", category="Tech", content="Edited"), other
    )
    assert updated.author_id == "user-2"


@pytest.mark.asyncio
async def test_update_missing_article(service: ArticleService, session: AuthSession):
    with pytest.raises(EntityNotFoundError):
        await service.update_article(
            "missing", ArticleUpdate(title="X", category="Tech", content="Body"), session
        )


@pytest.mark.asyncio
async def test_parent_must_exist(service: ArticleService, session: AuthSession):
    with pytest.raises(ValidationError) as exc_info:
        await service.create_article(_create("Orphan", parent_id="nope"), session)
    assert exc_info.value.fields == ["parent_id"]


@pytest.mark.asyncio
async def test_parent_must_be_top_level(service: ArticleService, session: AuthSession):
    root = await service.create_article(_create("Root"), session)
    child = await service.create_article(_create("Child", parent_id=root.id), session)
    with pytest.raises(ValidationError):
        await service.create_article(_create("Grandchild", parent_id=child.id), session)


@pytest.mark.asyncio
async def test_article_cannot_be_its_own_parent(service: ArticleService, session: AuthSession):
    article = await service.create_article(_create("Self"), session)
    with pytest.raises(ValidationError):
        await service.update_article(
            article.id,
            ArticleUpdate(title="Self", category="Tech", content="Body", parent_id=article.id),
            session,
        )


@pytest.mark.asyncio
async def test_article_with_children_cannot_be_nested(service: ArticleService, session: AuthSession):
    root = await service.create_article(_create("Guide"), session)
    await service.create_article(_create("Chapter", parent_id=root.id), session)
    other_root = await service.create_article(_create("Handbook"), session)
    with pytest.raises(ValidationError):
        await service.update_article(
            root.id,
            ArticleUpdate(title="Guide", category="Tech", content="Body", parent_id=other_root.id),
            session,
        )


def test_blank_parent_id_means_root():
    data = ArticleCreate(title="T", category="C", content="B", parent_id="")
    assert data.parent_id is None


@pytest.mark.asyncio
async def test_delete_article(service: ArticleService, session: AuthSession):
    created = await service.create_article(_create("Delete Me"), session)
    await service.delete_article(created.id, session)
    with pytest.raises(EntityNotFoundError):
        await service.get_article(created.id)


@pytest.mark.asyncio
async def test_delete_missing_article(service: ArticleService, session: AuthSession):
    with pytest.raises(EntityNotFoundError):
        await service.delete_article("does-not-exist", session)


@pytest.mark.asyncio
async def test_get_article_detail_includes_parent_and_sorted_children(
    service: ArticleService, session: AuthSession
):
    root = await service.create_article(_create("Root"), session)
    await service.create_article(_create("Zeta", parent_id=root.id), session)
    alpha = await service.create_article(_create("Alpha", parent_id=root.id), session)

    root_detail = await service.get_article_detail(root.id)
    assert root_detail.parent is None
    assert [c.title for c in root_detail.children] == ["Alpha", "Zeta"]

    child_detail = await service.get_article_detail(alpha.id)
    assert child_detail.parent is not None
    assert child_detail.parent.id == root.id


@pytest.mark.asyncio
async def test_list_articles_filters(service: ArticleService, session: AuthSession):
    await service.create_article(_create("Python Tips", category="Tech"), session)
    await service.create_article(_create("Quarterly Report", category="Finance"), session)

    assert len(await service.list_articles()) == 2
    assert [a.title for a in await service.list_articles(search="python")] == ["Python Tips"]
    assert [a.title for a in await service.list_articles(search="FIN")] == ["Quarterly Report"]
    assert [a.title for a in await service.list_articles(category="Tech")] == ["Python Tips"]
    assert len(await service.list_articles(category="all")) == 2
    assert await service.list_categories() == ["Finance", "Tech"]


@pytest.mark.asyncio
async def test_editor_tree(service: ArticleService, session: AuthSession):
    root = await service.create_article(_create("B"), session)
    await service.create_article(_create("A", parent_id=root.id), session)
    await service.create_article(_create("C"), session)

    view = await service.get_editor_tree(session, current_article_id=root.id)

    assert [group.category for group in view.tree] == ["Tech"]
    nodes = view.tree[0].articles
    assert [node.article.title for node in nodes] == ["B", "C"]
    assert [child.title for child in nodes[0].children] == ["A"]
    assert view.current_article is not None
    assert view.current_article.id == root.id


@pytest.mark.asyncio
async def test_editor_tree_unknown_current_article(service: ArticleService, session: AuthSession):
    view = await service.get_editor_tree(session, current_article_id="missing")
    assert view.tree == []
    assert view.current_article is None
