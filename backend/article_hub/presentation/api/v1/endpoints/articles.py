"""Article CRUD endpoints."""

from fastapi import APIRouter, Depends, Query, status

from article_hub.application.interfaces import ALL_CATEGORIES
from article_hub.application.schemas import (
    ArticleCreate,
    ArticleDetailResponse,
    ArticleResponse,
    ArticleSummary,
    ArticleUpdate,
)
from article_hub.application.services import ArticleDetail, ArticleService
from article_hub.domain.entities import AuthSession
from article_hub.domain.exceptions import DuplicateSlugError, EntityNotFoundError, ValidationError
from article_hub.infrastructure.dependencies import get_article_service, require_auth_session
from article_hub.presentation.api.v1.errors import to_http_exception

router = APIRouter(prefix="/articles", tags=["Articles"])


def _detail_response(detail: ArticleDetail) -> ArticleDetailResponse:
    response = ArticleDetailResponse.model_validate(detail.article, from_attributes=True)
    if detail.parent is not None:
        response.parent = ArticleSummary.model_validate(detail.parent, from_attributes=True)
    response.children = [
        ArticleSummary.model_validate(child, from_attributes=True) for child in detail.children
    ]
    return response


@router.get("", response_model=list[ArticleResponse])
async def list_articles(
    search: str | None = Query(None, description="Case-insensitive match on title or category"),
    category: str = Query(ALL_CATEGORIES, alias="filter", description="Exact category, or 'all'"),
    service: ArticleService = Depends(get_article_service),
) -> list[ArticleResponse]:
    """List articles, most recently updated first."""
    articles = await service.list_articles(search=search, category=category)
    return [ArticleResponse.model_validate(a, from_attributes=True) for a in articles]


@router.get("/categories", response_model=list[str])
async def list_categories(
    service: ArticleService = Depends(get_article_service),
) -> list[str]:
    """Distinct article categories, alphabetically."""
    return await service.list_categories()


@router.get("/{article_id}", response_model=ArticleDetailResponse)
async def get_article(
    article_id: str,
    service: ArticleService = Depends(get_article_service),
) -> ArticleDetailResponse:
    """Retrieve a single article with its parent and children."""
    try:
        detail = await service.get_article_detail(article_id)
    except EntityNotFoundError as e:
        raise to_http_exception(e)
    return _detail_response(detail)


@router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
async def create_article(
    data: ArticleCreate,
    session: AuthSession = Depends(require_auth_session),
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Create a new article authored by the current user."""
    try:
        article = await service.create_article(data, session)
    except (ValidationError, DuplicateSlugError) as e:
        raise to_http_exception(e)
    return ArticleResponse.model_validate(article, from_attributes=True)


@router.put("/{article_id}", response_model=ArticleResponse)
async def update_article(
    article_id: str,
    data: ArticleUpdate,
    session: AuthSession = Depends(require_auth_session),
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Update an existing article."""
    try:
        article = await service.update_article(article_id, data, session)
    except (ValidationError, DuplicateSlugError, EntityNotFoundError) as e:
        raise to_http_exception(e)
    return ArticleResponse.model_validate(article, from_attributes=True)


@router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(
    article_id: str,
    session: AuthSession = Depends(require_auth_session),
    service: ArticleService = Depends(get_article_service),
) -> None:
    """Delete an article by ID. Its children become top-level articles."""
    try:
        await service.delete_article(article_id, session)
    except EntityNotFoundError as e:
        raise to_http_exception(e)
