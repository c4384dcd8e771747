"""Editor navigation endpoint — category tree of root articles and their children."""

from fastapi import APIRouter, Depends, Query

from article_hub.application.schemas import (
    ArticleResponse,
    ArticleSummary,
    ArticleTreeNode,
    CategoryTreeResponse,
    EditorTreeResponse,
)
from article_hub.application.services import ArticleService
from article_hub.domain.entities import AuthSession, CategoryTree
from article_hub.infrastructure.dependencies import get_article_service, require_auth_session

router = APIRouter(prefix="/editor", tags=["Editor"])


def _tree_response(tree: list[CategoryTree]) -> list[CategoryTreeResponse]:
    return [
        CategoryTreeResponse(
            category=group.category,
            articles=[
                ArticleTreeNode(
                    **ArticleSummary.model_validate(node.article, from_attributes=True).model_dump(),
                    children=[
                        ArticleSummary.model_validate(child, from_attributes=True)
                        for child in node.children
                    ],
                )
                for node in group.articles
            ],
        )
        for group in tree
    ]


@router.get("/tree", response_model=EditorTreeResponse)
async def get_editor_tree(
    article: str | None = Query(None, description="ID of the article open in the editor"),
    session: AuthSession = Depends(require_auth_session),
    service: ArticleService = Depends(get_article_service),
) -> EditorTreeResponse:
    """Category tree for the editor sidebar plus the selected article."""
    view = await service.get_editor_tree(session, current_article_id=article)
    current = (
        ArticleResponse.model_validate(view.current_article, from_attributes=True)
        if view.current_article is not None
        else None
    )
    return EditorTreeResponse(tree=_tree_response(view.tree), current_article=current)
