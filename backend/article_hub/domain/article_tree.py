"""Builds the category-grouped navigation tree shown in the editor."""

from collections.abc import Iterable

from article_hub.domain.entities import Article, ArticleNode, CategoryTree


def _by_title(article: Article) -> str:
    return article.title


def build_category_tree(articles: Iterable[Article]) -> list[CategoryTree]:
    """Group a flat article list into per-category root/child trees.

    Categories keep the order in which they are first seen. Within a category
    only root articles are listed, sorted by title, each carrying its direct
    children (matched from the same list) sorted by title. Children whose
    parent is absent from the list are dropped.
    """
    articles = list(articles)

    children_by_parent: dict[str, list[Article]] = {}
    for article in articles:
        if article.parent_id is not None:
            children_by_parent.setdefault(article.parent_id, []).append(article)

    roots_by_category: dict[str, list[Article]] = {}
    for article in articles:
        roots = roots_by_category.setdefault(article.category, [])
        if article.is_root:
            roots.append(article)

    return [
        CategoryTree(
            category=category,
            articles=[
                ArticleNode(
                    article=root,
                    children=sorted(children_by_parent.get(root.id, []), key=_by_title),
                )
                for root in sorted(roots, key=_by_title)
            ],
        )
        for category, roots in roots_by_category.items()
    ]
