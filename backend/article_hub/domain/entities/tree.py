"""Domain entities for the editor navigation tree."""

from dataclasses import dataclass, field

from .article import Article


@dataclass
class ArticleNode:
    """A root article together with its direct children."""

    article: Article
    children: list[Article] = field(default_factory=list)


@dataclass
class CategoryTree:
    """All root articles of one category."""

    category: str
    articles: list[ArticleNode] = field(default_factory=list)
