"""Domain entities — pure Python business objects, no framework dependencies."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4


@dataclass
class Article:
    """Core domain entity representing a categorised, optionally nested article."""

    title: str
    slug: str
    category: str
    content: str
    author_id: str
    id: str = field(default_factory=lambda: str(uuid4()))
    parent_id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    def update(
        self,
        *,
        title: str,
        slug: str,
        category: str,
        content: str,
        parent_id: str | None,
        author_id: str,
    ) -> None:
        """Replace the editable fields and refresh the updated_at timestamp."""
        self.title = title
        self.slug = slug
        self.category = category
        self.content = content
        self.parent_id = parent_id
        self.author_id = author_id
        self.updated_at = datetime.now(timezone.utc)
