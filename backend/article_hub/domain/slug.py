"""Slug generation for article titles."""

import re

_WHITESPACE = re.compile(r"\s+")
_DISALLOWED = re.compile(r"[^a-z0-9-]")
_HYPHEN_RUNS = re.compile(r"-{2,}")


def slugify(title: str) -> str:
    """Convert a title to a URL-safe slug.

    The result only contains ``[a-z0-9-]`` with no leading, trailing or
    doubled hyphens. Titles without any ASCII letter or digit yield ``""``.
    Uniqueness is not guaranteed here; the article store enforces it.
    """
    slug = title.lower().strip()
    slug = _WHITESPACE.sub("-", slug)
    slug = _DISALLOWED.sub("", slug)
    slug = _HYPHEN_RUNS.sub("-", slug)
    return slug.strip("-")
