# app/utils/slug.py

import logging
import re
from typing import Optional
from sqlalchemy.orm import Session
from app.models.post import Post

logger = logging.getLogger(__name__)

FALLBACK_SLUG = "post"
# Matches the length of the posts.slug column
MAX_SLUG_LENGTH = 255

_SEPARATORS = re.compile(r"[\s_-]+")
_INVALID = re.compile(r"[^a-z0-9\s_-]")


def slugify(title: str) -> str:
    """
    Turn a title into its base slug.

    Lower-cases the title, drops every character outside ``[a-z0-9-]``,
    collapses runs of whitespace, underscores and hyphens into a single
    hyphen and trims hyphens from both ends. A title with nothing usable in it
    falls back to ``"post"``.

    >>> slugify("  Hello, World!  ")
    'hello-world'
    >>> slugify("C++ > Java")
    'c-java'
    """
    slug = _INVALID.sub("", title.lower())
    slug = _SEPARATORS.sub("-", slug).strip("-")
    slug = slug[:MAX_SLUG_LENGTH].rstrip("-")
    return slug or FALLBACK_SLUG


def slug_exists(db: Session, slug: str, exclude_post_id: Optional[int] = None) -> bool:
    query = db.query(Post.id).filter(Post.slug == slug)
    if exclude_post_id is not None:
        query = query.filter(Post.id != exclude_post_id)
    return query.first() is not None


def resolve_unique_slug(db: Session, title: str, exclude_post_id: Optional[int] = None) -> str:
    """
    Return a slug for ``title`` that no other post holds.

    The base slug is used when free, otherwise ``base-1``, ``base-2``, ... are
    probed in order, with the base cut short when needed so the slug still
    fits the column. ``exclude_post_id`` is the post being updated, so a post
    keeps its own slug when its title does not change.
    """
    base = slugify(title)
    slug = base
    counter = 0
    while slug_exists(db, slug, exclude_post_id):
        counter += 1
        suffix = f"-{counter}"
        slug = base[:MAX_SLUG_LENGTH - len(suffix)].rstrip("-") + suffix
    if counter:
        logger.info(f"Slug '{base}' taken, resolved to '{slug}' after {counter} probe(s)")
    return slug
