# app/crud/crud_post.py

import logging
from typing import Callable, List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload
from sqlalchemy import desc
from sqlalchemy.sql import func
from app import models, schemas
from app.core.config import settings
from app.utils.slug import resolve_unique_slug, slug_exists

logger = logging.getLogger(__name__)


def build_sections(sections_in: List[schemas.SectionCreate]) -> List[models.Section]:
    """Turn incoming section payloads into rows, defaulting order to the list position"""
    return [
        models.Section(
            type=section.type,
            title=section.title or None,
            content=section.content,
            section_metadata=section.metadata,
            order=section.order if section.order is not None else index,
        )
        for index, section in enumerate(sections_in)
    ]


def _commit_with_slug_retry(
    db: Session,
    db_post: models.Post,
    title: str,
    apply: Callable[[models.Post], None],
) -> None:
    """
    Apply the pending changes and commit them as one unit.

    The slug is probed before the write, but another writer may claim it
    before the commit lands. The unique constraint on posts.slug rejects that
    write; the transaction is rolled back, the slug resolved again and the
    write retried.
    """
    exclude_id = db_post.id
    attempts = settings.SLUG_MAX_RETRIES
    for attempt in range(1, attempts + 1):
        slug = resolve_unique_slug(db, title, exclude_post_id=exclude_id)
        db_post.slug = slug
        apply(db_post)
        try:
            db.commit()
            return
        except IntegrityError:
            db.rollback()
            if attempt == attempts or not slug_exists(db, slug, exclude_id):
                raise
            logger.warning(
                f"Slug '{slug}' claimed concurrently, retrying ({attempt}/{attempts})"
            )
        except Exception:
            db.rollback()
            raise


def get_posts(db: Session) -> List[models.Post]:
    """Get every post, newest first, without sections"""
    return db.query(models.Post)\
             .order_by(desc(models.Post.created_at), desc(models.Post.id))\
             .all()


def get_post(db: Session, post_id: int) -> Optional[models.Post]:
    return db.query(models.Post)\
             .options(selectinload(models.Post.sections))\
             .filter(models.Post.id == post_id)\
             .first()


def get_post_by_slug(db: Session, slug: str) -> Optional[models.Post]:
    return db.query(models.Post)\
             .options(selectinload(models.Post.sections))\
             .filter(models.Post.slug == slug)\
             .first()


def create_post(db: Session, post: schemas.PostCreate) -> models.Post:
    """
    Create a post together with its sections.

    Args:
        db: Database session
        post: Validated payload; title must be non-empty

    Returns:
        models.Post: The stored post with sections sorted by order
    """
    logger.info(f"Creating new post with title: {post.title}")
    db_post = models.Post(
        title=post.title,
        excerpt=post.excerpt or None,
        author=post.author or None,
    )
    db_post.sections = build_sections(post.sections or [])

    _commit_with_slug_retry(db, db_post, post.title, db.add)
    logger.info(f"Post created successfully. ID: {db_post.id}, slug: {db_post.slug}")
    return get_post(db, db_post.id)


def update_post(db: Session, post_id: int, post: schemas.PostUpdate) -> Optional[models.Post]:
    """
    Replace a post's fields and, when sections are supplied, its whole section list.

    Old sections are deleted and the supplied ones inserted in the same
    transaction as the post update, so section ids change.
    """
    db_post = get_post(db, post_id)
    if db_post is None:
        logger.warning(f"Post with id {post_id} not found")
        return None

    logger.info(f"Updating post {post_id}")

    def apply(target: models.Post) -> None:
        target.title = post.title
        target.excerpt = post.excerpt or None
        target.author = post.author or None
        # onupdate only fires when a column changes, an update must always bump the timestamp
        target.updated_at = func.now()
        if post.sections is not None:
            target.sections = build_sections(post.sections)

    _commit_with_slug_retry(db, db_post, post.title, apply)
    logger.info(f"Post {post_id} updated, slug: {db_post.slug}")
    return get_post(db, post_id)


def delete_post(db: Session, post_id: int) -> bool:
    db_post = db.query(models.Post).filter(models.Post.id == post_id).first()
    if db_post is None:
        logger.warning(f"Post with id {post_id} not found")
        return False
    try:
        db.delete(db_post)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info(f"Post {post_id} deleted")
    return True
