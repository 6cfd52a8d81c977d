# app/api/endpoints/posts.py

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app import crud, schemas
from app.api import deps

# Set up logging
logger = logging.getLogger(__name__)

router = APIRouter()

# Length of the title, author and section title columns
MAX_FIELD_LENGTH = 255


def validate_post_payload(post: schemas.PostCreate) -> None:
    if not post.title or not post.title.strip():
        raise HTTPException(status_code=400, detail="Title is required")
    if len(post.title) > MAX_FIELD_LENGTH:
        raise HTTPException(status_code=400, detail=f"Title must be at most {MAX_FIELD_LENGTH} characters")
    if post.author and len(post.author) > MAX_FIELD_LENGTH:
        raise HTTPException(status_code=400, detail=f"Author must be at most {MAX_FIELD_LENGTH} characters")
    validate_sections(post.sections)


def validate_sections(sections: Optional[List[schemas.SectionCreate]]) -> None:
    for section in sections or []:
        if not section.type or not section.content:
            raise HTTPException(status_code=400, detail="Type and content are required")
        validate_section_title(section.title)


def validate_section_title(title: Optional[str]) -> None:
    if title and len(title) > MAX_FIELD_LENGTH:
        raise HTTPException(status_code=400, detail=f"Section title must be at most {MAX_FIELD_LENGTH} characters")


@router.get("/", response_model=List[schemas.PostSummary])
def read_posts(db: Session = Depends(deps.get_db)):
    logger.info("Fetching all posts")
    try:
        posts = crud.get_posts(db)
        logger.info(f"Retrieved {len(posts)} posts")
        return posts
    except Exception as e:
        logger.error(f"Error fetching posts: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/", response_model=schemas.Post, status_code=status.HTTP_201_CREATED)
def create_post(post: schemas.PostCreate, db: Session = Depends(deps.get_db)):
    validate_post_payload(post)
    try:
        return crud.create_post(db=db, post=post)
    except Exception as e:
        logger.error(f"Error creating post: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/slug/{slug}", response_model=schemas.Post)
def read_post_by_slug(slug: str, db: Session = Depends(deps.get_db)):
    logger.info(f"Fetching post with slug: {slug}")
    try:
        post = crud.get_post_by_slug(db, slug=slug)
        if post is None:
            logger.warning(f"Post with slug {slug} not found")
            raise HTTPException(status_code=404, detail="Post not found")
        return post
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching post with slug {slug}: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{post_id}", response_model=schemas.Post)
def read_post(post_id: int, db: Session = Depends(deps.get_db)):
    logger.info(f"Fetching post with id: {post_id}")
    try:
        post = crud.get_post(db, post_id=post_id)
        if post is None:
            logger.warning(f"Post with id {post_id} not found")
            raise HTTPException(status_code=404, detail="Post not found")
        return post
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching post with id {post_id}: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@router.put("/{post_id}", response_model=schemas.Post)
def update_post(post_id: int, post: schemas.PostUpdate, db: Session = Depends(deps.get_db)):
    validate_post_payload(post)
    try:
        db_post = crud.update_post(db, post_id=post_id, post=post)
        if db_post is None:
            raise HTTPException(status_code=404, detail="Post not found")
        return db_post
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating post {post_id}: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/{post_id}")
def delete_post(post_id: int, db: Session = Depends(deps.get_db)):
    """Delete a post and all of its sections"""
    try:
        success = crud.delete_post(db, post_id=post_id)
        if not success:
            raise HTTPException(status_code=404, detail="Post not found")
        return {"status": "success", "message": "Post deleted successfully"}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting post {post_id}: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))
