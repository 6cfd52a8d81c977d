# app/api/endpoints/pages.py

import logging
import os
import re
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session
from markupsafe import Markup
import markdown2
from app import crud
from app.api import deps
from app.core.config import settings

logger = logging.getLogger(__name__)
router = APIRouter()

templates_dir = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))), "templates")
templates = Jinja2Templates(directory=templates_dir)

YOUTUBE_RE = re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)([^&\n?#]+)")
VIMEO_RE = re.compile(r"vimeo\.com/(\d+)")


def process_text(content: str) -> Markup:
    # Convert markdown to HTML, escaping any raw HTML typed into a text section
    html_content = markdown2.markdown(content, safe_mode="escape", extras=[
        'fenced-code-blocks',
        'break-on-newline',
        'cuddled-lists'
    ])
    return Markup(html_content)


def video_embed_url(url: str) -> str:
    """Map YouTube and Vimeo watch links to their embeddable player URL"""
    youtube = YOUTUBE_RE.search(url)
    if youtube:
        return f"https://www.youtube.com/embed/{youtube.group(1)}"
    vimeo = VIMEO_RE.search(url)
    if vimeo:
        return f"https://player.vimeo.com/video/{vimeo.group(1)}"
    return url


templates.env.filters["markdown"] = process_text
templates.env.filters["video_embed"] = video_embed_url


@router.get("/", response_class=HTMLResponse)
def render_blog_index(request: Request, db: Session = Depends(deps.get_db)):
    posts = crud.get_posts(db)
    return templates.TemplateResponse(
        request,
        "blog_index.html",
        {
            "base_url": settings.BASE_URL,
            "posts": posts
        }
    )


@router.get("/{slug}", response_class=HTMLResponse)
def render_blog_post(request: Request, slug: str, db: Session = Depends(deps.get_db)):
    try:
        post = crud.get_post_by_slug(db, slug=slug)
    except Exception as e:
        logger.error(f"Error retrieving blog post {slug}: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")
    if post is None:
        return templates.TemplateResponse(
            request,
            "404.html",
            {"base_url": settings.BASE_URL, "slug": slug},
            status_code=404,
        )
    return templates.TemplateResponse(
        request,
        "blog_post.html",
        {
            "base_url": settings.BASE_URL,
            "post": post
        }
    )
