# app/utils/sitemap_generator.py

from datetime import datetime, timezone
from xml.sax.saxutils import escape
from sqlalchemy.orm import Session
from app import crud
from app.core.config import settings


def format_lastmod(value: datetime) -> str:
    """Render a timestamp in UTC for <lastmod>; naive values are stored as UTC by the database"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).replace(microsecond=0).isoformat()


def generate_sitemap(db: Session) -> str:
    """
    Generate a sitemap XML for the blog.

    Args:
        db (Session): The database session.

    Returns:
        str: The sitemap XML content.
    """
    base_url = settings.BASE_URL
    current_time = format_lastmod(datetime.now(timezone.utc))

    # Start the sitemap XML
    sitemap = '<?xml version="1.0" encoding="UTF-8"?>\n'
    sitemap += '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'

    # Add the blog index
    sitemap += f'  <url>\n    <loc>{base_url}/blog/</loc>\n    <lastmod>{current_time}</lastmod>\n    <changefreq>daily</changefreq>\n    <priority>1.0</priority>\n  </url>\n'

    # Add every post by slug
    for post in crud.get_posts(db):
        lastmod = format_lastmod(post.updated_at)
        sitemap += f'  <url>\n    <loc>{base_url}/blog/{escape(post.slug)}</loc>\n    <lastmod>{lastmod}</lastmod>\n    <changefreq>weekly</changefreq>\n    <priority>0.8</priority>\n  </url>\n'

    # Close the sitemap XML
    sitemap += '</urlset>'

    return sitemap
