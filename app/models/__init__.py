# app/models/__init__.py
from app.models.enums import SectionType
from app.models.post import Post
from app.models.section import Section

__all__ = [
    "SectionType",
    "Post",
    "Section",
]
