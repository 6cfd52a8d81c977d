# app/schemas/post.py

from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional, List
from .section import Section, SectionCreate


class PostBase(BaseModel):
    """Base schema for blog posts"""
    title: str
    excerpt: Optional[str] = None
    author: Optional[str] = None


class PostCreate(BaseModel):
    """Schema for creating blog posts"""
    title: Optional[str] = None
    excerpt: Optional[str] = None
    author: Optional[str] = None
    sections: Optional[List[SectionCreate]] = None


class PostUpdate(PostCreate):
    """
    Schema for updating blog posts.

    The update is a full replacement of title, excerpt and author. When
    sections is given (even as an empty list) the post's sections are replaced
    as a whole; when omitted they are left untouched.
    """
    pass


class PostSummary(PostBase):
    """Schema for the post list, without sections"""
    id: int
    slug: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class Post(PostSummary):
    """Schema for complete post representation"""
    sections: List[Section] = []
