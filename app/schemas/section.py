# app/schemas/section.py

from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Any, Optional
from app.models.enums import SectionType


class SectionBase(BaseModel):
    """Base schema for post sections"""
    type: SectionType
    title: Optional[str] = None
    content: str
    order: int = 0


class SectionIn(BaseModel):
    """
    Incoming section payload.

    type and content are checked by the endpoints so that a missing value is
    reported as a 400 instead of a schema error.
    """
    type: Optional[SectionType] = None
    title: Optional[str] = None
    content: Optional[str] = None
    metadata: Optional[Any] = None
    order: Optional[int] = None


class SectionCreate(SectionIn):
    """Schema for sections supplied with a post create / update"""
    pass


class SectionUpdate(SectionIn):
    """Schema for updating a single section"""
    pass


class Section(SectionBase):
    """Schema for complete section representation"""
    id: int
    post_id: int
    metadata: Optional[Any] = Field(default=None, validation_alias="section_metadata")
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
