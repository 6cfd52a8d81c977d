# app/models/section.py

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.base_class import Base
from app.models.enums import SectionType


class Section(Base):
    """Model for a typed, ordered block of content inside a post"""
    __tablename__ = "sections"

    id = Column(Integer, primary_key=True, index=True)
    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(Enum(SectionType, name="section_type"), nullable=False)
    title = Column(String(255), nullable=True)
    content = Column(Text, nullable=False)
    # "metadata" is reserved on declarative classes, so the attribute name differs from the column
    section_metadata = Column("metadata", JSON(none_as_null=True), nullable=True)
    order = Column("order", Integer, nullable=False, default=0, server_default="0")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    post = relationship("Post", back_populates="sections")

    def __repr__(self):
        return f"<Section id={self.id} post_id={self.post_id} type={self.type}>"
