from .section import Section, SectionCreate, SectionUpdate
from .post import Post, PostCreate, PostUpdate, PostSummary

__all__ = [
    "Section", "SectionCreate", "SectionUpdate",
    "Post", "PostCreate", "PostUpdate", "PostSummary",
]
