# app/db/base.py
# Import every model so that Base.metadata knows all tables before create_all / alembic autogenerate.

from app.db.base_class import Base
from app.models.post import Post
from app.models.section import Section

__all__ = ["Base", "Post", "Section"]
