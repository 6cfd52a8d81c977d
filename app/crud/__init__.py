# app/crud/__init__.py

from .crud_post import (
    get_posts,
    get_post,
    get_post_by_slug,
    create_post,
    update_post,
    delete_post,
)

from .crud_section import (
    get_section,
    update_section,
    delete_section,
)

from . import crud_post, crud_section

__all__ = [
    "get_posts", "get_post", "get_post_by_slug", "create_post", "update_post", "delete_post",
    "get_section", "update_section", "delete_section",
]
