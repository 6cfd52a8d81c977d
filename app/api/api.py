# app/api/api.py

import logging
from fastapi import APIRouter
from app.api.endpoints import posts, sections

# Set up logging
logger = logging.getLogger(__name__)

api_router = APIRouter()

# Include router for posts
try:
    api_router.include_router(posts.router, prefix="/posts", tags=["posts"])
    logger.info("Posts router included successfully")
except Exception as e:
    logger.error(f"Failed to include posts router: {str(e)}", exc_info=True)

# Include router for sections
try:
    api_router.include_router(sections.router, prefix="/sections", tags=["sections"])
    logger.info("Sections router included successfully")
except Exception as e:
    logger.error(f"Failed to include sections router: {str(e)}", exc_info=True)

logger.info("All routers have been included in the API router")
