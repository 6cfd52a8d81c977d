import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse, Response
from sqlalchemy import text
from sqlalchemy.orm import Session
import uvicorn

from app.api.api import api_router
from app.api.endpoints import pages
from app.core.config import settings, log_settings
from app.db.base import Base
from app.db.session import engine
from app.api import deps
from app.utils.sitemap_generator import generate_sitemap

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application is starting up")
    log_settings(settings)
    try:
        # Create database tables
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created")
    except Exception as e:
        logger.error(f"Error creating database tables: {str(e)}")
    yield
    logger.info("Application is shutting down")


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    lifespan=lifespan
)

app.include_router(api_router, prefix=settings.API_PREFIX)
logger.info("API router included")

app.include_router(pages.router, prefix="/blog", tags=["pages"])
logger.info("Page router included")

# CORS middleware
if settings.BACKEND_CORS_ORIGINS:
    try:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin).rstrip("/") for origin in settings.BACKEND_CORS_ORIGINS],
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE"],
            allow_headers=["*"],
        )
        logger.info(f"CORS middleware added with origins: {settings.BACKEND_CORS_ORIGINS}")
    except Exception as e:
        logger.error(f"Failed to add CORS middleware: {str(e)}")
else:
    logger.warning("No CORS origins specified. CORS middleware not added.")


@app.get("/")
async def root():
    return RedirectResponse(url="/blog/")


@app.get("/sitemap.xml")
def sitemap(db: Session = Depends(deps.get_db)):
    """
    Generate and serve the sitemap XML.

    Args:
        db (Session): The database session.

    Returns:
        Response: The sitemap XML content.
    """
    sitemap_content = generate_sitemap(db)
    return Response(content=sitemap_content, media_type="application/xml")


@app.get("/health")
def health_check(db: Session = Depends(deps.get_db)):
    try:
        db.execute(text("SELECT 1"))
        logger.info("Health check passed")
        return {"status": "healthy", "database": "connected"}
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        return JSONResponse(
            status_code=500,
            content={"status": "unhealthy", "database": "disconnected"}
        )


if __name__ == "__main__":
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=settings.ENVIRONMENT == "development")
