from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

from blog_cms.core.config import settings
from blog_cms.core.errors import BlogError
from blog_cms.routers import blog
from blog_cms.schemas.blog import ErrorResponse

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # NOTE: Schema changes are managed by Alembic.
    # Run: alembic upgrade head
    logger.info("Starting application...")

    if settings.AUTO_CREATE_TABLES:
        from blog_cms.database.engine import create_db_and_tables
        create_db_and_tables()
        logger.info("✓ Database tables created")

    logger.info("Application startup complete")

    yield

    logger.info("Application shutdown complete")

app = FastAPI(
    title="Blog CMS Backend",
    description="Content repository for blog posts, categories and tags",
    version="1.0.0",
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        settings.FRONTEND_URL,  # Frontend URL from settings
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(BlogError)
async def blog_error_handler(request: Request, exc: BlogError):
    logger.warning(f"{exc.detail} for endpoint {request.url.path}")
    body = ErrorResponse(
        error=type(exc).__name__,
        message=exc.detail,
        details=exc.details or None
    )
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


app.include_router(blog.router)  # Blog: /blog/* (posts, categories, tags)

@app.get("/")
def read_root():
    return {
        "message": "Welcome to Blog CMS Backend API",
        "version": "1.0.0",
        "modules": {
            "admin": "/blog/posts, /blog/categories, /blog/tags",
            "public": "/blog/published (feed), /blog/published/post (single post)"
        },
        "docs": "/docs",
        "redoc": "/redoc"
    }

@app.get("/health")
def health_check():
    return {"status": "healthy"}
