"""
Taskboard - project and task tracking API with per-user ownership.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from taskboard.config import get_settings
from taskboard.database import close_db, init_db
from taskboard.routes import auth, projects, tasks
from taskboard.exceptions import ERROR_RESPONSES, register_exception_handlers
from taskboard.logging_config import setup_logging, get_logger
from taskboard.security import check_jwt_secret

# Initialize logging
setup_logging()
logger = get_logger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    logger.info("Starting Taskboard API...")
    check_jwt_secret(settings)
    await init_db()
    logger.info("Database initialized")
    yield
    logger.info("Shutting down Taskboard API...")
    await close_db()


app = FastAPI(
    title=settings.app_name,
    description="Project and task tracking with completion statistics and overdue detection",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# Register custom exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(auth.router, prefix="/auth", tags=["Auth"], responses=ERROR_RESPONSES)
app.include_router(projects.router, prefix="/projects", tags=["Projects"], responses=ERROR_RESPONSES)
app.include_router(tasks.router, prefix="/projects", tags=["Tasks"], responses=ERROR_RESPONSES)
app.include_router(tasks.overdue_router, prefix="/tasks", tags=["Tasks"], responses=ERROR_RESPONSES)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "message": "Project Management API is running!"}
