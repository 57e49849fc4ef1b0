from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Optional
import time
import logging

from .api.routes.auth import router as auth_router
from .api.routes.appointments import router as appointments_router
from .core.config import settings
from .core.database import Database
from .core.exceptions import AppError

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database and create tables on startup, release it on shutdown."""
    logger.info("Starting %s...", settings.APP_NAME)

    owns_database = app.state.database is None
    if owns_database:
        if not settings.DATABASE_URL:
            logger.error("DATABASE_URL not set")
            raise RuntimeError("DATABASE_URL not set")
        logger.info(f"Using {settings.database_backend} database")
        app.state.database = Database(settings.DATABASE_URL)

    try:
        app.state.database.create_all()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {str(e)}")
        raise

    logger.info("Application startup complete")
    yield

    logger.info("Shutting down %s...", settings.APP_NAME)
    if owns_database:
        app.state.database.dispose()
        app.state.database = None

def create_app(database: Optional[Database] = None, static_dir: Optional[str] = None) -> FastAPI:
    """Build the application.

    ``database`` is used as is when given; otherwise one is created from
    ``DATABASE_URL`` on startup.
    """
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.VERSION,
        description="Minimal appointment booking backend",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )
    app.state.database = database

    # Middleware setup
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Only add TrustedHostMiddleware in production, not in testing
    if not settings.TESTING:
        app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.ALLOWED_HOSTS)

    # Custom middleware for request logging and timing
    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)

        # Log request
        logger.info(
            f"{request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.4f}s"
        )

        return response

    # Exception handlers
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"message": "Invalid request body"})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = exc.detail
        if exc.status_code == 404:
            message = "The requested resource was not found"
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": message},
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        logger.error(f"Internal server error: {str(exc)}")
        return JSONResponse(
            status_code=500,
            content={"message": "An unexpected error occurred"}
        )

    @app.get("/api/test")
    async def api_test():
        """Liveness check."""
        return {"message": "API working"}

    # Include routers
    app.include_router(auth_router, prefix="/api")
    app.include_router(appointments_router, prefix="/api")

    # Static files go last so API routes take precedence
    static_dir = static_dir or settings.STATIC_DIR
    if static_dir:
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")

    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="info"
    )
