import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from tinylink_app.config import settings
from tinylink_app.database.connection import Base, check_database, engine, get_db
from tinylink_app.errors import LinkError, ValidationError
from tinylink_app.logging_config import configure_logging
from tinylink_app.api.v1 import links, redirect

# Import models to ensure they're registered with Base
from tinylink_app.models import Link

configure_logging(settings.log_level)
logger = logging.getLogger("tinylink")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup, release the connection pool on shutdown"""
    Base.metadata.create_all(bind=engine)
    logger.info("%s %s started (%s)", settings.app_name, settings.app_version, settings.environment)
    yield
    engine.dispose()
    logger.info("Database pool closed")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="A URL shortener with click counting",
    debug=settings.debug,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    response = await call_next(request)
    logger.info("%s %s -> %d", request.method, request.url.path, response.status_code)
    return response


@app.exception_handler(LinkError)
async def link_error_handler(request: Request, exc: LinkError):
    """Translate domain errors into JSON responses, logging each one first"""
    if exc.status_code >= 500:
        logger.error(
            "%s %s failed: %s", request.method, request.url.path, exc.message,
            exc_info=exc.__cause__ or exc
        )
    else:
        logger.warning("%s %s rejected (%d): %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies are client errors like any other bad input"""
    return await link_error_handler(request, ValidationError())


@app.get("/healthz")
def health_check(db: Session = Depends(get_db)):
    """Health check endpoint, 500 when the database is unreachable"""
    db_status = check_database(db)
    body = {"ok": db_status["ok"], "version": settings.app_version, "db": db_status}
    if not db_status["ok"]:
        logger.error("Health check failed: %s", db_status.get("error"))
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)
    return body


######## Include routers (redirect last so it never shadows API paths)
app.include_router(links.router)
app.include_router(redirect.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=settings.debug)
