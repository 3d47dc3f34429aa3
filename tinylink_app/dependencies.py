"""
FastAPI dependencies for dependency injection.

Pattern: Dependency Injection
- The engine pool is process-wide; each request gets its own session
- Routes depend on the service, the service depends on the session
- Tests override get_db to point at a throwaway database
"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from tinylink_app.config import settings
from tinylink_app.database.connection import get_db
from tinylink_app.services.link_service import LinkService


def get_base_url(request: Request) -> str:
    """
    Prefix for short URLs.
    
    Uses the BASE_URL setting when configured, otherwise the scheme and
    host the client used to reach us.
    """
    if settings.base_url:
        return settings.base_url
    return str(request.base_url).rstrip("/")


def get_link_service(
    db: Session = Depends(get_db),
    base_url: str = Depends(get_base_url)
) -> LinkService:
    """Get LinkService with its session and base URL injected."""
    return LinkService(db=db, base_url=base_url)
