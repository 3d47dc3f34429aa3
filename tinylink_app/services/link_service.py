import logging
from typing import List, Optional

from sqlalchemy import delete, exists, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from tinylink_app.config import settings
from tinylink_app.errors import ConflictError, NotFoundError, StoreError, ValidationError
from tinylink_app.models.link import Link, utcnow
from tinylink_app.schemas.link import LinkCreated, LinkRecord
from tinylink_app.services.code_resolver import UniqueCodeResolver
from tinylink_app.services.short_code_factory import ShortCodeFactory
from tinylink_app.services.short_code_strategies import ShortCodeStrategy
from tinylink_app.validators import (
    is_reserved,
    is_valid_code,
    is_valid_url,
    normalize_code,
    normalize_url
)

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"  # PostgreSQL SQLSTATE


def is_unique_violation(exc: IntegrityError) -> bool:
    """Tell a duplicate key apart from other integrity failures (NOT NULL etc.)"""
    orig = exc.orig
    sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if sqlstate:
        return sqlstate == UNIQUE_VIOLATION
    return "unique" in str(orig).lower()


class LinkService:
    """
    Link Service: creation, redirect accounting, listing and deletion.
    
    All state lives in the database; the service holds only the session
    for the current request. SQLAlchemy errors never escape: they are
    translated into the domain errors from tinylink_app.errors, and the
    session is rolled back on every failed write.
    """
    
    def __init__(
        self,
        db: Session,
        base_url: str,
        strategy: Optional[ShortCodeStrategy] = None,
        code_length: Optional[int] = None,
        max_attempts: Optional[int] = None
    ):
        """
        Args:
            db: Database session for this request
            base_url: Prefix for short URLs, without trailing slash
            strategy: Code generator (defaults to the configured strategy)
            code_length: Length of generated codes
            max_attempts: Candidates tried before falling back
        """
        self.db = db
        self.base_url = base_url.rstrip("/")
        self.strategy = strategy or ShortCodeFactory.create_strategy()
        self.code_length = code_length or settings.short_code_length
        self.max_attempts = max_attempts or settings.max_code_attempts
        self.resolver = UniqueCodeResolver(db, self.strategy)

    def short_url(self, code: str) -> str:
        return f"{self.base_url}/{code}"

    def _to_record(self, link: Link) -> LinkRecord:
        return LinkRecord(
            code=link.code,
            url=link.url,
            short_url=self.short_url(link.code),
            clicks=link.clicks or 0,
            last_clicked=link.last_clicked,
            created_at=link.created_at,
        )

    def create_link(self, url: object, desired_code: object = None) -> LinkCreated:
        """Create a new short link
        
        Process:
        1. Validate url and desired code (no database access before this)
        2. Pick the code: the desired one, or a generated free candidate
        3. Advisory duplicate check for desired codes
        4. Insert; a unique violation on insert is the authoritative conflict
        """
        url = normalize_url(url)
        if not is_valid_url(url):
            raise ValidationError("invalid url")

        desired_code = normalize_code(desired_code)
        if desired_code is not None and not is_valid_code(desired_code):
            raise ValidationError("invalid code format")

        try:
            if desired_code is not None:
                code = desired_code
                if self.db.scalar(select(exists().where(Link.code == code))):
                    logger.info("Rejected duplicate code %s", code)
                    raise ConflictError()
            else:
                code = self.resolver.resolve(self.code_length, self.max_attempts)

            self.db.add(Link(code=code, url=url, clicks=0))
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if is_unique_violation(e):
                logger.info("Code %s was claimed concurrently", code)
                raise ConflictError() from e
            raise StoreError() from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError() from e

        logger.info("Created link %s -> %s", code, url)
        return LinkCreated(code=code, url=url, short_url=self.short_url(code))

    def resolve_and_count(self, code: str) -> str:
        """
        Return the target URL and record one click.
        
        The increment and the lookup are one UPDATE ... RETURNING statement,
        so concurrent redirects on the same code cannot lose updates.
        """
        if is_reserved(code):
            raise NotFoundError()

        stmt = (
            update(Link)
            .where(Link.code == code)
            .values(clicks=Link.clicks + 1, last_clicked=utcnow())
            .returning(Link.url)
        )
        try:
            url = self.db.execute(stmt).scalar_one_or_none()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError() from e

        if url is None:
            raise NotFoundError()
        return url

    def list_links(self) -> List[LinkRecord]:
        """All links, newest first"""
        try:
            links = self.db.scalars(select(Link).order_by(Link.created_at.desc())).all()
        except SQLAlchemyError as e:
            raise StoreError() from e
        return [self._to_record(link) for link in links]

    def get_link(self, code: str) -> LinkRecord:
        try:
            link = self.db.scalars(select(Link).where(Link.code == code)).first()
        except SQLAlchemyError as e:
            raise StoreError() from e
        if link is None:
            raise NotFoundError()
        return self._to_record(link)

    def delete_link(self, code: str) -> None:
        """Hard delete; deleting twice raises NotFoundError the second time"""
        stmt = delete(Link).where(Link.code == code).returning(Link.code)
        try:
            deleted = self.db.execute(stmt).scalar_one_or_none()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError() from e

        if deleted is None:
            raise NotFoundError()
        logger.info("Deleted link %s", code)
