# /autoblogger/services/database_helpers/article_repository_sql.py

"""
This module contains all the raw SQLAlchemy queries for the articles and
locks tables. It is the only code that talks to the SQLite file.

Every method opens its own short-lived session, so a connection is only held
from the pool for the duration of one query and never across a slow provider
call.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from autoblogger.core.exceptions import DuplicateKeyError, StoreFailure
from autoblogger.db.models.article_models import Article, GenerationLock
from autoblogger.models.article_model import ArticleLink, ArticleRecord

LOCK_MARKER = "lock"


def utc_now() -> datetime:
    """Naive UTC 'now', matching how SQLite stores timestamps."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class ArticleRepositorySQL:
    def __init__(self, session_factory: sessionmaker, clock: Callable[[], datetime] = utc_now):
        self.session_factory = session_factory
        self.clock = clock

    # --- Article Methods ---

    def get_article_by_slug(self, slug: str) -> Optional[ArticleRecord]:
        """Point lookup by exact slug match."""
        try:
            with self.session_factory() as db:
                article = db.get(Article, slug)
                return ArticleRecord.model_validate(article) if article else None
        except SQLAlchemyError as e:
            raise StoreFailure(f"Failed to read article '{slug}': {e}") from e

    def get_recent_articles(self, limit: int = 20) -> List[ArticleLink]:
        """Retrieves (title, slug) pairs, ordered by most recent first."""
        try:
            with self.session_factory() as db:
                rows = db.execute(
                    select(Article.title, Article.slug)
                    .order_by(Article.created_at.desc())
                    .limit(limit)
                ).all()
                return [ArticleLink(title=title, slug=slug) for title, slug in rows]
        except SQLAlchemyError as e:
            raise StoreFailure(f"Failed to list recent articles: {e}") from e

    def get_latest_article_time_since(self, window: timedelta) -> Optional[datetime]:
        """Returns the newest created_at inside the trailing window, if any."""
        cutoff = self.clock() - window
        try:
            with self.session_factory() as db:
                return db.execute(
                    select(Article.created_at)
                    .where(Article.created_at > cutoff)
                    .order_by(Article.created_at.desc())
                    .limit(1)
                ).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise StoreFailure(f"Failed to check the daily rate limit: {e}") from e

    def add_article(self, slug: str, title: str, content: str) -> None:
        """
        Creates a new Article row. Raises DuplicateKeyError if the slug is
        already taken; the existing row is left untouched.
        """
        new_article = Article(slug=slug, title=title, content=content, created_at=self.clock())
        try:
            with self.session_factory() as db:
                db.add(new_article)
                db.commit()
        except IntegrityError as e:
            raise DuplicateKeyError(slug) from e
        except SQLAlchemyError as e:
            raise StoreFailure(f"Failed to insert article '{slug}': {e}") from e

    # --- Lock Methods ---

    def has_lock_since(self, window: timedelta) -> bool:
        cutoff = self.clock() - window
        try:
            with self.session_factory() as db:
                found = db.execute(
                    select(GenerationLock.id).where(GenerationLock.created_at > cutoff).limit(1)
                ).first()
                return found is not None
        except SQLAlchemyError as e:
            raise StoreFailure(f"Failed to check the generation lock: {e}") from e

    def add_lock(self) -> None:
        try:
            with self.session_factory() as db:
                db.add(GenerationLock(marker=LOCK_MARKER, created_at=self.clock()))
                db.commit()
        except SQLAlchemyError as e:
            raise StoreFailure(f"Failed to write the generation lock: {e}") from e
