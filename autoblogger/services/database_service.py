# /autoblogger/services/database_service.py

import logging
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from fastapi import Request
from sqlalchemy.orm import sessionmaker

from autoblogger.core.exceptions import StoreFailure

# --- Repository Imports ---
from .database_helpers.article_repository_sql import ArticleRepositorySQL, utc_now
from ..models.article_model import ArticleLink, ArticleRecord

logger = logging.getLogger(__name__)


class DatabaseService:
    """
    The content store: durable slug -> article mapping plus the append-only
    lock log. It is constructed once at startup and shared by every request;
    concurrent access is mediated by the engine's connection pool.
    """

    def __init__(self, session_factory: sessionmaker, clock: Callable[[], datetime] = utc_now):
        self.article_repo = ArticleRepositorySQL(session_factory, clock=clock)

    # --- ARTICLE METHODS (DELEGATED) ---
    def get_article(self, slug: str) -> Optional[ArticleRecord]: return self.article_repo.get_article_by_slug(slug)
    def list_recent(self, limit: int = 20) -> List[ArticleLink]: return self.article_repo.get_recent_articles(limit)
    def insert_article(self, slug: str, title: str, body: str) -> None: return self.article_repo.add_article(slug, title, body)

    # --- RATE LIMIT & LOCK METHODS ---
    def has_article_created_within(self, window: timedelta) -> Optional[datetime]:
        """
        Returns the creation time of the newest article inside the trailing
        window, or None when no article qualifies. The returned timestamp lets
        the caller estimate how long to wait.
        """
        return self.article_repo.get_latest_article_time_since(window)

    def has_lock_within(self, window: timedelta) -> bool:
        return self.article_repo.has_lock_since(window)

    def write_lock(self) -> None:
        """Records that a generation attempt is starting. Best-effort: never raises."""
        try:
            self.article_repo.add_lock()
        except StoreFailure as e:
            logger.warning("Could not write generation lock: %s", e)


# --- DEPENDENCY PROVIDER ---
def get_db_service(request: Request) -> DatabaseService:
    """
    FastAPI dependency that provides the process-wide DatabaseService built
    in the application's lifespan hook.
    """
    return request.app.state.db_service
