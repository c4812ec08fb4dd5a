# /autoblogger/services/article_service.py

"""
The article resolution pipeline. For one normalized slug it decides, in a
fixed order, whether to show the list view, serve a cached article, refuse
with a wait message, or generate, persist and serve a new article.

Nothing here survives the request. The only state that spans requests is the
generation lock and the articles themselves, both owned by the content store.
Store calls are synchronous SQLAlchemy work, so they are pushed to a worker
thread to keep the event loop free while SQLite or the pool is busy.
"""

import asyncio
import logging
import math
from datetime import datetime, timedelta
from typing import Callable

from autoblogger.core.exceptions import DuplicateKeyError, StoreFailure
from .ai_helpers.base_provider import TextProvider
from .database_helpers.article_repository_sql import utc_now
from .database_service import DatabaseService
from .slug_service import fallback_title
from ..models.article_model import Resolution, ResolutionKind

logger = logging.getLogger(__name__)

DAILY_LIMIT_WINDOW = timedelta(hours=24)
LOCK_WINDOW = timedelta(minutes=5)
RECENT_ARTICLES_LIMIT = 20


def calculate_wait_time(last_created_at: datetime, now: datetime) -> int:
    """
    Whole hours until the daily window opens again, rounded up, plus one.
    An article created two hours ago yields 23.
    """
    remaining = (last_created_at + DAILY_LIMIT_WINDOW) - now
    return math.ceil(remaining.total_seconds() / 3600) + 1


async def _list_view(db: DatabaseService) -> Resolution:
    try:
        articles = await asyncio.to_thread(db.list_recent, RECENT_ARTICLES_LIMIT)
    except StoreFailure as e:
        logger.error("Could not load the article list: %s", e)
        return Resolution(kind=ResolutionKind.LIST_FAILED)
    return Resolution(kind=ResolutionKind.LIST_VIEW, articles=articles)


async def _resolve_title(slug: str, generator: TextProvider) -> str:
    result = await generator.generate_title(slug)
    title = result.text if result.ok else fallback_title(slug)
    if not result.ok:
        logger.info("Using fallback title '%s' for slug: %s", title, slug)
    return title.strip('"')


async def resolve_article(
    slug: str,
    db: DatabaseService,
    generator: TextProvider,
    clock: Callable[[], datetime] = utc_now,
) -> Resolution:
    """
    Runs the decision procedure for one request.

    Store read failures never block a request: a failed lookup counts as a
    miss and a failed rate-limit or lock check counts as "not tripped".
    Store write failures are logged and otherwise ignored.

    Args:
        slug: An already normalized slug. The empty slug is the list view.
        db: The content store.
        generator: The configured title/content provider.
        clock: Source of "now" for the wait estimate.

    Returns:
        A Resolution describing the terminal state reached.
    """
    # 1. List view
    if not slug:
        return await _list_view(db)

    # 2. Cache hit
    try:
        existing = await asyncio.to_thread(db.get_article, slug)
    except StoreFailure as e:
        logger.error("Article lookup failed for '%s': %s", slug, e)
        existing = None
    if existing is not None:
        return Resolution(kind=ResolutionKind.CACHE_HIT, slug=slug, title=existing.title, body=existing.body)

    # 3. Daily limit, global across all slugs
    try:
        last_created_at = await asyncio.to_thread(db.has_article_created_within, DAILY_LIMIT_WINDOW)
    except StoreFailure as e:
        logger.error("Daily limit check failed: %s", e)
        last_created_at = None
    if last_created_at is not None:
        hours_to_wait = calculate_wait_time(last_created_at, clock())
        logger.info("Daily limit reached, %s hours to wait (slug: %s)", hours_to_wait, slug)
        return Resolution(kind=ResolutionKind.RATE_LIMITED, slug=slug, hours_to_wait=hours_to_wait)

    # 4. Generation lock, also global
    try:
        locked = await asyncio.to_thread(db.has_lock_within, LOCK_WINDOW)
    except StoreFailure as e:
        logger.error("Generation lock check failed: %s", e)
        locked = False
    if locked:
        logger.info("Generation locked (slug: %s)", slug)
        return Resolution(kind=ResolutionKind.LOCKED, slug=slug)

    # 5. Take the lock. Advisory only: two requests racing past step 4 both generate.
    await asyncio.to_thread(db.write_lock)

    # 6-7. Title, then content
    title = await _resolve_title(slug, generator)
    article = await generator.generate_article(title)
    if article.is_empty:
        logger.warning("No content generated for slug: %s", slug)
        return Resolution(kind=ResolutionKind.NO_CONTENT, slug=slug)

    # 8. Persist; losing a race to another request is fine
    try:
        await asyncio.to_thread(db.insert_article, slug, article.title, article.body)
    except DuplicateKeyError:
        logger.info("Article '%s' was stored by a concurrent request", slug)
    except StoreFailure as e:
        logger.error("Could not store article '%s': %s", slug, e)

    # 9. Serve what was just generated
    return Resolution(kind=ResolutionKind.PERSISTED, slug=slug, title=article.title, body=article.body)
