# /tests/test_article_service.py

import httpx
import pytest
from datetime import datetime, timedelta
from typing import Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

from autoblogger.core.exceptions import DuplicateKeyError, StoreFailure
from autoblogger.db.database import create_db_engine, create_session_factory, init_db
from autoblogger.models.article_model import ArticleLink, ArticleRecord, GeneratedArticle, ResolutionKind
from autoblogger.services import article_service
from autoblogger.services.ai_helpers.base_provider import GenerationResult
from autoblogger.services.ai_helpers.openai_provider import OpenAIProvider
from autoblogger.services.database_service import DatabaseService

NOW = datetime(2025, 3, 1, 12, 0, 0)


class InMemoryStore:
    """
    An in-memory stand-in for DatabaseService with the same public surface.
    Timestamps are taken from `now` so scenarios can be set up precisely.
    """
    def __init__(self, now: datetime = NOW):
        self.now = now
        self.articles: Dict[str, ArticleRecord] = {}
        self.locks: List[datetime] = []
        self.insert_calls = 0

    def get_article(self, slug: str) -> Optional[ArticleRecord]:
        return self.articles.get(slug)

    def list_recent(self, limit: int = 20) -> List[ArticleLink]:
        ordered = sorted(self.articles.values(), key=lambda a: a.created_at, reverse=True)
        return [ArticleLink(title=a.title, slug=a.slug) for a in ordered[:limit]]

    def has_article_created_within(self, window: timedelta) -> Optional[datetime]:
        recent = [a.created_at for a in self.articles.values() if a.created_at > self.now - window]
        return max(recent) if recent else None

    def has_lock_within(self, window: timedelta) -> bool:
        return any(created_at > self.now - window for created_at in self.locks)

    def write_lock(self) -> None:
        self.locks.append(self.now)

    def insert_article(self, slug: str, title: str, body: str, created_at: Optional[datetime] = None) -> None:
        self.insert_calls += 1
        if slug in self.articles:
            raise DuplicateKeyError(slug)
        self.articles[slug] = ArticleRecord(slug=slug, title=title, body=body, created_at=created_at or self.now)


def make_generator(title: str = "My First Post", body: str = "Some **content** with [a link](a-link).",
                   title_ok: bool = True) -> MagicMock:
    generator = MagicMock()
    if title_ok:
        generator.generate_title = AsyncMock(return_value=GenerationResult(ok=True, text=title))
    else:
        generator.generate_title = AsyncMock(return_value=GenerationResult(ok=False, error="boom"))
    generator.generate_article = AsyncMock(side_effect=lambda t: GeneratedArticle(title=t if body else "", body=body))
    return generator


@pytest.fixture
def store():
    return InMemoryStore()


# --- Happy path and cache ---

@pytest.mark.asyncio
async def test_generates_and_persists_new_article(store):
    generator = make_generator()

    resolution = await article_service.resolve_article("my-first-post", store, generator, clock=lambda: NOW)

    assert resolution.kind == ResolutionKind.PERSISTED
    assert resolution.title == "My First Post"
    assert store.insert_calls == 1
    assert store.articles["my-first-post"].title == "My First Post"
    assert len(store.locks) == 1
    generator.generate_title.assert_awaited_once_with("my-first-post")
    generator.generate_article.assert_awaited_once_with("My First Post")


@pytest.mark.asyncio
async def test_second_request_is_served_from_cache(store):
    generator = make_generator()
    await article_service.resolve_article("my-first-post", store, generator, clock=lambda: NOW)

    # An hour later the daily limit is active, but cache hits are checked first.
    store.now = NOW + timedelta(hours=1)
    fresh_generator = make_generator()
    resolution = await article_service.resolve_article("my-first-post", store, fresh_generator, clock=lambda: store.now)

    assert resolution.kind == ResolutionKind.CACHE_HIT
    assert resolution.title == "My First Post"
    assert resolution.body == "Some **content** with [a link](a-link)."
    fresh_generator.generate_title.assert_not_awaited()
    fresh_generator.generate_article.assert_not_awaited()
    assert store.insert_calls == 1


@pytest.mark.asyncio
async def test_empty_slug_is_list_view(store):
    store.insert_article("one", "One", "body", created_at=NOW - timedelta(days=3))
    store.insert_article("two", "Two", "body", created_at=NOW - timedelta(days=2))
    generator = make_generator()

    resolution = await article_service.resolve_article("", store, generator)

    assert resolution.kind == ResolutionKind.LIST_VIEW
    assert [a.slug for a in resolution.articles] == ["two", "one"]
    generator.generate_title.assert_not_awaited()


@pytest.mark.asyncio
async def test_list_view_store_failure():
    failing_store = MagicMock()
    failing_store.list_recent.side_effect = StoreFailure("no such table")

    resolution = await article_service.resolve_article("", failing_store, make_generator())

    assert resolution.kind == ResolutionKind.LIST_FAILED


# --- Guards ---

@pytest.mark.asyncio
async def test_daily_limit_blocks_generation(store):
    store.insert_article("earlier-post", "Earlier", "body", created_at=NOW - timedelta(hours=2))
    generator = make_generator()

    resolution = await article_service.resolve_article("another-post", store, generator, clock=lambda: NOW)

    assert resolution.kind == ResolutionKind.RATE_LIMITED
    assert resolution.hours_to_wait == 23
    generator.generate_title.assert_not_awaited()
    generator.generate_article.assert_not_awaited()
    assert store.locks == []


@pytest.mark.asyncio
async def test_daily_limit_expires_after_24_hours(store):
    store.insert_article("old-post", "Old", "body", created_at=NOW - timedelta(hours=25))

    resolution = await article_service.resolve_article("new-post", store, make_generator(), clock=lambda: NOW)

    assert resolution.kind == ResolutionKind.PERSISTED


@pytest.mark.asyncio
async def test_recent_lock_blocks_generation(store):
    store.locks.append(NOW - timedelta(minutes=1))
    generator = make_generator()

    resolution = await article_service.resolve_article("my-first-post", store, generator, clock=lambda: NOW)

    assert resolution.kind == ResolutionKind.LOCKED
    generator.generate_title.assert_not_awaited()
    generator.generate_article.assert_not_awaited()
    assert store.insert_calls == 0


@pytest.mark.asyncio
async def test_daily_limit_is_checked_before_lock(store):
    store.insert_article("earlier-post", "Earlier", "body", created_at=NOW - timedelta(hours=2))
    store.locks.append(NOW - timedelta(minutes=1))

    resolution = await article_service.resolve_article("another-post", store, make_generator(), clock=lambda: NOW)

    assert resolution.kind == ResolutionKind.RATE_LIMITED


@pytest.mark.asyncio
async def test_expired_lock_does_not_block(store):
    store.locks.append(NOW - timedelta(minutes=6))

    resolution = await article_service.resolve_article("my-first-post", store, make_generator(), clock=lambda: NOW)

    assert resolution.kind == ResolutionKind.PERSISTED
    assert len(store.locks) == 2


# --- Fallbacks and soft failures ---

@pytest.mark.asyncio
async def test_title_failure_uses_fallback_title(store):
    generator = make_generator(title_ok=False)

    resolution = await article_service.resolve_article("my-first-post", store, generator, clock=lambda: NOW)

    assert resolution.kind == ResolutionKind.PERSISTED
    generator.generate_article.assert_awaited_once_with("My First Post")
    assert store.articles["my-first-post"].title == "My First Post"


@pytest.mark.asyncio
async def test_surrounding_quotes_are_trimmed_from_title(store):
    generator = make_generator(title='"Quoted Title"')

    await article_service.resolve_article("quoted", store, generator, clock=lambda: NOW)

    generator.generate_article.assert_awaited_once_with("Quoted Title")
    assert store.articles["quoted"].title == "Quoted Title"


@pytest.mark.asyncio
async def test_empty_body_is_not_cached(store):
    generator = make_generator(body="")

    resolution = await article_service.resolve_article("my-first-post", store, generator, clock=lambda: NOW)

    assert resolution.kind == ResolutionKind.NO_CONTENT
    assert store.insert_calls == 0
    # The lock was still taken, so an immediate retry is refused.
    retry = await article_service.resolve_article("my-first-post", store, make_generator(), clock=lambda: NOW)
    assert retry.kind == ResolutionKind.LOCKED


@pytest.mark.asyncio
async def test_duplicate_key_on_insert_is_not_fatal():
    racing_store = InMemoryStore()
    # Simulate another request persisting the slug between our lookup and insert.
    racing_store.get_article = MagicMock(return_value=None)
    racing_store.articles["my-first-post"] = ArticleRecord(
        slug="my-first-post", title="Winner", body="winner body", created_at=NOW - timedelta(days=2))

    resolution = await article_service.resolve_article("my-first-post", racing_store, make_generator(), clock=lambda: NOW)

    assert resolution.kind == ResolutionKind.PERSISTED
    assert resolution.title == "My First Post"
    assert racing_store.articles["my-first-post"].title == "Winner"


@pytest.mark.asyncio
async def test_store_read_failures_do_not_block_generation():
    failing_store = MagicMock()
    failing_store.get_article.side_effect = StoreFailure("read failed")
    failing_store.has_article_created_within.side_effect = StoreFailure("read failed")
    failing_store.has_lock_within.side_effect = StoreFailure("read failed")
    failing_store.insert_article.side_effect = StoreFailure("write failed")

    resolution = await article_service.resolve_article("my-first-post", failing_store, make_generator(), clock=lambda: NOW)

    assert resolution.kind == ResolutionKind.PERSISTED
    failing_store.write_lock.assert_called_once()


# --- Wait estimate ---

@pytest.mark.parametrize("age, expected", [
    (timedelta(hours=2), 23),
    (timedelta(hours=2, minutes=30), 23),
    (timedelta(hours=23, minutes=59), 2),
    (timedelta(minutes=1), 25),
])
def test_calculate_wait_time(age, expected):
    assert article_service.calculate_wait_time(NOW - age, NOW) == expected


# --- Against the real SQLite store ---

@pytest.mark.asyncio
async def test_pipeline_against_sqlite_store(tmp_path):
    current = {"now": NOW}
    clock = lambda: current["now"]
    engine = create_db_engine(f"sqlite:///{tmp_path / 'blog.db'}")
    init_db(engine)
    db = DatabaseService(create_session_factory(engine), clock=clock)

    first = await article_service.resolve_article("my-first-post", db, make_generator(), clock=clock)
    assert first.kind == ResolutionKind.PERSISTED

    current["now"] = NOW + timedelta(hours=2)
    cached = await article_service.resolve_article("my-first-post", db, make_generator(), clock=clock)
    assert cached.kind == ResolutionKind.CACHE_HIT

    other = await article_service.resolve_article("other-post", db, make_generator(), clock=clock)
    assert other.kind == ResolutionKind.RATE_LIMITED
    assert other.hours_to_wait == 23
    engine.dispose()


@pytest.mark.asyncio
async def test_undecodable_provider_body_gives_no_content(store):
    response = httpx.Response(200, content=b'{"choices": "\xff\xfe\xfa"}')
    provider = OpenAIProvider("sk-test", "gpt-4o", transport=httpx.MockTransport(lambda request: response))

    resolution = await article_service.resolve_article("my-post", store, provider, clock=lambda: NOW)

    assert resolution.kind == ResolutionKind.NO_CONTENT
    assert store.insert_calls == 0
