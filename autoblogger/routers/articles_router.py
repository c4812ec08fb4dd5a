# /autoblogger/routers/articles_router.py

from fastapi import APIRouter, Depends, Response
from fastapi.responses import HTMLResponse, PlainTextResponse
import logging

from ..models.article_model import Resolution, ResolutionKind
from ..services import article_service, render_service, slug_service
from ..services.ai_helpers.base_provider import TextProvider
from ..services.ai_service import get_generator
from ..services.database_service import DatabaseService, get_db_service

logger = logging.getLogger(__name__)

router = APIRouter()

ROBOTS_BODY = "User-agent: *\nDisallow: /"


def to_response(resolution: Resolution) -> Response:
    """Maps a terminal pipeline state to the HTTP response the reader sees."""
    kind = resolution.kind
    if kind == ResolutionKind.LIST_VIEW:
        return HTMLResponse(render_service.render_article_list(resolution.articles))
    if kind == ResolutionKind.LIST_FAILED:
        return PlainTextResponse(render_service.LIST_FAILED_MESSAGE)
    if kind in (ResolutionKind.CACHE_HIT, ResolutionKind.PERSISTED):
        return HTMLResponse(render_service.render_article(resolution.title, resolution.body))
    if kind == ResolutionKind.RATE_LIMITED:
        return HTMLResponse(render_service.render_rate_limited(resolution.hours_to_wait))
    if kind == ResolutionKind.LOCKED:
        return HTMLResponse(render_service.render_locked())
    return PlainTextResponse(render_service.NO_CONTENT_MESSAGE)


@router.get("/robots.txt", response_class=PlainTextResponse, include_in_schema=False)
def get_robots():
    return PlainTextResponse(ROBOTS_BODY)


@router.get("/favicon.ico", include_in_schema=False)
def get_favicon():
    return Response(content=b"")


@router.get("/{path:path}", summary="Get or Generate an Article")
async def get_article(
    path: str,
    db: DatabaseService = Depends(get_db_service),
    generator: TextProvider = Depends(get_generator),
):
    """
    Catch-all endpoint. '/' is the list view; every other path is normalized
    into a slug and handed to the article service.
    """
    # Paths like ' /robots.txt' still count as the static files.
    route = slug_service.strip_route(path)
    if route == slug_service.ROBOTS_PATH:
        return get_robots()
    if route == slug_service.FAVICON_PATH:
        return get_favicon()

    slug = slug_service.normalize_slug(path)
    logger.info("Slug: %s", slug)
    resolution = await article_service.resolve_article(slug, db, generator)
    return to_response(resolution)
