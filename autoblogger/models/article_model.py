# /autoblogger/models/article_model.py

# --- Core Imports ---
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime
from enum import Enum


class ArticleRecord(BaseModel):
    """
    Defines the data contract for a single stored article when it is read
    back from the content store.
    """
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    slug: str
    title: str
    body: str = Field(..., validation_alias="content")
    created_at: datetime


class ArticleLink(BaseModel):
    """A lightweight (title, slug) pair used by the list view."""
    model_config = ConfigDict(from_attributes=True)

    title: str
    slug: str


class GeneratedArticle(BaseModel):
    """
    The output of a content generation call. An empty body means the provider
    produced nothing usable and the pipeline must not cache anything.
    """
    title: str = ""
    body: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.body


class ResolutionKind(str, Enum):
    LIST_VIEW = "list_view"
    LIST_FAILED = "list_failed"
    CACHE_HIT = "cache_hit"
    RATE_LIMITED = "rate_limited"
    LOCKED = "locked"
    NO_CONTENT = "no_content"
    PERSISTED = "persisted"


class Resolution(BaseModel):
    """
    The terminal state the article service reached for one request, with
    whatever data is needed to render it.
    """
    kind: ResolutionKind
    slug: str = ""
    title: Optional[str] = None
    body: Optional[str] = None
    articles: List[ArticleLink] = Field(default_factory=list)
    hours_to_wait: Optional[int] = None
