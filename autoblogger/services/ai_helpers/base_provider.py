# /autoblogger/services/ai_helpers/base_provider.py

"""Abstract interface shared by the text-generation backends."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, ValidationError

from autoblogger.core.exceptions import GenerationFailure
from autoblogger.models.ai_model import Message, RequestBody
from autoblogger.models.article_model import GeneratedArticle
from .. import prompt_library

logger = logging.getLogger(__name__)

MAX_TOKENS = 2000
# Article generation can take well over a minute; only connecting is kept short.
DEFAULT_TIMEOUT = httpx.Timeout(300.0, connect=10.0)


class GenerationResult(BaseModel):
    """Success-with-text or soft-failure-with-reason, never an exception."""
    ok: bool
    text: str = ""
    error: Optional[str] = None


def title_messages(slug: str) -> List[Message]:
    return [Message(role="user", content=prompt_library.TITLE_PROMPT.format(slug=slug))]


def article_messages(title: str) -> List[Message]:
    return [
        Message(role="user", content=prompt_library.ARTICLE_INSTRUCTION_TURN),
        Message(role="assistant", content=prompt_library.ARTICLE_EXAMPLE_TURN),
        Message(role="user", content=prompt_library.ARTICLE_PROMPT.format(title=title)),
    ]


class TextProvider(ABC):
    """
    One backend of the title/content generator. Subclasses only describe the
    endpoint, the auth headers and where the completion text lives in the
    response; the two public operations are shared.
    """
    name = "provider"
    url = ""

    def __init__(
        self,
        api_key: str,
        model: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: httpx.Timeout = DEFAULT_TIMEOUT,
    ):
        if not api_key:
            raise ValueError(f"Missing API key for {self.name}")
        self.api_key = api_key
        self.model = model
        self.transport = transport
        self.timeout = timeout

    @abstractmethod
    def build_headers(self) -> Dict[str, str]:
        raise NotImplementedError

    @abstractmethod
    def extract_text(self, data: Any) -> str:
        """Pulls the first completion's text out of a decoded response body."""
        raise NotImplementedError

    async def complete(self, messages: List[Message]) -> str:
        """Sends one request. Any transport, status or parse problem raises GenerationFailure."""
        body = RequestBody(model=self.model, messages=messages, max_tokens=MAX_TOKENS)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.url, headers=self.build_headers(), json=body.model_dump())
                response.raise_for_status()
                return self.extract_text(response.json())
        except httpx.HTTPError as e:
            raise GenerationFailure(f"{self.name} request failed: {e}") from e
        # ValueError covers JSONDecodeError and UnicodeDecodeError from undecodable bytes.
        except (ValueError, ValidationError, IndexError) as e:
            raise GenerationFailure(f"{self.name} returned an unparsable body: {e}") from e

    async def generate_title(self, slug: str) -> GenerationResult:
        logger.info("Fetching title from %s for slug: %s", self.name, slug)
        try:
            return GenerationResult(ok=True, text=await self.complete(title_messages(slug)))
        except GenerationFailure as e:
            logger.warning("Title generation failed: %s", e)
            return GenerationResult(ok=False, error=str(e))

    async def generate_article(self, title: str) -> GeneratedArticle:
        """Returns an empty article when the provider fails."""
        logger.info("Fetching content from %s for title: %s", self.name, title)
        try:
            body = await self.complete(article_messages(title))
        except GenerationFailure as e:
            logger.warning("Content generation failed: %s", e)
            return GeneratedArticle()
        return GeneratedArticle(title=title, body=body)
