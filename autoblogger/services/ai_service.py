# /autoblogger/services/ai_service.py

"""
Builds the title/content generator for the configured model. The backend is
chosen once at startup; the rest of the application only sees TextProvider.
"""

from typing import Dict, Optional, Type

import httpx
from fastapi import Request

from autoblogger.core.config import AiModel, Settings
from .ai_helpers.anthropic_provider import AnthropicProvider
from .ai_helpers.base_provider import TextProvider
from .ai_helpers.openai_provider import OpenAIProvider

_PROVIDER_REGISTRY: Dict[AiModel, Type[TextProvider]] = {
    AiModel.GPT4: OpenAIProvider,
    AiModel.CLAUDE3: AnthropicProvider,
    AiModel.CLAUDE4: AnthropicProvider,
}


def create_generator(settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> TextProvider:
    """Build a provider instance from the validated settings."""
    builder = _PROVIDER_REGISTRY[settings.ai_model]
    return builder(settings.api_key, settings.ai_model.api_model, transport=transport)


# --- DEPENDENCY PROVIDER ---
def get_generator(request: Request) -> TextProvider:
    return request.app.state.generator
