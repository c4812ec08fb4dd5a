# /autoblogger/services/ai_helpers/anthropic_provider.py

from typing import Any, Dict

from autoblogger.models.ai_model import AnthropicCompletion
from .base_provider import TextProvider

ANTHROPIC_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"


class AnthropicProvider(TextProvider):
    name = "Claude"
    url = ANTHROPIC_URL

    def build_headers(self) -> Dict[str, str]:
        return {
            "x-api-key": self.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "content-type": "application/json",
        }

    def extract_text(self, data: Any) -> str:
        return AnthropicCompletion.model_validate(data).content[0].text
