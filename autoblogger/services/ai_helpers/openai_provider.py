# /autoblogger/services/ai_helpers/openai_provider.py

from typing import Any, Dict

from autoblogger.models.ai_model import GptCompletion
from .base_provider import TextProvider

OPENAI_URL = "https://api.openai.com/v1/chat/completions"


class OpenAIProvider(TextProvider):
    name = "OpenAI"
    url = OPENAI_URL

    def build_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    def extract_text(self, data: Any) -> str:
        return GptCompletion.model_validate(data).choices[0].message.content
