# /autoblogger/models/ai_model.py

"""
Wire formats for the two text-generation providers. Both accept the same
request body; they differ in how the completion text is nested in the response.
"""

from pydantic import BaseModel
from typing import List


class Message(BaseModel):
    role: str # 'user' or 'assistant'
    content: str


class RequestBody(BaseModel):
    model: str
    messages: List[Message]
    max_tokens: int


# --- OpenAI chat completions ---
class Choice(BaseModel):
    index: int = 0
    message: Message


class GptCompletion(BaseModel):
    choices: List[Choice]


# --- Anthropic messages ---
class AnthropicContent(BaseModel):
    text: str


class AnthropicCompletion(BaseModel):
    content: List[AnthropicContent]
