# /autoblogger/core/config.py

import os
from enum import Enum
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .exceptions import ConfigError


# --- Enumerations ---
class AiModel(str, Enum):
    GPT4 = "gpt4"
    CLAUDE3 = "claude3"
    CLAUDE4 = "claude4"

    @property
    def api_model(self) -> str:
        """The model identifier sent to the provider API."""
        return _API_MODELS[self]

    @property
    def is_claude(self) -> bool:
        return self in (AiModel.CLAUDE3, AiModel.CLAUDE4)


_API_MODELS = {
    AiModel.GPT4: "gpt-4o",
    AiModel.CLAUDE3: "claude-3-7-sonnet-latest",
    AiModel.CLAUDE4: "claude-sonnet-4-20250514",
}

DEFAULT_DB_PATH = "./blog.db"
DEFAULT_SERVER_PORT = 3000


class Settings(BaseModel):
    """
    The validated process configuration. Built exactly once at startup and
    treated as read-only for the lifetime of the process.
    """
    ai_model: AiModel
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    db_path: str = DEFAULT_DB_PATH
    server_port: int = Field(DEFAULT_SERVER_PORT, ge=1, le=65535)
    log_level: str = "INFO"

    @property
    def api_key(self) -> str:
        """Returns the credential for the selected backend."""
        if self.ai_model.is_claude:
            return self.anthropic_api_key or ""
        return self.openai_api_key or ""

    @property
    def database_url(self) -> str:
        return f"sqlite:///{self.db_path}"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Reads and validates the configuration from the environment.

        When no mapping is given, a local .env file is loaded first so that
        development setups work without exporting variables by hand.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        raw_model = environ.get("AI_MODEL")
        if not raw_model:
            raise ConfigError("AI_MODEL environment variable must be set")
        try:
            ai_model = AiModel(raw_model.strip().lower())
        except ValueError:
            raise ConfigError(
                f"Invalid AI model: {raw_model}. Must be 'gpt4', 'claude3', or 'claude4'"
            )

        openai_api_key = environ.get("OPENAI_API_KEY") or None
        anthropic_api_key = environ.get("ANTHROPIC_API_KEY") or None

        # The selected backend must have its key; the other one is optional.
        if ai_model == AiModel.GPT4 and not openai_api_key:
            raise ConfigError("OPENAI_API_KEY must be set when using gpt4 model")
        if ai_model.is_claude and not anthropic_api_key:
            raise ConfigError("ANTHROPIC_API_KEY must be set when using claude3 or claude4 model")

        raw_port = environ.get("SERVER_PORT", str(DEFAULT_SERVER_PORT))
        try:
            server_port = int(raw_port)
        except ValueError:
            raise ConfigError("SERVER_PORT must be a valid port number")
        if not 1 <= server_port <= 65535:
            raise ConfigError("SERVER_PORT must be a valid port number")

        return cls(
            ai_model=ai_model,
            openai_api_key=openai_api_key,
            anthropic_api_key=anthropic_api_key,
            db_path=environ.get("DB_PATH", DEFAULT_DB_PATH),
            server_port=server_port,
            log_level=environ.get("LOG_LEVEL", "INFO"),
        )
