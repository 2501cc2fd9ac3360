"""
Runtime configuration for the tactical analysis service.

Settings are resolved once at process start (from the environment and an
optional .env file) and passed into the pipeline constructor.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .errors import MissingCredentialError


# Checked in this order; the first non-empty value wins
API_KEY_ENV_VARS = ("VITE_GEMINI_API_KEY", "API_KEY", "GEMINI_API_KEY")

# backend/src/tactical_analysis/ -> project root
PROJECT_ROOT = Path(__file__).parent.parent.parent.parent


class Settings(BaseModel):
    """Process-wide configuration values."""
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-3-pro-preview"
    web_thinking_budget: int = 6000
    file_thinking_budget: int = 2000
    max_frames: int = Field(default=20, ge=1)
    oembed_endpoint: str = "https://www.youtube.com/oembed"
    oembed_timeout: float = 15.0

    def require_api_key(self) -> str:
        """Return the configured credential or fail fast."""
        if not self.gemini_api_key:
            raise MissingCredentialError()
        return self.gemini_api_key


def resolve_api_key() -> Optional[str]:
    for name in API_KEY_ENV_VARS:
        value = os.getenv(name)
        if value and value.strip():
            return value.strip()
    return None


def load_settings(env_file: Optional[Union[str, Path]] = None) -> Settings:
    """
    Load settings from the environment.

    Args:
        env_file: Path to a .env file. Defaults to the project root .env.

    Returns:
        Settings instance
    """
    env_path = Path(env_file) if env_file else PROJECT_ROOT / '.env'
    load_dotenv(dotenv_path=env_path)

    values = {"gemini_api_key": resolve_api_key()}

    model = os.getenv("GEMINI_MODEL")
    if model:
        values["gemini_model"] = model

    max_frames = os.getenv("MAX_FRAMES")
    if max_frames:
        values["max_frames"] = int(max_frames)

    oembed_endpoint = os.getenv("OEMBED_ENDPOINT")
    if oembed_endpoint:
        values["oembed_endpoint"] = oembed_endpoint

    settings = Settings(**values)
    print(f"[CONFIG] Model: {settings.gemini_model} | "
          f"API key: {'Set' if settings.gemini_api_key else 'Not set'} | "
          f"Max frames: {settings.max_frames}")
    return settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the settings resolved for this process."""
    return load_settings()
