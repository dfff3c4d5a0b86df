"""Shared configuration helpers for the Onboarding Assistant."""

import os
from typing import Optional

from dotenv import load_dotenv

from onboarding_assistant.shared.errors import ConfigurationError

DEFAULT_GEMINI_MODEL = "gemini-2.5-pro"
DEFAULT_PORT = 3001


def load_environment() -> None:
    """Load environment variables from .env if present."""
    load_dotenv()


def get_gemini_api_key(required: bool = True) -> Optional[str]:
    """Return the Gemini API key; raise if it is missing and required."""
    api_key = os.getenv("GEMINI_API_KEY")
    if not api_key and required:
        raise ConfigurationError(
            "GEMINI_API_KEY is not set. Configure your Google AI Studio API key."
        )
    return api_key


def get_gemini_model() -> str:
    """Return the Gemini model identifier used by the gateway."""
    return os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL)


def get_flask_secret() -> str:
    """Return the Flask secret key or raise if missing."""
    secret = os.getenv("FLASK_SECRET_KEY")
    if not secret:
        raise ConfigurationError(
            "FLASK_SECRET_KEY environment variable is not set. Set a strong value for production."
        )
    return secret


def get_port(default: int = DEFAULT_PORT) -> int:
    """Return the desired port for local hosting."""
    try:
        return int(os.getenv("PORT", default))
    except ValueError:
        return default
