"""Web request models for the Flask application."""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class ChatRequest:
    """Incoming chat message request."""

    message: str

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "ChatRequest":
        """Create from JSON request."""
        message = data.get("message", "")
        return cls(message=message if isinstance(message, str) else "")


@dataclass
class PhaseRequest:
    """Manual phase override."""

    phase: str

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "PhaseRequest":
        return cls(phase=str(data.get("phase", "")))


@dataclass
class PanelRequest:
    """Panel visibility change."""

    action: str

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "PanelRequest":
        return cls(action=str(data.get("action", "toggle")))
