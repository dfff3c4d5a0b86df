"""Shared exception definitions for the application."""

from typing import Any, Optional


class OnboardingAssistantError(Exception):
    """Base exception for Onboarding Assistant errors."""

    pass


class ConfigurationError(OnboardingAssistantError):
    """Raised when configuration is missing or invalid."""

    pass


class SessionError(OnboardingAssistantError):
    """Raised when session operations fail."""

    pass


class WorkflowError(OnboardingAssistantError):
    """Raised when workflow operations fail."""

    pass


class InterfaceError(OnboardingAssistantError):
    """Raised when interface operations fail."""

    pass


class ReplyParseError(OnboardingAssistantError):
    """Raised when model output is not the JSON document we asked for."""

    pass


class GatewayError(OnboardingAssistantError):
    """Raised when a request cannot be forwarded to the Gemini API."""

    status_code = 500

    def to_dict(self) -> dict:
        """Convert to the JSON error body returned by the web layer."""
        return {"error": str(self)}


class ClientInputError(GatewayError):
    """Raised when a gateway request body is missing mandatory fields."""

    status_code = 400


class UpstreamShapeError(GatewayError):
    """Raised when the Gemini response lacks candidates/content/parts/text."""

    def __init__(self, message: str, full_result: Optional[Any] = None):
        super().__init__(message)
        self.full_result = full_result

    def to_dict(self) -> dict:
        return {"error": str(self), "fullResult": self.full_result}
