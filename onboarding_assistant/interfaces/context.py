"""Execution context for interface operations."""

from typing import Optional

from onboarding_assistant.core.config import get_gemini_api_key, get_gemini_model
from onboarding_assistant.core.gateway import GeminiGateway
from onboarding_assistant.core.session import InMemorySessionStore


class InterfaceContext:
    """Bundles the Gemini gateway and the session store used by an interface."""

    def __init__(
        self,
        session_store: Optional[InMemorySessionStore] = None,
        gateway: Optional[GeminiGateway] = None,
    ):
        """
        Initialize the context.

        Args:
            session_store: Optional session store. If not provided, InMemorySessionStore is created.
            gateway: Optional gateway. If not provided, one is built from the environment;
                a missing API key only fails once a call is attempted.
        """
        # An empty store is falsy (it defines __len__), so compare against None.
        self.session_store = session_store if session_store is not None else InMemorySessionStore()
        if gateway is None:
            gateway = GeminiGateway(
                api_key=get_gemini_api_key(required=False),
                model=get_gemini_model(),
            )
        self.gateway = gateway
