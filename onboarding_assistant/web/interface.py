"""Web interface implementation for the Onboarding Assistant."""

import logging
from typing import Any, Dict, Optional

from onboarding_assistant.core.gateway import GeminiGateway
from onboarding_assistant.core.session import InMemorySessionStore
from onboarding_assistant.interfaces.base import OnboardingInterface
from onboarding_assistant.interfaces.context import InterfaceContext
from onboarding_assistant.interfaces.handlers import WorkflowHandler

# Get logger (setup handled by application entry point)
logger = logging.getLogger(__name__)


class WebInterface(OnboardingInterface):
    """Web interface implementation for Flask application."""

    def __init__(
        self,
        session_store: Optional[InMemorySessionStore] = None,
        gateway: Optional[GeminiGateway] = None,
    ):
        """
        Initialize Web interface.

        Args:
            session_store: Optional custom session store (defaults to InMemorySessionStore)
            gateway: Optional gateway (defaults to one built from the environment)
        """
        self.context = InterfaceContext(session_store, gateway)
        self.handler = WorkflowHandler()

    async def chat_turn(self, session_id: str, message: str) -> Dict[str, Any]:
        result = await self.handler.handle_chat_turn(self.context, session_id, message)
        if result.get("error"):
            logger.debug(f"Session {session_id}: turn ended with error {result['error']}")
        return result

    async def upload_document(
        self, session_id: str, file_bytes: bytes, mime_type: str, filename: str
    ) -> Dict[str, Any]:
        return await self.handler.handle_document_upload(
            self.context, session_id, file_bytes, mime_type, filename
        )

    async def reset_session(self, session_id: str) -> None:
        await self.handler.handle_reset_session(self.context, session_id)

    async def get_session_history(self, session_id: str) -> Dict[str, Any]:
        return self.handler.get_session_history(self.context, session_id)

    async def get_application(self, session_id: str) -> Dict[str, Any]:
        return self.handler.get_application(self.context, session_id)

    def update_application(
        self, session_id: str, field: str, payload: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Apply an explicit application-data mutation."""
        return self.handler.update_application(self.context, session_id, field, payload)

    def set_phase(self, session_id: str, phase: str) -> Dict[str, Any]:
        """Manually override the workflow phase."""
        return self.handler.set_phase(self.context, session_id, phase)

    def apply_panel_action(self, session_id: str, action: str) -> Dict[str, Any]:
        """Open, close or toggle the side panel."""
        return self.handler.apply_panel_action(self.context, session_id, action)

    async def forward_to_gateway(self, body: Dict[str, Any]) -> str:
        """Proxy a raw Gemini request body."""
        return await self.context.gateway.forward(body)
