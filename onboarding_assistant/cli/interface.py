"""CLI interface implementation for the Onboarding Assistant."""

import logging
from typing import Any, Dict

from onboarding_assistant.interfaces.base import OnboardingInterface
from onboarding_assistant.interfaces.context import InterfaceContext
from onboarding_assistant.interfaces.handlers import WorkflowHandler

# Get logger (setup handled by application entry point)
logger = logging.getLogger(__name__)


class CLIInterface(OnboardingInterface):
    """Command-line interface implementation."""

    def __init__(self, session_store=None, gateway=None):
        """
        Initialize CLI interface.

        Args:
            session_store: Optional custom session store (defaults to InMemorySessionStore)
            gateway: Optional gateway (defaults to one built from the environment)
        """
        self.context = InterfaceContext(session_store, gateway)
        self.handler = WorkflowHandler()

    async def chat_turn(self, session_id: str, message: str) -> Dict[str, Any]:
        return await self.handler.handle_chat_turn(self.context, session_id, message)

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
