"""HTTP route handlers for Web API."""

import logging
from typing import Any, Dict

from onboarding_assistant.shared.errors import GatewayError
from onboarding_assistant.shared.metrics import (
    increment_chat_turns,
    increment_documents_extracted,
    increment_errors,
    increment_gateway_requests,
)
from onboarding_assistant.web.interface import WebInterface

# Get logger (setup handled by application entry point)
logger = logging.getLogger(__name__)


class WebHandlers:
    """Handlers for Web API endpoints."""

    def __init__(self, web_interface: WebInterface):
        """
        Initialize handlers.

        Args:
            web_interface: WebInterface instance for handling requests
        """
        self.interface = web_interface

    async def handle_chat(self, session_id: str, message: str) -> Dict[str, Any]:
        """
        Handle chat endpoint.

        Args:
            session_id: Unique session identifier
            message: User message

        Returns:
            Dictionary with message, phase, conversation_id, extracted_data,
            application_complete and error
        """
        logger.debug(f"Processing chat for session {session_id}, message length: {len(message)}")

        try:
            increment_chat_turns(session_id)
            result = await self.interface.chat_turn(session_id, message)

            return {
                "message": result.get("message"),
                "phase": result.get("phase"),
                "conversation_id": result.get("conversation_id"),
                "extracted_data": result.get("extracted_data", {}),
                "application_complete": result.get("application_complete", False),
                "error": result.get("error"),
            }
        except Exception as e:
            logger.error(f"Error in chat handler: {e}")
            increment_errors("chat_error", session_id)
            raise

    async def handle_document(
        self, session_id: str, file_bytes: bytes, mime_type: str, filename: str
    ) -> Dict[str, Any]:
        """
        Handle document upload endpoint.

        Returns:
            Dictionary with the recorded document and merged extracted_data
        """
        try:
            result = await self.interface.upload_document(session_id, file_bytes, mime_type, filename)
            increment_documents_extracted(session_id, success=True)
            return result
        except Exception as e:
            logger.error(f"Error in document handler: {e}")
            increment_errors("document_error", session_id)
            increment_documents_extracted(session_id, success=False)
            raise

    async def handle_gateway(self, body: Dict[str, Any]) -> str:
        """
        Handle the raw Gemini proxy endpoint.

        Returns:
            Model text (a JSON document) to send back verbatim
        """
        try:
            text = await self.interface.forward_to_gateway(body)
        except GatewayError as e:
            increment_gateway_requests(e.status_code)
            increment_errors(type(e).__name__)
            raise
        increment_gateway_requests(200)
        return text

    async def handle_reset(self, session_id: str) -> Dict[str, str]:
        """Handle reset endpoint."""
        await self.interface.reset_session(session_id)
        return {"status": "reset"}

    async def handle_history(self, session_id: str) -> Dict[str, Any]:
        """Handle history retrieval endpoint."""
        return await self.interface.get_session_history(session_id)

    async def handle_get_application(self, session_id: str) -> Dict[str, Any]:
        """Handle application snapshot endpoint."""
        return await self.interface.get_application(session_id)

    def handle_update_application(
        self, session_id: str, field: str, payload: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Handle an explicit application-data mutation."""
        return self.interface.update_application(session_id, field, payload)

    def handle_set_phase(self, session_id: str, phase: str) -> Dict[str, Any]:
        """Handle manual phase override."""
        return self.interface.set_phase(session_id, phase)

    def handle_panel(self, session_id: str, action: str) -> Dict[str, Any]:
        """Handle side-panel visibility change."""
        return self.interface.apply_panel_action(session_id, action)
