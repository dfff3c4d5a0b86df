"""Shared workflow handlers for both CLI and Web interfaces."""

import logging
from typing import Any, Dict, Optional

from onboarding_assistant.core.models import Location
from onboarding_assistant.core.orchestrator import run_chat_turn, run_document_extraction
from onboarding_assistant.core.session import OnboardingSession
from onboarding_assistant.shared.errors import InterfaceError, SessionError
from onboarding_assistant.shared.tracing import start_span
from .context import InterfaceContext

# Get logger (setup handled by application entry point)
logger = logging.getLogger(__name__)


def _handler_span(operation: str, *, session_id: Optional[str] = None, **attrs: Any):
    """Create a span for handler operations with session and operation context.

    Args:
        operation: Name of the handler operation (e.g., "chat_turn", "document_upload")
        session_id: Optional session identifier for correlation
        **attrs: Additional span attributes

    Returns:
        Context manager for the span
    """
    return start_span(
        "handlers",
        f"handler.{operation}",
        session_id=session_id,
        **{"handler.operation": operation, **attrs},
    )


def _ensure_idle(session: OnboardingSession, session_id: str) -> None:
    # Overlapping submissions are refused here, at the caller; the stores never lock.
    if session.conversation.is_processing:
        raise SessionError(f"A request is already in progress for session {session_id}.")


class WorkflowHandler:
    """
    Centralized handler for workflow operations used by all interfaces.

    Provides a single implementation for chat turns, document uploads and
    session management.
    """

    async def handle_chat_turn(
        self,
        context: InterfaceContext,
        session_id: str,
        message: str,
    ) -> Dict[str, Any]:
        """
        Process a single chat turn.

        Args:
            context: InterfaceContext with gateway and session store
            session_id: Unique identifier for the chat session
            message: User's input message

        Returns:
            Dictionary with:
                - 'message': Assistant message dict for this turn
                - 'phase': Phase after the turn
                - 'conversation_id': Conversation identifier
                - 'extracted_data': Fields merged into the application this turn
                - 'application_complete': Completion flag
                - 'error': Error message if the turn failed

        Raises:
            InterfaceError: If the message is empty
            SessionError: If the session is already processing a request
        """
        if not message or not message.strip():
            raise InterfaceError("Message must not be empty.")

        session = context.session_store.get_or_create(session_id)
        _ensure_idle(session, session_id)

        with _handler_span("chat_turn", session_id=session_id, message_length=len(message)):
            result = await run_chat_turn(context.gateway, session, message, session_id=session_id)

        return {**result, "message": result["message"].to_dict()}

    async def handle_document_upload(
        self,
        context: InterfaceContext,
        session_id: str,
        file_bytes: bytes,
        mime_type: str,
        filename: str,
    ) -> Dict[str, Any]:
        """Classify an uploaded document for the session."""
        session = context.session_store.get_or_create(session_id)
        _ensure_idle(session, session_id)

        with _handler_span("document_upload", session_id=session_id, mime_type=mime_type):
            return await run_document_extraction(
                context.gateway,
                session,
                file_bytes,
                mime_type,
                filename,
                session_id=session_id,
            )

    async def handle_reset_session(self, context: InterfaceContext, session_id: str) -> None:
        """Reset conversation and application data; the session itself is kept."""
        with _handler_span("reset_session", session_id=session_id):
            session = context.session_store.get(session_id)
            if session:
                session.reset()
                logger.info(
                    f"Session {session_id} reset, new conversation {session.conversation.conversation_id}"
                )

    def get_session_history(self, context: InterfaceContext, session_id: str) -> Dict[str, Any]:
        """Return the message log, phase and conversation id for a session."""
        session = context.session_store.get_or_create(session_id)
        snapshot = session.conversation.snapshot()
        return {
            "history": [message.to_dict() for message in snapshot.messages],
            "phase": snapshot.phase,
            "conversation_id": snapshot.conversation_id,
            "is_processing": snapshot.is_processing,
        }

    def get_application(self, context: InterfaceContext, session_id: str) -> Dict[str, Any]:
        """Return the application snapshot plus completion and panel flags."""
        session = context.session_store.get_or_create(session_id)
        snapshot = session.application.snapshot()
        return {
            "application": snapshot.to_dict(),
            "application_complete": snapshot.application_complete,
            "panel_open": session.panel.is_open,
        }

    def update_application(
        self,
        context: InterfaceContext,
        session_id: str,
        field: str,
        payload: Dict[str, Any],
    ) -> Dict[str, Any]:
        """
        Apply one explicit mutation to the application data.

        Args:
            field: One of 'business-type', 'business-info', 'package', 'locations'
            payload: Request JSON for the mutation

        Raises:
            InterfaceError: If the field is unknown or the payload is invalid
        """
        application = context.session_store.get_or_create(session_id).application

        try:
            if field == "business-type":
                application.set_business_type(payload.get("business_type"))
            elif field == "business-info":
                application.update_business_info(payload)
            elif field == "package":
                application.set_selected_package(payload)
            elif field == "locations":
                application.add_location(
                    Location(
                        name=payload["name"],
                        address=payload["address"],
                        contact=payload["contact"],
                    )
                )
            else:
                raise InterfaceError(f"Unknown application field: {field}")
        except (KeyError, TypeError, ValueError) as e:
            raise InterfaceError(f"Invalid {field} payload: {e}") from e

        return self.get_application(context, session_id)

    def set_phase(self, context: InterfaceContext, session_id: str, phase: str) -> Dict[str, Any]:
        """Manually override the workflow phase."""
        conversation = context.session_store.get_or_create(session_id).conversation
        try:
            conversation.set_phase(phase)
        except ValueError as e:
            raise InterfaceError(str(e)) from e
        logger.info(f"Session {session_id}: phase manually set to {phase}")
        return {"phase": conversation.current_phase}

    def apply_panel_action(
        self, context: InterfaceContext, session_id: str, action: str
    ) -> Dict[str, Any]:
        """Open, close or toggle the side panel."""
        panel = context.session_store.get_or_create(session_id).panel
        try:
            return {"panel_open": panel.apply(action)}
        except ValueError as e:
            raise InterfaceError(str(e)) from e
