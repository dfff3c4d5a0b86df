"""Turn orchestration shared by the CLI and web interfaces.

One user action is one flow: hold the busy flag, assemble the request from
the two stores, call the gateway once, and apply the reply back to the
stores. Nothing here retries.
"""

import logging
from dataclasses import asdict
from typing import Any, Dict, Optional

from onboarding_assistant.shared.errors import (
    ConfigurationError,
    GatewayError,
    WorkflowError,
)
from onboarding_assistant.shared.metrics import increment_errors
from onboarding_assistant.shared.tracing import start_span
from .assembler import build_conversation_request, build_extraction_request
from .gateway import GeminiGateway
from .interpreter import interpret_extraction
from .models import COMPLETE_PHASE, DocumentRecord
from .session import OnboardingSession

# Get logger (setup handled by application entry point)
logger = logging.getLogger(__name__)

GATEWAY_FAILURE_MESSAGE = "Error: Unable to reach the assistant. Please try again."


def _stage_span(stage_name: str, *, session_id: Optional[str] = None, **attrs: Any):
    """Create a traced span for a workflow stage."""
    return start_span(
        "stages",
        f"stage.{stage_name}",
        session_id=session_id,
        **{"workflow.stage": stage_name, **attrs},
    )


async def run_chat_turn(
    gateway: GeminiGateway,
    session: OnboardingSession,
    user_text: str,
    session_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Run one conversational turn.

    The user's message is recorded before the request is assembled (the
    assembler skips re-appending it). Gateway failures and malformed replies
    end up as error-flagged messages; the conversation stays usable and the
    busy flag is always cleared.

    Args:
        gateway: Gemini gateway
        session: The user's onboarding session
        user_text: User's message
        session_id: Optional session identifier for logs, spans and metrics

    Returns:
        Dict with message, phase, conversation_id, extracted_data (applied
        patch), application_complete and error
    """
    conversation = session.conversation
    application = session.application
    error: Optional[str] = None
    applied_patch: Dict[str, str] = {}

    with conversation.processing():
        with _stage_span(
            "chat_turn",
            session_id=session_id,
            **{"workflow.phase": conversation.current_phase, "message.length": len(user_text)},
        ):
            conversation.add_message(content=user_text, is_user=True)
            request = build_conversation_request(
                conversation.snapshot(), application.snapshot(), user_text
            )

            try:
                raw_response = await gateway.generate(request)
            except (GatewayError, ConfigurationError) as e:
                logger.error(f"Chat turn failed for session {session_id}: {e}")
                increment_errors("gateway_error", session_id=session_id)
                message = conversation.add_error_message(GATEWAY_FAILURE_MESSAGE)
                error = str(e)
            else:
                message = conversation.add_model_response(raw_response)
                if message.is_error:
                    increment_errors("reply_parse_error", session_id=session_id)
                    error = message.content
                elif message.extracted_data:
                    applied_patch = application.update_extracted_data(message.extracted_data)
                    logger.info(
                        f"Merged {len(applied_patch)} extracted fields for session {session_id}"
                    )

            if conversation.current_phase == COMPLETE_PHASE and not application.application_complete:
                application.complete_application()
                logger.info(f"Application complete for session {session_id}")

    return {
        "message": message,
        "phase": conversation.current_phase,
        "conversation_id": conversation.conversation_id,
        "extracted_data": applied_patch,
        "application_complete": application.application_complete,
        "error": error,
    }


async def run_document_extraction(
    gateway: GeminiGateway,
    session: OnboardingSession,
    file_bytes: bytes,
    mime_type: str,
    filename: str,
    session_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Classify one uploaded document and record it on the application.

    Raises:
        WorkflowError: If the upload is empty
        GatewayError: If the Gemini call fails
        ReplyParseError: If the classification reply is not a JSON object
    """
    if not file_bytes:
        raise WorkflowError("Uploaded document is empty.")

    with session.conversation.processing():
        with _stage_span(
            "document_extraction",
            session_id=session_id,
            **{"document.mime_type": mime_type, "document.size": len(file_bytes)},
        ):
            request = build_extraction_request(file_bytes, mime_type)
            raw_response = await gateway.generate(request)
            classification = interpret_extraction(raw_response)

            record = DocumentRecord(
                file=filename,
                type=classification.document_type,
                data=classification.extracted_data,
                confidence=classification.confidence,
            )
            session.application.add_document(record)
            applied_patch = session.application.update_extracted_data(
                classification.extracted_data
            )

    logger.info(
        f"Document {filename} classified as {record.type} "
        f"(confidence {record.confidence:.2f}) for session {session_id}"
    )

    return {"document": asdict(record), "extracted_data": applied_patch}
