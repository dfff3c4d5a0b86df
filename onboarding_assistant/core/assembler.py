"""Prompt assembly: store state in, Gemini request out."""

import base64
import copy
import logging
from typing import Any, Dict, List

from .catalog import DEFAULT_PROMPT_CONFIG, EXTRACTION_INSTRUCTION, PromptConfig
from .models import (
    ROLE_MODEL,
    ROLE_USER,
    ApplicationSnapshot,
    ConversationSnapshot,
    GenerationRequest,
)
from .prompts import render_system_prompt

# Get logger (setup handled by application entry point)
logger = logging.getLogger(__name__)

JSON_MIME_TYPE = "application/json"

# Conversational turns want quick, shallow answers rather than deep deliberation.
CONVERSATION_GENERATION_CONFIG: Dict[str, Any] = {
    "temperature": 0.7,
    "candidateCount": 1,
    "maxOutputTokens": 2048,
    "responseMimeType": JSON_MIME_TYPE,
    "thinkingConfig": {"thinkingBudget": 128},
}

EXTRACTION_GENERATION_CONFIG: Dict[str, Any] = {
    "temperature": 0.2,
    "candidateCount": 1,
    "maxOutputTokens": 2048,
    "responseMimeType": JSON_MIME_TYPE,
}


def _text_content(role: str, text: str) -> Dict[str, Any]:
    return {"role": role, "parts": [{"text": text}]}


def build_history(session: ConversationSnapshot) -> List[Dict[str, Any]]:
    """Replay stored messages as Gemini content entries.

    Assistant turns replay the cached raw model response when there is one,
    so the model sees the UI directives it issued earlier. Error-flagged
    turns have no cached response and replay their placeholder text.
    """
    history = []
    for message in session.messages:
        if message.is_user:
            history.append(_text_content(ROLE_USER, message.content))
        else:
            history.append(_text_content(ROLE_MODEL, message.full_response or message.content))
    return history


def build_conversation_request(
    session: ConversationSnapshot,
    application: ApplicationSnapshot,
    new_user_text: str,
    config: PromptConfig = DEFAULT_PROMPT_CONFIG,
) -> GenerationRequest:
    """
    Build the request for one conversational turn.

    Args:
        session: Conversation snapshot (may already hold the new user message)
        application: Application data snapshot
        new_user_text: The user's latest input
        config: Business content for the system instruction

    Returns:
        GenerationRequest with system instruction, replayed history and
        conversation generation options
    """
    contents = build_history(session)

    # The caller usually records the user's message before assembling; don't send it twice.
    last_message = session.last_message
    if not last_message or not last_message.is_user or last_message.content != new_user_text:
        contents.append(_text_content(ROLE_USER, new_user_text))

    system_instruction = render_system_prompt(session.phase, application.to_dict(), config)
    logger.debug(
        f"Built conversation request: phase={session.phase}, "
        f"contents={len(contents)}, instruction_chars={len(system_instruction)}"
    )

    return GenerationRequest(
        contents=tuple(contents),
        generation_config=copy.deepcopy(CONVERSATION_GENERATION_CONFIG),
        system_instruction=system_instruction,
    )


def build_extraction_request(file_bytes: bytes, mime_type: str) -> GenerationRequest:
    """Build the single-document classification request."""
    encoded = base64.b64encode(file_bytes).decode("ascii")
    contents = (
        {
            "role": ROLE_USER,
            "parts": [
                {"text": EXTRACTION_INSTRUCTION},
                {"inlineData": {"mimeType": mime_type, "data": encoded}},
            ],
        },
    )
    return GenerationRequest(
        contents=contents,
        generation_config=copy.deepcopy(EXTRACTION_GENERATION_CONFIG),
    )
