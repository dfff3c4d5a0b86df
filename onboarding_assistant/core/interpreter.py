"""Parsing of Gemini replies into structured conversation turns."""

import json
import logging
import re
from typing import Any, Dict, Optional

from onboarding_assistant.shared.errors import ReplyParseError
from .models import DOCUMENT_TYPES, DocumentClassification, StructuredReply

# Get logger (setup handled by application entry point)
logger = logging.getLogger(__name__)

INVALID_RESPONSE_MESSAGE = "Error: Invalid response format"

# \Z rather than $ so a trailing newline after the closing fence is not skipped over.
_LEADING_FENCE = re.compile(r"\A```json\s*")
_TRAILING_FENCE = re.compile(r"\s*```\Z")


def strip_json_fence(text: str) -> str:
    """Remove one leading ```json and one trailing ``` fence, nothing else.

    The two ends are handled independently, so a reply that only has one of
    them still loses it.
    """
    text = _LEADING_FENCE.sub("", text, count=1)
    return _TRAILING_FENCE.sub("", text, count=1)


def _load_object(raw_text: str) -> Dict[str, Any]:
    obj = json.loads(strip_json_fence(raw_text))
    if not isinstance(obj, dict):
        raise ValueError(f"expected a JSON object, got {type(obj).__name__}")
    return obj


def interpret(raw_text: str) -> StructuredReply:
    """
    Parse a conversational model reply.

    Args:
        raw_text: Model output, possibly wrapped in a ```json fence

    Returns:
        StructuredReply with the display message, UI directive, extracted-data
        patch and phase transition. Malformed output yields an error-flagged
        reply carrying INVALID_RESPONSE_MESSAGE; this function never raises.
    """
    try:
        parsed = _load_object(raw_text)
        message = parsed.get("message")
        if message is not None and not isinstance(message, str):
            raise ValueError(f"message must be a string, got {type(message).__name__}")
    except (TypeError, ValueError) as e:
        # json.JSONDecodeError is a ValueError
        logger.error(f"Failed to parse model response: {e}")
        return StructuredReply(message=INVALID_RESPONSE_MESSAGE, is_error=True)

    ui_action = parsed.get("uiAction")
    if ui_action is not None and not isinstance(ui_action, dict):
        logger.warning(f"Ignoring uiAction that is not an object: {ui_action!r}")
        ui_action = None
    elif ui_action is not None and "type" not in ui_action:
        logger.warning("uiAction is missing its 'type' tag")

    extracted_data = parsed.get("extractedData")
    if extracted_data is not None and not isinstance(extracted_data, dict):
        logger.warning(f"Ignoring extractedData that is not an object: {extracted_data!r}")
        extracted_data = None

    next_phase: Optional[str] = parsed.get("nextPhase") or None
    if next_phase is not None and not isinstance(next_phase, str):
        logger.warning(f"Ignoring nextPhase that is not a string: {next_phase!r}")
        next_phase = None

    return StructuredReply(
        message=message or "",
        ui_action=ui_action,
        extracted_data=extracted_data,
        next_phase=next_phase,
        raw_text=raw_text,
    )


def interpret_extraction(raw_text: str) -> DocumentClassification:
    """Parse the document classification reply.

    Raises:
        ReplyParseError: If the reply is not a JSON object.
    """
    try:
        parsed = _load_object(raw_text)
    except (TypeError, ValueError) as e:
        raise ReplyParseError(f"Document extraction returned malformed output: {e}") from e

    document_type = parsed.get("documentType") or "unknown"
    if document_type not in DOCUMENT_TYPES:
        logger.warning(f"Unrecognised document type from extraction: {document_type}")

    extracted_data = parsed.get("extractedData")
    if not isinstance(extracted_data, dict):
        extracted_data = {}

    try:
        confidence = float(parsed.get("confidence", 0.0))
    except (TypeError, ValueError):
        confidence = 0.0

    return DocumentClassification(
        document_type=document_type,
        extracted_data=extracted_data,
        confidence=confidence,
    )
