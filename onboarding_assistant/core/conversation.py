"""Conversation state: message log, current phase and busy flag."""

import logging
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from .interpreter import interpret
from .models import (
    INITIAL_PHASE,
    ConversationSnapshot,
    Message,
    is_valid_phase,
)

# Get logger (setup handled by application entry point)
logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


class ConversationStore:
    """
    Ordered log of exchanged messages for one onboarding conversation.

    This is the only place that mutates the message log and the phase tag.
    Readers get immutable snapshots via ``snapshot()``.
    """

    def __init__(self) -> None:
        self._messages: List[Message] = []
        self.is_processing = False
        self.current_phase = INITIAL_PHASE
        self.conversation_id = _new_id()

    @property
    def messages(self) -> tuple:
        return tuple(self._messages)

    def add_message(
        self,
        content: str,
        is_user: bool,
        ui_action: Optional[Dict[str, Any]] = None,
        extracted_data: Optional[Dict[str, Any]] = None,
        full_response: Optional[str] = None,
        is_error: bool = False,
    ) -> Message:
        """Append a message under a freshly generated id."""
        message = Message(
            id=_new_id(),
            content=content,
            is_user=is_user,
            ui_action=ui_action,
            extracted_data=extracted_data,
            full_response=full_response,
            is_error=is_error,
        )
        self._messages.append(message)
        return message

    def add_model_response(self, full_json_response: str) -> Message:
        """
        Ingest a raw model reply.

        The reply is interpreted, appended as an assistant message, and when
        it carries a recognised ``nextPhase`` the current phase is overwritten.
        Malformed replies become an error-flagged message without a cached raw
        response, so later prompts replay the placeholder text instead.

        Args:
            full_json_response: Model output as returned by the gateway

        Returns:
            The appended Message
        """
        reply = interpret(full_json_response)

        if reply.is_error:
            return self.add_error_message(reply.message)

        message = self.add_message(
            content=reply.message,
            is_user=False,
            ui_action=reply.ui_action,
            extracted_data=reply.extracted_data,
            full_response=full_json_response,
        )

        if reply.next_phase:
            if is_valid_phase(reply.next_phase):
                if reply.next_phase != self.current_phase:
                    logger.info(
                        f"Conversation {self.conversation_id}: phase "
                        f"{self.current_phase} -> {reply.next_phase}"
                    )
                self.current_phase = reply.next_phase
            else:
                logger.warning(f"Ignoring unknown nextPhase from model: {reply.next_phase}")

        return message

    def add_error_message(self, content: str) -> Message:
        """Append an error-flagged assistant message."""
        return self.add_message(content=content, is_user=False, is_error=True)

    def set_processing(self, is_processing: bool) -> None:
        self.is_processing = is_processing

    @contextmanager
    def processing(self) -> Iterator["ConversationStore"]:
        """Hold the busy flag for the duration of a request, whatever the outcome."""
        self.set_processing(True)
        try:
            yield self
        finally:
            self.set_processing(False)

    def set_phase(self, phase: str) -> None:
        """Manually override the current phase."""
        if not is_valid_phase(phase):
            raise ValueError(f"Unknown phase: {phase}")
        self.current_phase = phase

    def snapshot(self) -> ConversationSnapshot:
        return ConversationSnapshot(
            messages=tuple(self._messages),
            phase=self.current_phase,
            is_processing=self.is_processing,
            conversation_id=self.conversation_id,
        )

    def reset(self) -> None:
        """Clear the log, return to the first phase and start a new conversation id."""
        self._messages = []
        self.is_processing = False
        self.current_phase = INITIAL_PHASE
        self.conversation_id = _new_id()
