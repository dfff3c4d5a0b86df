"""Abstract base class for interface implementations."""

from abc import ABC, abstractmethod
from typing import Any, Dict


class OnboardingInterface(ABC):
    """Abstract base for different interface implementations (CLI, Web, API, etc.)."""

    @abstractmethod
    async def chat_turn(self, session_id: str, message: str) -> Dict[str, Any]:
        """
        Process a single chat turn.

        Args:
            session_id: Unique identifier for the chat session
            message: User's input message

        Returns:
            Dictionary with keys:
                - 'message': The assistant message appended for this turn
                - 'phase': Workflow phase after the turn
                - 'conversation_id': Current conversation identifier
                - 'application_complete': Whether the application is finished
                - 'error': Error message if applicable
        """
        pass

    @abstractmethod
    async def upload_document(
        self, session_id: str, file_bytes: bytes, mime_type: str, filename: str
    ) -> Dict[str, Any]:
        """
        Classify an uploaded document and record it on the application.

        Returns:
            Dictionary with 'document' and the merged 'extracted_data'
        """
        pass

    @abstractmethod
    async def reset_session(self, session_id: str) -> None:
        """
        Reset conversation and application data for a session.

        Args:
            session_id: Unique identifier for the chat session
        """
        pass

    @abstractmethod
    async def get_session_history(self, session_id: str) -> Dict[str, Any]:
        """
        Get the conversation for a session.

        Returns:
            Dictionary with 'history' (list of message dicts), 'phase' and
            'conversation_id'
        """
        pass

    @abstractmethod
    async def get_application(self, session_id: str) -> Dict[str, Any]:
        """Get the application data collected so far."""
        pass
