"""Session storage for onboarding conversations."""

from dataclasses import dataclass, field
from typing import Dict, Optional

from .application import ApplicationStore
from .conversation import ConversationStore
from .panel import PanelState


@dataclass
class OnboardingSession:
    """Per-user state: the conversation, the application data and the panel."""

    conversation: ConversationStore = field(default_factory=ConversationStore)
    application: ApplicationStore = field(default_factory=ApplicationStore)
    panel: PanelState = field(default_factory=PanelState)

    def reset(self) -> None:
        """Reset conversation and application data together."""
        self.conversation.reset()
        self.application.reset()


class InMemorySessionStore:
    """Lightweight in-memory session store (dev use only)."""

    def __init__(self) -> None:
        """Initialize the in-memory session dictionary."""
        self._sessions: Dict[str, OnboardingSession] = {}

    def get(self, session_id: str) -> Optional[OnboardingSession]:
        """Return session data for a session id, if present."""
        return self._sessions.get(session_id)

    def get_or_create(self, session_id: str) -> OnboardingSession:
        """Return the session for an id, creating an empty one on first use."""
        session = self._sessions.get(session_id)
        if session is None:
            session = OnboardingSession()
            self._sessions[session_id] = session
        return session

    def set(self, session_id: str, data: OnboardingSession) -> None:
        """Persist session data for the given session id."""
        self._sessions[session_id] = data

    def delete(self, session_id: str) -> None:
        """Remove a session if it exists in the store."""
        self._sessions.pop(session_id, None)

    def clear(self) -> None:
        """Remove all sessions from the store."""
        self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)
