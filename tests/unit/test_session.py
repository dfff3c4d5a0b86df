"""Tests for session storage and panel state."""

import os
from unittest.mock import patch

import pytest

from onboarding_assistant.core.config import get_flask_secret, get_gemini_api_key, get_port
from onboarding_assistant.core.panel import PanelState
from onboarding_assistant.core.session import InMemorySessionStore, OnboardingSession
from onboarding_assistant.shared.errors import ConfigurationError


class TestInMemorySessionStore:
    """Tests for the in-memory session store."""

    def test_get_or_create_reuses_session(self):
        store = InMemorySessionStore()

        first = store.get_or_create("abc")
        second = store.get_or_create("abc")

        assert first is second
        assert len(store) == 1

    def test_get_missing_returns_none(self):
        assert InMemorySessionStore().get("missing") is None

    def test_sessions_are_isolated(self):
        store = InMemorySessionStore()
        store.get_or_create("a").conversation.add_message("Hi", is_user=True)

        assert store.get_or_create("b").conversation.messages == ()

    def test_delete_and_clear(self):
        store = InMemorySessionStore()
        store.set("a", OnboardingSession())
        store.set("b", OnboardingSession())

        store.delete("a")
        store.delete("unknown")
        assert store.get("a") is None
        assert len(store) == 1

        store.clear()
        assert len(store) == 0

    def test_session_reset_keeps_panel(self):
        session = OnboardingSession()
        session.conversation.add_message("Hi", is_user=True)
        session.application.set_business_type("retail")
        session.panel.open()

        session.reset()

        assert session.conversation.messages == ()
        assert session.application.business_type is None
        assert session.panel.is_open is True


class TestPanelState:
    """Tests for side-panel visibility."""

    def test_starts_closed(self):
        assert PanelState().is_open is False

    def test_actions(self):
        panel = PanelState()

        assert panel.apply("open") is True
        assert panel.apply("toggle") is False
        assert panel.apply("toggle") is True
        assert panel.apply("close") is False

    def test_unknown_action(self):
        with pytest.raises(ValueError):
            PanelState().apply("maximize")


class TestConfig:
    """Tests for environment configuration helpers."""

    def test_missing_api_key_raises_when_required(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ConfigurationError):
                get_gemini_api_key()
            assert get_gemini_api_key(required=False) is None

    def test_missing_flask_secret_raises(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ConfigurationError):
                get_flask_secret()

    def test_port(self):
        with patch.dict(os.environ, {"PORT": "8080"}):
            assert get_port() == 8080
        with patch.dict(os.environ, {"PORT": "not-a-port"}):
            assert get_port() == 3001
