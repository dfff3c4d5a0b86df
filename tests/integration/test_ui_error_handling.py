"""Tests for web API routes and error handling."""

import io

import pytest
from unittest.mock import AsyncMock, patch

import onboarding_assistant.web.app as web_app
from tests.fakes import ScriptedGateway


@pytest.fixture(autouse=True)
def clear_sessions():
    """Start every test with an empty session store."""
    web_app.session_store.clear()
    yield
    web_app.session_store.clear()


@pytest.fixture
def client():
    """Flask test client."""
    web_app.app.config["TESTING"] = True
    with web_app.app.test_client() as client:
        with client.session_transaction() as sess:
            sess["session_id"] = "test-session"
        yield client


def _scripted(*replies):
    gateway = ScriptedGateway(list(replies))
    return gateway, patch.object(web_app.web_interface.context, "gateway", gateway)


class TestChatEndpoint:
    """Tests for POST /api/chat."""

    def test_chat_success(self, client):
        gateway, patcher = _scripted(
            {
                "message": "What kind of business do you run?",
                "uiAction": {"type": "buttons", "data": {"options": ["Retail", "Restaurant"]}},
                "extractedData": {"businessName": "Bean There"},
                "nextPhase": "discovery",
            }
        )
        with patcher:
            response = client.post("/api/chat", json={"message": "Hi, I own Bean There"})

        assert response.status_code == 200
        data = response.get_json()
        assert data["message"]["content"] == "What kind of business do you run?"
        assert data["message"]["ui_action"]["type"] == "buttons"
        assert data["extracted_data"] == {"businessName": "Bean There"}
        assert data["phase"] == "discovery"
        assert data["error"] is None

    def test_chat_gateway_failure_is_an_error_message(self, client):
        from onboarding_assistant.shared.errors import GatewayError

        _, patcher = _scripted(GatewayError("timeout"))
        with patcher:
            response = client.post("/api/chat", json={"message": "Hello"})

        assert response.status_code == 200
        data = response.get_json()
        assert data["message"]["is_error"] is True
        assert data["error"] == "timeout"

    def test_chat_returns_error_on_exception(self, client):
        """Chat endpoint should return 500 with error message on exception."""
        with patch("onboarding_assistant.web.app.handlers.handle_chat", new_callable=AsyncMock) as mock_handle:
            mock_handle.side_effect = Exception("Test error")

            response = client.post("/api/chat", json={"message": "test"})

        assert response.status_code == 500
        assert "Test error" in response.get_json()["error"]

    def test_chat_empty_message_returns_400(self, client):
        response = client.post("/api/chat", json={"message": ""})

        assert response.status_code == 400
        assert "error" in response.get_json()

    def test_app_store_serves_requests(self):
        assert web_app.web_interface.context.session_store is web_app.session_store

    def test_chat_busy_session_returns_409(self, client):
        gateway, patcher = _scripted()
        web_app.session_store.get_or_create("test-session").conversation.set_processing(True)

        with patcher:
            response = client.post("/api/chat", json={"message": "Hello"})

        assert response.status_code == 409
        assert gateway.requests == []


class TestDocumentEndpoint:
    """Tests for POST /api/documents."""

    def test_missing_file_returns_400(self, client):
        response = client.post("/api/documents", data={})

        assert response.status_code == 400

    def test_upload_classifies_document(self, client):
        _, patcher = _scripted(
            {"documentType": "taxID", "extractedData": {"ein": "12-3456789"}, "confidence": 0.88}
        )
        with patcher:
            response = client.post(
                "/api/documents",
                data={"file": (io.BytesIO(b"%PDF-1.4"), "ein.pdf", "application/pdf")},
                content_type="multipart/form-data",
            )

        assert response.status_code == 200
        data = response.get_json()
        assert data["document"]["type"] == "taxID"
        assert data["document"]["file"] == "ein.pdf"
        assert data["extracted_data"] == {"ein": "12-3456789"}

    def test_malformed_classification_returns_500(self, client):
        _, patcher = _scripted("not json")
        with patcher:
            response = client.post(
                "/api/documents",
                data={"file": (io.BytesIO(b"abc"), "scan.png", "image/png")},
                content_type="multipart/form-data",
            )

        assert response.status_code == 500
        assert "error" in response.get_json()


class TestApplicationEndpoints:
    """Tests for application, phase and panel routes."""

    def test_get_application_defaults(self, client):
        response = client.get("/api/application")

        data = response.get_json()
        assert data["application"]["businessType"] is None
        assert data["application_complete"] is False
        assert data["panel_open"] is False

    def test_update_business_type(self, client):
        response = client.post("/api/application/business-type", json={"business_type": "online"})

        assert response.status_code == 200
        assert response.get_json()["application"]["businessType"] == "online"

    def test_unknown_field_returns_404(self, client):
        response = client.post("/api/application/owner", json={})

        assert response.status_code == 404

    def test_non_object_body_returns_400(self, client):
        response = client.post("/api/application/business-info", json=["a"])

        assert response.status_code == 400

    def test_invalid_phase_returns_400(self, client):
        assert client.post("/api/phase", json={"phase": "payment"}).status_code == 200
        assert client.post("/api/phase", json={"phase": "lunch"}).status_code == 400

    def test_panel_toggle(self, client):
        response = client.post("/api/panel", json={})

        assert response.get_json() == {"panel_open": True}


class TestSessionEndpoints:
    """Tests for history, reset and health."""

    def test_history_without_session(self):
        web_app.app.config["TESTING"] = True
        with web_app.app.test_client() as fresh_client:
            response = fresh_client.get("/api/history")

        assert response.status_code == 400
        assert response.get_json()["history"] == []

    def test_reset_clears_history(self, client):
        _, patcher = _scripted({"message": "Welcome!"})
        with patcher:
            client.post("/api/chat", json={"message": "Hello"})

        assert len(client.get("/api/history").get_json()["history"]) == 2

        response = client.post("/api/reset")
        assert response.get_json() == {"status": "reset"}
        assert client.get("/api/history").get_json()["history"] == []

    def test_health(self, client):
        assert client.get("/health").get_json() == {"status": "healthy"}
