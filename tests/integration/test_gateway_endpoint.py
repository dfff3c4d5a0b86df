"""Tests for the raw Gemini proxy endpoint."""

import pytest
from types import SimpleNamespace
from unittest.mock import patch

import onboarding_assistant.web.app as web_app
from onboarding_assistant.core.gateway import (
    MALFORMED_UPSTREAM_MESSAGE,
    MISSING_CONTENTS_MESSAGE,
    UPSTREAM_FAILURE_MESSAGE,
    GeminiGateway,
)
from tests.fakes import fake_client, gemini_result

BODY = {
    "contents": [{"role": "user", "parts": [{"text": "Hello"}]}],
    "generationConfig": {"temperature": 0.7, "responseMimeType": "application/json"},
    "systemInstruction": {"parts": [{"text": "You are an onboarding consultant."}]},
}


@pytest.fixture
def client():
    """Flask test client."""
    web_app.app.config["TESTING"] = True
    with web_app.app.test_client() as client:
        yield client


def _use_client(sdk_client):
    gateway = GeminiGateway(api_key="test-key", model="gemini-2.5-pro", client=sdk_client)
    return patch.object(web_app.web_interface.context, "gateway", gateway)


class TestGeminiEndpoint:
    """Tests for POST /api/gemini."""

    def test_missing_contents_returns_400_without_upstream_call(self, client):
        sdk_client = fake_client(gemini_result("{}"))

        with _use_client(sdk_client):
            response = client.post("/api/gemini", json={})

        assert response.status_code == 400
        assert response.get_json() == {"error": MISSING_CONTENTS_MESSAGE}
        sdk_client.aio.models.generate_content.assert_not_called()

    def test_non_json_body_returns_400(self, client):
        with _use_client(fake_client(gemini_result("{}"))):
            response = client.post("/api/gemini", data="hello", content_type="text/plain")

        assert response.status_code == 400

    def test_non_object_generation_config_returns_400(self, client):
        sdk_client = fake_client(gemini_result("{}"))

        with _use_client(sdk_client):
            response = client.post("/api/gemini", json={**BODY, "generationConfig": "fast"})

        assert response.status_code == 400
        assert "generationConfig" in response.get_json()["error"]
        sdk_client.aio.models.generate_content.assert_not_called()

    def test_success_returns_model_text_verbatim(self, client):
        sdk_client = fake_client(gemini_result('```json\n{"message": "Welcome!"}\n```'))

        with _use_client(sdk_client):
            response = client.post("/api/gemini", json=BODY)

        assert response.status_code == 200
        assert response.mimetype == "application/json"
        assert response.get_data(as_text=True) == '{"message": "Welcome!"}'

        config = sdk_client.aio.models.generate_content.call_args.kwargs["config"]
        assert config["temperature"] == 0.7
        assert config["systemInstruction"] == BODY["systemInstruction"]

    def test_malformed_upstream_returns_500_with_full_result(self, client):
        with _use_client(fake_client(SimpleNamespace(candidates=[]))):
            response = client.post("/api/gemini", json=BODY)

        assert response.status_code == 500
        data = response.get_json()
        assert data["error"] == MALFORMED_UPSTREAM_MESSAGE
        assert "fullResult" in data

    def test_upstream_exception_returns_500(self, client):
        with _use_client(fake_client(side_effect=RuntimeError("API key not valid"))):
            response = client.post("/api/gemini", json=BODY)

        assert response.status_code == 500
        assert response.get_json() == {"error": UPSTREAM_FAILURE_MESSAGE}
