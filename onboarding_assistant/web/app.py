"""Flask web application for the Onboarding Assistant."""

import logging
import os

from flask import Flask, Response, jsonify, request, session

from opentelemetry import trace
from onboarding_assistant.core.config import get_flask_secret, load_environment
from onboarding_assistant.core.session import InMemorySessionStore
from onboarding_assistant.shared.async_utils import run_coroutine
from onboarding_assistant.shared.errors import (
    GatewayError,
    InterfaceError,
    SessionError,
    WorkflowError,
)
from onboarding_assistant.shared.logging import resolve_log_level, setup_logging
from onboarding_assistant.shared.metrics import configure_metrics
from onboarding_assistant.shared.tracing import configure_tracing
from onboarding_assistant.web.handlers import WebHandlers
from onboarding_assistant.web.interface import WebInterface
from onboarding_assistant.web.models import ChatRequest, PanelRequest, PhaseRequest
from onboarding_assistant.web.session_tracing import end_session_span, get_or_create_session_span

load_environment()

setup_logging(
    name="onboarding_assistant_web",
    level=resolve_log_level(),
    service_name="onboarding-assistant-web",
)
configure_tracing(service_name="onboarding-assistant-web")
configure_metrics()

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = get_flask_secret()
# Inline documents arrive base64-encoded inside JSON bodies.
app.config["MAX_CONTENT_LENGTH"] = 50 * 1024 * 1024

# Initialize shared components
session_store = InMemorySessionStore()
web_interface = WebInterface(session_store)
handlers = WebHandlers(web_interface)

APPLICATION_FIELDS = ("business-type", "business-info", "package", "locations")


def _session_id() -> str:
    session_id = session.get("session_id") or os.urandom(16).hex()
    session["session_id"] = session_id
    return session_id


def _error_response(error: Exception, **extra):
    """Map an exception to a JSON error body and status code."""
    if isinstance(error, GatewayError):
        return jsonify({**error.to_dict(), **extra}), error.status_code
    if isinstance(error, SessionError):
        status = 409
    elif isinstance(error, (InterfaceError, WorkflowError)):
        status = 400
    else:
        status = 500
    return jsonify({"error": str(error), **extra}), status


@app.route("/api/gemini", methods=["POST"])
def gemini_proxy():
    """Forward a Gemini request body and return the model's JSON text verbatim."""
    body = request.get_json(silent=True) or {}
    try:
        text = run_coroutine(handlers.handle_gateway(body))
    except Exception as e:
        return _error_response(e)
    return Response(text, mimetype="application/json")


@app.route("/api/chat", methods=["POST"])
def chat():
    """Handle chat messages."""
    chat_request = ChatRequest.from_json(request.get_json(silent=True) or {})
    session_id = _session_id()

    session_span = get_or_create_session_span(session_id)
    with trace.use_span(session_span, end_on_exit=False):
        try:
            result = run_coroutine(handlers.handle_chat(session_id, chat_request.message))
            return jsonify(result)
        except Exception as e:
            return _error_response(e)


@app.route("/api/documents", methods=["POST"])
def upload_document():
    """Classify an uploaded document."""
    upload = request.files.get("file")
    if upload is None:
        return jsonify({"error": 'Request must include a "file" upload.'}), 400

    session_id = _session_id()
    file_bytes = upload.read()
    mime_type = upload.mimetype or "application/octet-stream"

    session_span = get_or_create_session_span(session_id)
    with trace.use_span(session_span, end_on_exit=False):
        try:
            result = run_coroutine(
                handlers.handle_document(session_id, file_bytes, mime_type, upload.filename or "")
            )
            return jsonify(result)
        except Exception as e:
            return _error_response(e)


@app.route("/api/application", methods=["GET"])
def get_application():
    """Get the application data collected for the current session."""
    session_id = _session_id()
    try:
        return jsonify(run_coroutine(handlers.handle_get_application(session_id)))
    except Exception as e:
        return _error_response(e)


@app.route("/api/application/<field>", methods=["POST"])
def update_application(field: str):
    """Apply an explicit mutation to the application data."""
    if field not in APPLICATION_FIELDS:
        return jsonify({"error": f"Unknown application field: {field}"}), 404

    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return jsonify({"error": "Request body must be a JSON object."}), 400

    session_id = _session_id()
    try:
        return jsonify(handlers.handle_update_application(session_id, field, payload))
    except Exception as e:
        return _error_response(e)


@app.route("/api/phase", methods=["POST"])
def set_phase():
    """Manually override the workflow phase."""
    phase_request = PhaseRequest.from_json(request.get_json(silent=True) or {})
    session_id = _session_id()
    try:
        return jsonify(handlers.handle_set_phase(session_id, phase_request.phase))
    except Exception as e:
        return _error_response(e)


@app.route("/api/panel", methods=["POST"])
def panel():
    """Open, close or toggle the side panel."""
    panel_request = PanelRequest.from_json(request.get_json(silent=True) or {})
    session_id = _session_id()
    try:
        return jsonify(handlers.handle_panel(session_id, panel_request.action))
    except Exception as e:
        return _error_response(e)


@app.route("/api/reset", methods=["POST"])
def reset():
    """Reset chat session."""
    session_id = session.get("session_id")
    try:
        if session_id:
            session_span = get_or_create_session_span(session_id)
            with trace.use_span(session_span, end_on_exit=False):
                run_coroutine(handlers.handle_reset(session_id))
            end_session_span(session_id)
        return jsonify({"status": "reset"})
    except Exception as e:
        return _error_response(e)


@app.route("/api/history", methods=["GET"])
def history():
    """Get chat history for current session."""
    session_id = session.get("session_id")

    if not session_id:
        return jsonify({"error": "No active session", "history": []}), 400

    try:
        return jsonify(run_coroutine(handlers.handle_history(session_id)))
    except Exception as e:
        return _error_response(e, history=[])


@app.route("/health")
def health():
    """Health check endpoint."""
    return jsonify({"status": "healthy"})


def main() -> None:
    """Run the development server."""
    from onboarding_assistant.core.config import get_port

    port = get_port()
    logger.info(f"Backend server is running on http://localhost:{port}")
    app.run(host="0.0.0.0", port=port, debug=False)


if __name__ == "__main__":
    main()
