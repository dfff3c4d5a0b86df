"""Shared pytest configuration."""

import os

# web.app reads these at import time.
os.environ.setdefault("FLASK_SECRET_KEY", "test-secret-key")
os.environ.setdefault("GEMINI_API_KEY", "test-api-key")
os.environ.pop("ENABLE_OTEL", None)
