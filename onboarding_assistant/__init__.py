"""Merchant onboarding assistant: guided Gemini-backed onboarding chat."""

__version__ = "0.1.0"
