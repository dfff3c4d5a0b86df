"""Test doubles for the Gemini SDK client and the gateway."""

import json
from types import SimpleNamespace
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock


def gemini_result(text: Optional[str]) -> SimpleNamespace:
    """Build an object shaped like a ``GenerateContentResponse`` with one text part."""
    part = SimpleNamespace(text=text)
    content = SimpleNamespace(parts=[part])
    return SimpleNamespace(candidates=[SimpleNamespace(content=content)])


def fake_client(result: Any = None, side_effect: Any = None) -> SimpleNamespace:
    """Build a fake ``genai.Client`` whose aio.models.generate_content is an AsyncMock."""
    generate = AsyncMock(return_value=result, side_effect=side_effect)
    return SimpleNamespace(aio=SimpleNamespace(models=SimpleNamespace(generate_content=generate)))


class ScriptedGateway:
    """Gateway stand-in that returns queued replies and records every request."""

    def __init__(self, replies: List[Any]):
        self.replies = list(replies)
        self.requests: List[Any] = []

    async def generate(self, request):
        self.requests.append(request)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, dict):
            return json.dumps(reply)
        return reply

    async def forward(self, body: Dict[str, Any]) -> str:
        self.requests.append(body)
        return self.replies.pop(0)
