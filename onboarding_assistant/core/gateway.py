"""Proxy gateway to the Gemini API.

Forwards a caller-supplied request body to ``generate_content`` and returns
the first candidate's text. It holds no per-request state and never retries.
"""

import base64
import binascii
import copy
import logging
from typing import Any, Dict, List, Optional

from google import genai

from onboarding_assistant.shared.errors import (
    ClientInputError,
    ConfigurationError,
    GatewayError,
    UpstreamShapeError,
)
from .interpreter import strip_json_fence
from .models import GenerationRequest

# Get logger (setup handled by application entry point)
logger = logging.getLogger(__name__)

MISSING_CONTENTS_MESSAGE = 'Request body must contain a "contents" property.'
MALFORMED_UPSTREAM_MESSAGE = "Gemini API response was malformed."
UPSTREAM_FAILURE_MESSAGE = "An error occurred while communicating with the Gemini API."


def _prepare_contents(contents: List[Any]) -> List[Any]:
    """Copy contents, decoding base64 inline data into the bytes the SDK expects."""
    prepared = copy.deepcopy(contents)
    for entry in prepared:
        if not isinstance(entry, dict):
            continue
        parts = entry.get("parts") or []
        if not isinstance(parts, list):
            raise ClientInputError('"parts" must be a list of content parts.')
        for part in parts:
            inline = part.get("inlineData") if isinstance(part, dict) else None
            if isinstance(inline, dict) and isinstance(inline.get("data"), str):
                try:
                    inline["data"] = base64.b64decode(inline["data"], validate=True)
                except (binascii.Error, ValueError) as e:
                    raise ClientInputError("inlineData.data must be base64 encoded.") from e
    return prepared


def _first_text(result: Any) -> Optional[str]:
    """Return candidates[0].content.parts[0].text, or None when any link is missing."""
    candidates = getattr(result, "candidates", None)
    if not candidates:
        return None
    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None)
    if not parts:
        return None
    return getattr(parts[0], "text", None)


def _dump_result(result: Any) -> Any:
    if result is None:
        return None
    if hasattr(result, "model_dump"):
        return result.model_dump(mode="json", exclude_none=True)
    return repr(result)


class GeminiGateway:
    """
    Thin proxy in front of ``google.genai``.

    The API key is read once by the caller at process start; the SDK client
    itself is created on first use.
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        client: Optional[genai.Client] = None,
    ):
        """
        Initialize the gateway.

        Args:
            api_key: Gemini API key (may be None until a call is attempted)
            model: Fixed model identifier used for every call
            client: Optional pre-built SDK client (tests inject a fake here)
        """
        self.api_key = api_key
        self.model = model
        self._client = client

    def _get_client(self) -> genai.Client:
        if self._client is None:
            if not self.api_key:
                raise ConfigurationError(
                    "GEMINI_API_KEY is not set. Configure your Google AI Studio API key."
                )
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def forward(self, body: Dict[str, Any]) -> str:
        """
        Forward a wire body ``{contents, generationConfig?, systemInstruction?}``.

        Returns:
            The first candidate's first text part, with one JSON fence stripped

        Raises:
            ClientInputError: ``contents`` is absent or not a list (no upstream call)
            UpstreamShapeError: the reply has no candidate/content/parts/text
            GatewayError: the upstream call itself failed
        """
        contents = body.get("contents") if isinstance(body, dict) else None
        if contents is None:
            raise ClientInputError(MISSING_CONTENTS_MESSAGE)
        if not isinstance(contents, list):
            raise ClientInputError('"contents" must be a list of content entries.')

        generation_config = body.get("generationConfig") or {}
        if not isinstance(generation_config, dict):
            raise ClientInputError('"generationConfig" must be an object.')
        config: Dict[str, Any] = dict(generation_config)
        system_instruction = body.get("systemInstruction")
        if system_instruction:
            config["systemInstruction"] = system_instruction

        prepared = _prepare_contents(contents)
        client = self._get_client()

        logger.info(
            f"Gemini request: model={self.model}, contents={len(contents)}, "
            f"system_instruction={bool(system_instruction)}"
        )

        try:
            result = await client.aio.models.generate_content(
                model=self.model,
                contents=prepared,
                config=config,
            )
        except Exception as e:
            logger.error(f"Error calling Gemini API: {e}", exc_info=True)
            raise GatewayError(UPSTREAM_FAILURE_MESSAGE) from e

        text = _first_text(result)
        if text is None:
            full_result = _dump_result(result)
            logger.error(
                f"Gemini API response did not have the expected structure. Full result: {full_result}"
            )
            raise UpstreamShapeError(MALFORMED_UPSTREAM_MESSAGE, full_result=full_result)

        return strip_json_fence(text)

    async def generate(self, request: GenerationRequest) -> str:
        """Send an assembled request in-process."""
        return await self.forward(request.to_payload())
