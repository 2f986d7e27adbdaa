"""Process-wide AI provider client behind a small capability interface.

Agents only ever see :class:`AIClient`; the concrete Gemini or OpenAI client is
built once by :func:`build_ai_client` at app start and injected, so tests can
pass a fake.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, Optional

import google.generativeai as genai
from openai import OpenAI

from fitmuse_app.config import AppConfig
from logic.safety import system_instruction
from tools.image_loader import ImagePayload
from tools.observability import instrument_tool

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"^```(?:json)?\s*(?P<body>.*?)\s*```$", re.DOTALL)


class AIServiceError(RuntimeError):
    """Raised when the AI provider call fails or returns nothing usable."""


class AIResponseFormatError(ValueError):
    """Raised when the AI returns text that is not JSON at all."""


def parse_json_document(text: Optional[str]) -> Dict[str, Any]:
    """Parse a model reply into an untyped document.

    Empty replies become ``{}`` and non-object JSON is treated as empty so the
    field-level defaults of the callers apply. Text that is not JSON raises
    :class:`AIResponseFormatError`.
    """

    content = (text or "").strip() or "{}"
    fenced = _CODE_FENCE.match(content)
    if fenced:
        content = fenced.group("body") or "{}"
    try:
        parsed = json.loads(content)
    except json.JSONDecodeError as exc:
        raise AIResponseFormatError(f"AI response was not valid JSON: {exc}") from exc
    if not isinstance(parsed, dict):
        logger.warning("AI response was JSON but not an object", extra={"json_type": type(parsed).__name__})
        return {}
    return parsed


class AIClient:
    """Capabilities the analyzers and the selector need from an AI provider."""

    def analyze_image(self, prompt: str, image: ImagePayload, max_tokens: int = 500) -> str:
        """Send one image plus instructions and return the raw JSON text reply."""

        raise NotImplementedError

    def chat_complete(self, prompt: str, max_tokens: int = 800) -> str:
        """Send a text-only prompt and return the raw JSON text reply."""

        raise NotImplementedError

    def generate_image(self, prompt: str, size: str = "1024x1024") -> str:
        """Generate an image and return it as a ``data:`` URL."""

        raise NotImplementedError


class OpenAIClient(AIClient):
    """OpenAI-compatible chat, vision and image generation."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gpt-4o",
        image_model: str = "gpt-image-1",
        base_url: Optional[str] = None,
        client: Optional[OpenAI] = None,
    ) -> None:
        self.model = model
        self.image_model = image_model
        self._client = client or OpenAI(api_key=api_key, base_url=base_url)
        self._system_prompt = system_instruction()

    def _complete(self, content: Any, max_tokens: int) -> str:
        response = self._client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": self._system_prompt},
                {"role": "user", "content": content},
            ],
            response_format={"type": "json_object"},
            max_tokens=max_tokens,
        )
        if not response.choices:
            return "{}"
        return response.choices[0].message.content or "{}"

    @instrument_tool("openai.analyze_image")
    def analyze_image(self, prompt: str, image: ImagePayload, max_tokens: int = 500) -> str:
        content = [
            {"type": "text", "text": prompt},
            {"type": "image_url", "image_url": {"url": image.to_data_url()}},
        ]
        return self._complete(content, max_tokens)

    @instrument_tool("openai.chat_complete")
    def chat_complete(self, prompt: str, max_tokens: int = 800) -> str:
        return self._complete(prompt, max_tokens)

    @instrument_tool("openai.generate_image")
    def generate_image(self, prompt: str, size: str = "1024x1024") -> str:
        response = self._client.images.generate(model=self.image_model, prompt=prompt, size=size)
        if not response.data:
            raise AIServiceError("No image data returned from AI")
        image_data = response.data[0].b64_json
        if not image_data:
            raise AIServiceError("Image data is empty")
        return f"data:image/png;base64,{image_data}"


class GeminiAIClient(AIClient):
    """Gemini vision and chat; image generation is delegated to an optional backend."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        image_backend: Optional[AIClient] = None,
    ) -> None:
        genai.configure(api_key=api_key)
        self.model = model
        self.image_backend = image_backend
        self._model = genai.GenerativeModel(model_name=model, system_instruction=system_instruction())

    def _generate(self, parts: list, max_tokens: int) -> str:
        response = self._model.generate_content(
            parts,
            generation_config=genai.GenerationConfig(
                response_mime_type="application/json",
                max_output_tokens=max_tokens,
            ),
        )
        try:
            return response.text
        except ValueError as exc:
            raise AIServiceError(f"Gemini returned no text: {exc}") from exc

    @instrument_tool("gemini.analyze_image")
    def analyze_image(self, prompt: str, image: ImagePayload, max_tokens: int = 500) -> str:
        return self._generate([prompt, {"mime_type": image.mime_type, "data": image.data}], max_tokens)

    @instrument_tool("gemini.chat_complete")
    def chat_complete(self, prompt: str, max_tokens: int = 800) -> str:
        return self._generate([prompt], max_tokens)

    def generate_image(self, prompt: str, size: str = "1024x1024") -> str:
        if self.image_backend is None:
            raise AIServiceError("Image generation requires OPENAI_API_KEY to be configured")
        return self.image_backend.generate_image(prompt, size=size)


def build_ai_client(config: AppConfig) -> AIClient:
    """Create the single provider client for this process."""

    openai_client: Optional[OpenAIClient] = None
    if config.openai_api_key or config.ai_provider == "openai":
        openai_client = OpenAIClient(
            api_key=config.openai_api_key,
            model=config.openai_model,
            image_model=config.image_model,
            base_url=config.openai_base_url,
        )
    if config.ai_provider == "openai":
        return openai_client
    if config.ai_provider != "gemini":
        raise ValueError(f"Unsupported AI provider '{config.ai_provider}'. Allowed: gemini, openai")
    return GeminiAIClient(api_key=config.google_api_key, model=config.model, image_backend=openai_client)


__all__ = [
    "AIClient",
    "AIResponseFormatError",
    "AIServiceError",
    "GeminiAIClient",
    "OpenAIClient",
    "build_ai_client",
    "parse_json_document",
]
