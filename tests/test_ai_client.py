"""AI provider clients and reply parsing."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from fitmuse_app.config import AppConfig
from tools import ai_client as ai_client_module
from tools.ai_client import (
    AIResponseFormatError,
    AIServiceError,
    GeminiAIClient,
    OpenAIClient,
    build_ai_client,
    parse_json_document,
)
from tools.image_loader import ImagePayload


class _RecordingOpenAI:
    """Just enough of the OpenAI SDK surface for the client under test."""

    def __init__(self, content="{}", image_b64="aW1hZ2U=") -> None:
        self.requests = []
        self._content = content
        self._image_b64 = image_b64
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))
        self.images = SimpleNamespace(generate=self._generate)

    def _create(self, **kwargs):
        self.requests.append(kwargs)
        if self._content is None:
            return SimpleNamespace(choices=[])
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self._content))])

    def _generate(self, **kwargs):
        self.requests.append(kwargs)
        if self._image_b64 is None:
            return SimpleNamespace(data=[])
        return SimpleNamespace(data=[SimpleNamespace(b64_json=self._image_b64)])


class _FakeGenai:
    def __init__(self) -> None:
        self.configured_with = None
        self.models = []

    def configure(self, api_key=None):
        self.configured_with = api_key

    def GenerativeModel(self, model_name, system_instruction=None):  # noqa: N802
        self.models.append(model_name)
        return SimpleNamespace(model_name=model_name)


@pytest.mark.parametrize(
    "text, expected",
    [
        ('{"category": "shirt"}', {"category": "shirt"}),
        ('```json\n{"category": "shirt"}\n```', {"category": "shirt"}),
        ("```\n{}\n```", {}),
        ("", {}),
        (None, {}),
        ("[1, 2]", {}),
        ('"just a string"', {}),
    ],
)
def test_parse_json_document(text, expected) -> None:
    assert parse_json_document(text) == expected


def test_non_json_reply_is_a_format_error() -> None:
    with pytest.raises(AIResponseFormatError):
        parse_json_document("I think this is a shirt.")


def test_openai_vision_request_carries_image_and_json_mode() -> None:
    sdk = _RecordingOpenAI(content='{"category": "jeans"}')
    client = OpenAIClient(api_key="sk-test", client=sdk)

    reply = client.analyze_image("Describe it", ImagePayload("image/png", b"\x89PNG"), max_tokens=123)

    assert reply == '{"category": "jeans"}'
    request = sdk.requests[0]
    assert request["max_tokens"] == 123
    assert request["response_format"] == {"type": "json_object"}
    assert request["messages"][0]["role"] == "system"
    user_content = request["messages"][1]["content"]
    assert user_content[0] == {"type": "text", "text": "Describe it"}
    assert user_content[1]["image_url"]["url"].startswith("data:image/png;base64,")


def test_openai_empty_choices_become_empty_document() -> None:
    client = OpenAIClient(api_key="sk-test", client=_RecordingOpenAI(content=None))

    assert client.chat_complete("Pick an outfit") == "{}"


def test_openai_image_generation_returns_data_url() -> None:
    sdk = _RecordingOpenAI(image_b64="aW1hZ2U=")
    client = OpenAIClient(api_key="sk-test", image_model="gpt-image-1", client=sdk)

    assert client.generate_image("flat lay", size="1024x1024") == "data:image/png;base64,aW1hZ2U="
    assert sdk.requests[0] == {"model": "gpt-image-1", "prompt": "flat lay", "size": "1024x1024"}


def test_openai_image_generation_without_data_fails() -> None:
    client = OpenAIClient(api_key="sk-test", client=_RecordingOpenAI(image_b64=None))

    with pytest.raises(AIServiceError, match="No image data returned from AI"):
        client.generate_image("flat lay")


def test_gemini_without_image_backend_cannot_generate_images(monkeypatch) -> None:
    monkeypatch.setattr(ai_client_module, "genai", _FakeGenai())
    client = GeminiAIClient(api_key="g-key", model="models/gemini-test")

    with pytest.raises(AIServiceError, match="OPENAI_API_KEY"):
        client.generate_image("flat lay")


def test_build_gemini_client_with_openai_image_backend(monkeypatch) -> None:
    fake_genai = _FakeGenai()
    monkeypatch.setattr(ai_client_module, "genai", fake_genai)
    config = AppConfig(google_api_key="g-key", openai_api_key="sk-test", model="models/gemini-test")

    client = build_ai_client(config)

    assert isinstance(client, GeminiAIClient)
    assert isinstance(client.image_backend, OpenAIClient)
    assert fake_genai.configured_with == "g-key"
    assert fake_genai.models == ["models/gemini-test"]


def test_build_openai_client() -> None:
    client = build_ai_client(AppConfig(ai_provider="openai", openai_api_key="sk-test"))

    assert isinstance(client, OpenAIClient)
    assert client.model == "gpt-4o"


def test_unknown_provider_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unsupported AI provider"):
        build_ai_client(AppConfig(ai_provider="llama"))
