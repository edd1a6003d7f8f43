from __future__ import annotations

import asyncio
import base64
from types import SimpleNamespace

import pytest

from sports_visuals.gateway.base import ClassificationError, GenerationError
from sports_visuals.gateway.google import GoogleGenAIGateway
from sports_visuals.settings import GatewaySettings


class _FakeModels:
    def __init__(self) -> None:
        self.content_responses: list[object] = []
        self.images_response: object = SimpleNamespace(generated_images=[])
        self.calls: list[dict[str, object]] = []

    async def generate_content(self, **kwargs):
        self.calls.append({"method": "generate_content", **kwargs})
        response = self.content_responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def generate_images(self, **kwargs):
        self.calls.append({"method": "generate_images", **kwargs})
        if isinstance(self.images_response, Exception):
            raise self.images_response
        return self.images_response


def _gateway() -> tuple[GoogleGenAIGateway, _FakeModels]:
    models = _FakeModels()
    client = SimpleNamespace(aio=SimpleNamespace(models=models))
    return GoogleGenAIGateway(GatewaySettings(api_key="test-key"), client=client), models


def _image_part(data: bytes) -> SimpleNamespace:
    return SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type="image/png"), text=None)


def _text_part(text: str) -> SimpleNamespace:
    return SimpleNamespace(inline_data=None, text=text)


def _content_response(*parts: SimpleNamespace) -> SimpleNamespace:
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=list(parts)))])


def test_requires_api_key_without_client() -> None:
    with pytest.raises(RuntimeError):
        GoogleGenAIGateway(GatewaySettings(api_key=None))


def test_classify_parses_fenced_json_and_sends_persona_config() -> None:
    gateway, models = _gateway()
    models.content_responses.append(
        SimpleNamespace(text='```json\n{"isValidRequest": true, "botResponse": "Let\'s do it!"}\n```')
    )

    reply = asyncio.run(gateway.classify_and_respond("a tennis ace"))

    assert reply.is_valid_request is True
    assert reply.bot_response == "Let's do it!"
    call = models.calls[0]
    assert call["model"] == "gemini-2.5-flash"
    assert '"a tennis ace"' in str(call["contents"])
    config = call["config"]
    assert config.response_mime_type == "application/json"
    assert "sports-related images only" in str(config.system_instruction)
    assert set(config.response_schema.properties) == {"isValidRequest", "botResponse"}


def test_classify_rejects_malformed_reply() -> None:
    gateway, models = _gateway()
    models.content_responses.append(SimpleNamespace(text="Sure thing, I can help!"))
    with pytest.raises(ClassificationError):
        asyncio.run(gateway.classify_and_respond("a tennis ace"))


def test_classify_wraps_transport_errors() -> None:
    gateway, models = _gateway()
    models.content_responses.append(ConnectionError("offline"))
    with pytest.raises(ClassificationError) as excinfo:
        asyncio.run(gateway.classify_and_respond("a tennis ace"))
    assert isinstance(excinfo.value.__cause__, ConnectionError)


def test_generate_batch_requests_four_square_pngs() -> None:
    gateway, models = _gateway()
    models.images_response = SimpleNamespace(
        generated_images=[
            SimpleNamespace(image=SimpleNamespace(image_bytes=b"one")),
            SimpleNamespace(image=SimpleNamespace(image_bytes=b"two")),
            SimpleNamespace(image=None),
        ]
    )

    images = asyncio.run(gateway.generate_batch("final prompt"))

    assert images == [base64.b64encode(b"one").decode(), base64.b64encode(b"two").decode()]
    call = models.calls[0]
    assert call["model"] == "imagen-4.0-generate-001"
    assert call["prompt"] == "final prompt"
    config = call["config"]
    assert config.number_of_images == 4
    assert config.output_mime_type == "image/png"
    assert config.aspect_ratio == "1:1"


def test_generate_batch_empty_is_not_an_error() -> None:
    gateway, models = _gateway()
    models.images_response = SimpleNamespace(generated_images=None)
    assert asyncio.run(gateway.generate_batch("final prompt")) == []


def test_generate_batch_wraps_failures() -> None:
    gateway, models = _gateway()
    models.images_response = RuntimeError("quota")
    with pytest.raises(GenerationError):
        asyncio.run(gateway.generate_batch("final prompt"))


def test_generate_variation_returns_first_image_part() -> None:
    gateway, models = _gateway()
    models.content_responses.append(
        _content_response(_text_part("Here you go"), _image_part(b"first"), _image_part(b"second"))
    )
    base = base64.b64encode(b"base-image").decode()

    result = asyncio.run(gateway.generate_variation(base, "make the jersey red"))

    assert result == base64.b64encode(b"first").decode()
    call = models.calls[0]
    assert call["model"] == "gemini-2.5-flash-image-preview"
    parts = call["contents"].parts
    assert parts[0].inline_data.data == b"base-image"
    assert parts[1].text == "make the jersey red"
    assert list(call["config"].response_modalities) == ["IMAGE", "TEXT"]


def test_generate_variation_without_image_returns_none() -> None:
    gateway, models = _gateway()
    models.content_responses.append(_content_response(_text_part("I could not do that.")))
    base = base64.b64encode(b"base-image").decode()
    assert asyncio.run(gateway.generate_variation(base, "add a dragon")) is None


def test_generate_variation_wraps_failures() -> None:
    gateway, models = _gateway()
    models.content_responses.append(TimeoutError("slow"))
    base = base64.b64encode(b"base-image").decode()
    with pytest.raises(GenerationError):
        asyncio.run(gateway.generate_variation(base, "add a dragon"))
