from __future__ import annotations

import asyncio
import base64
from io import BytesIO
from typing import Any, Sequence

import pytest
from PIL import Image

from sports_visuals.gateway.base import GenerationError, PersonaReply


def png_payload(color: tuple[int, int, int] = (10, 120, 200), size: tuple[int, int] = (8, 8)) -> str:
    buffer = BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return base64.b64encode(buffer.getvalue()).decode("ascii")


class FakeGateway:
    name = "fake"

    def __init__(self) -> None:
        self.persona_reply: PersonaReply | Exception = PersonaReply(True, "Sounds great!")
        self.batch: list[str] | Exception = ["img-0", "img-1", "img-2", "img-3"]
        self.variation: str | None | Exception = "variation-0"
        self.calls: list[tuple[str, Any]] = []
        self.gate: asyncio.Event | None = None

    async def _maybe_wait(self) -> None:
        if self.gate is not None:
            await self.gate.wait()

    async def classify_and_respond(self, prompt: str) -> PersonaReply:
        self.calls.append(("classify", prompt))
        await self._maybe_wait()
        if isinstance(self.persona_reply, Exception):
            raise self.persona_reply
        return self.persona_reply

    async def generate_batch(self, prompt: str) -> list[str]:
        self.calls.append(("batch", prompt))
        await self._maybe_wait()
        if isinstance(self.batch, Exception):
            raise self.batch
        return list(self.batch)

    async def generate_variation(self, base_image: str, feedback: str) -> str | None:
        self.calls.append(("variation", (base_image, feedback)))
        await self._maybe_wait()
        if isinstance(self.variation, Exception):
            raise self.variation
        return self.variation


class RecordingSurface:
    def __init__(self) -> None:
        self.events: list[tuple[str, Any]] = []
        self.messages: list[dict[str, Any]] = []
        self.loading = False

    def add_message(self, text: str, sender: str, affordance: str | None = None) -> None:
        entry = {"text": text, "sender": sender, "affordance": affordance}
        self.messages.append(entry)
        self.events.append(("message", entry))

    def show_loading(self) -> None:
        self.loading = True
        self.events.append(("loading", True))

    def hide_loading(self) -> None:
        self.loading = False
        self.events.append(("loading", False))

    def remove_affordance(self, kind: str) -> None:
        self.events.append(("remove_affordance", kind))

    def render_image_grid(self, images: Sequence[str], prompt: str) -> None:
        self.events.append(("grid", (list(images), prompt)))

    def render_image(self, image: str, caption: str) -> None:
        self.events.append(("image", (image, caption)))

    def show_preview(self, url: str) -> None:
        self.events.append(("preview", url))

    def bot_messages(self) -> list[dict[str, Any]]:
        return [message for message in self.messages if message["sender"] == "bot"]


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def generation_error() -> GenerationError:
    return GenerationError("service unavailable")


@pytest.fixture
def make_png():
    return png_payload
