"""Dry-run gateway (offline)."""

from __future__ import annotations

import hashlib
import random
from io import BytesIO

from PIL import Image, ImageDraw, ImageFont, ImageOps, UnidentifiedImageError

from ..prompts import BATCH_IMAGE_COUNT
from .base import GenerationError, PersonaReply
from .google_utils import decode_payload, encode_payload

_SPORT_TERMS = {
    "athlete",
    "athletics",
    "badminton",
    "baseball",
    "basketball",
    "boxing",
    "climbing",
    "cricket",
    "cycling",
    "football",
    "golf",
    "goal",
    "gymnastics",
    "hockey",
    "marathon",
    "olympic",
    "player",
    "racing",
    "rugby",
    "skateboard",
    "skiing",
    "soccer",
    "sport",
    "sports",
    "stadium",
    "surfing",
    "swimming",
    "tennis",
    "volleyball",
}

_IMAGE_SIZE = (512, 512)


class DryRunGateway:
    name = "dryrun"

    def __init__(self, image_count: int = BATCH_IMAGE_COUNT) -> None:
        self.image_count = image_count
        self._font = None

    async def classify_and_respond(self, prompt: str) -> PersonaReply:
        if _mentions_sport(prompt):
            return PersonaReply(
                is_valid_request=True,
                bot_response="Great idea! I can definitely create that sports image for you.",
            )
        return PersonaReply(
            is_valid_request=False,
            bot_response=(
                "I specialize in sports images only. How about a sports twist on your idea, "
                "like a racing car or a mountain climber?"
            ),
        )

    async def generate_batch(self, prompt: str) -> list[str]:
        payloads: list[str] = []
        for idx in range(self.image_count):
            seed = random.randint(1, 10_000_000)
            image = Image.new("RGB", _IMAGE_SIZE, _color_from_prompt(prompt, seed))
            draw = ImageDraw.Draw(image)
            font = self._font or ImageFont.load_default()
            draw.text((20, 20), f"dryrun #{idx + 1}\n{prompt[:60]}", fill=(255, 255, 255), font=font)
            payloads.append(_to_payload(image))
        return payloads

    async def generate_variation(self, base_image: str, feedback: str) -> str | None:
        try:
            with Image.open(BytesIO(decode_payload(base_image))) as source:
                image = ImageOps.invert(source.convert("RGB"))
        except (ValueError, UnidentifiedImageError) as exc:
            raise GenerationError(f"Base image could not be read: {exc}") from exc
        draw = ImageDraw.Draw(image)
        font = self._font or ImageFont.load_default()
        draw.text((20, image.height - 40), f"variation: {feedback[:60]}", fill=(255, 255, 255), font=font)
        return _to_payload(image)


def _mentions_sport(prompt: str) -> bool:
    words = {word.strip(".,!?'\"").lower() for word in prompt.split()}
    return bool(words & _SPORT_TERMS)


def _color_from_prompt(prompt: str, seed: int) -> tuple[int, int, int]:
    digest = hashlib.sha256(f"{prompt}:{seed}".encode("utf-8")).digest()
    return digest[0], digest[1], digest[2]


def _to_payload(image: Image.Image) -> str:
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return encode_payload(buffer.getvalue())
