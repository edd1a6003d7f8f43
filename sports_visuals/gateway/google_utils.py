"""Shared helpers for the Google gateway."""

from __future__ import annotations

import base64
import binascii
import json
import re
from typing import Any, Sequence

from .base import ClassificationError, PersonaReply

_FENCE_OPEN_RE = re.compile(r"^```(?:json)?\s*\n?", re.IGNORECASE)
_FENCE_CLOSE_RE = re.compile(r"\n?```\s*$")


def strip_code_fence(text: str) -> str:
    cleaned = text.strip()
    cleaned = _FENCE_OPEN_RE.sub("", cleaned)
    cleaned = _FENCE_CLOSE_RE.sub("", cleaned)
    return cleaned.strip()


def parse_persona_reply(text: str | None) -> PersonaReply:
    if not isinstance(text, str) or not text.strip():
        raise ClassificationError("Persona reply was empty.")
    try:
        payload = json.loads(strip_code_fence(text))
    except ValueError as exc:
        raise ClassificationError("Persona reply was not valid JSON.") from exc
    if not isinstance(payload, dict):
        raise ClassificationError("Persona reply was not a JSON object.")
    is_valid = payload.get("isValidRequest")
    bot_response = payload.get("botResponse")
    if not isinstance(is_valid, bool) or not isinstance(bot_response, str):
        raise ClassificationError("Persona reply is missing isValidRequest/botResponse.")
    return PersonaReply(is_valid_request=is_valid, bot_response=bot_response)


def encode_payload(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def decode_payload(payload: str) -> bytes:
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError("Image payload is not valid base64.") from exc


def extract_first_image(candidates: Sequence[Any]) -> str | None:
    """Return the first inline image part across candidates as a base64 payload."""
    for candidate in candidates:
        content = getattr(candidate, "content", None)
        parts = getattr(content, "parts", None) or getattr(candidate, "parts", None) or []
        for part in parts:
            inline_data = getattr(part, "inline_data", None)
            data = getattr(inline_data, "data", None) if inline_data else None
            if not data:
                continue
            # The SDK decodes inline data to bytes; a str is already base64 text.
            if isinstance(data, str):
                return data
            if isinstance(data, (bytes, bytearray)):
                return encode_payload(bytes(data))
    return None


def extract_generated_images(response: Any) -> list[str]:
    generated = getattr(response, "generated_images", None) or []
    payloads: list[str] = []
    for item in generated:
        image = getattr(item, "image", None)
        image_bytes = getattr(image, "image_bytes", None) if image is not None else None
        if not image_bytes:
            continue
        payloads.append(encode_payload(bytes(image_bytes)))
    return payloads
