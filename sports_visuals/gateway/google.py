"""Gemini / Imagen gateway backed by the google-genai async client."""

from __future__ import annotations

from typing import Any

try:
    from google import genai  # type: ignore
    from google.genai import types  # type: ignore
except Exception:  # pragma: no cover
    genai = None  # type: ignore
    types = None  # type: ignore

from ..prompts import (
    BOT_RESPONSE_DESCRIPTION,
    IS_VALID_REQUEST_DESCRIPTION,
    PERSONA_INSTRUCTION,
    build_persona_request,
)
from ..settings import GatewaySettings
from .base import ClassificationError, GenerationError, PersonaReply
from .google_utils import (
    decode_payload,
    extract_first_image,
    extract_generated_images,
    parse_persona_reply,
)


class GoogleGenAIGateway:
    name = "google"

    def __init__(self, settings: GatewaySettings, client: Any | None = None) -> None:
        if types is None:
            raise RuntimeError("google-genai package not installed. Run: pip install google-genai")
        if client is None:
            if not settings.api_key:
                raise RuntimeError("GEMINI_API_KEY (or GOOGLE_API_KEY / API_KEY) not set.")
            client = genai.Client(api_key=settings.api_key)
        self.settings = settings
        self._client = client

    async def classify_and_respond(self, prompt: str) -> PersonaReply:
        try:
            response = await self._client.aio.models.generate_content(
                model=self.settings.text_model,
                contents=build_persona_request(prompt),
                config=_persona_config(),
            )
        except Exception as exc:
            raise ClassificationError("Could not process the prompt with the persona.") from exc
        return parse_persona_reply(getattr(response, "text", None))

    async def generate_batch(self, prompt: str) -> list[str]:
        config = types.GenerateImagesConfig(
            number_of_images=self.settings.image_count,
            output_mime_type=self.settings.output_mime_type,
            aspect_ratio=self.settings.aspect_ratio,
        )
        try:
            response = await self._client.aio.models.generate_images(
                model=self.settings.image_model,
                prompt=prompt,
                config=config,
            )
        except Exception as exc:
            raise GenerationError(f"Image generation failed: {exc}") from exc
        return extract_generated_images(response)

    async def generate_variation(self, base_image: str, feedback: str) -> str | None:
        try:
            image_bytes = decode_payload(base_image)
        except ValueError as exc:
            raise GenerationError(str(exc)) from exc
        parts = [
            types.Part(inline_data=types.Blob(data=image_bytes, mime_type=self.settings.output_mime_type)),
            types.Part(text=feedback),
        ]
        try:
            response = await self._client.aio.models.generate_content(
                model=self.settings.variation_model,
                contents=types.Content(role="user", parts=parts),
                config=types.GenerateContentConfig(response_modalities=["IMAGE", "TEXT"]),
            )
        except Exception as exc:
            raise GenerationError(f"Image variation failed: {exc}") from exc
        candidates = getattr(response, "candidates", None) or []
        return extract_first_image(candidates)


def _persona_config() -> types.GenerateContentConfig:
    schema = types.Schema(
        type=types.Type.OBJECT,
        properties={
            "isValidRequest": types.Schema(
                type=types.Type.BOOLEAN,
                description=IS_VALID_REQUEST_DESCRIPTION,
            ),
            "botResponse": types.Schema(
                type=types.Type.STRING,
                description=BOT_RESPONSE_DESCRIPTION,
            ),
        },
        required=["isValidRequest", "botResponse"],
        property_ordering=["isValidRequest", "botResponse"],
    )
    return types.GenerateContentConfig(
        system_instruction=PERSONA_INSTRUCTION,
        response_mime_type="application/json",
        response_schema=schema,
    )
