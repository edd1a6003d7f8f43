"""Runtime configuration resolved from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .utils import getenv_flag

DEFAULT_TEXT_MODEL = "gemini-2.5-flash"
DEFAULT_IMAGE_MODEL = "imagen-4.0-generate-001"
DEFAULT_VARIATION_MODEL = "gemini-2.5-flash-image-preview"

API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY")


@dataclass
class GatewaySettings:
    api_key: str | None = None
    text_model: str = DEFAULT_TEXT_MODEL
    image_model: str = DEFAULT_IMAGE_MODEL
    variation_model: str = DEFAULT_VARIATION_MODEL
    image_count: int = 4
    aspect_ratio: str = "1:1"
    output_mime_type: str = "image/png"
    dryrun: bool = False

    @classmethod
    def from_env(
        cls,
        *,
        text_model: str | None = None,
        image_model: str | None = None,
        variation_model: str | None = None,
        dryrun: bool | None = None,
    ) -> "GatewaySettings":
        return cls(
            api_key=resolve_api_key(),
            text_model=text_model or os.getenv("SPORTS_VISUALS_TEXT_MODEL") or DEFAULT_TEXT_MODEL,
            image_model=image_model or os.getenv("SPORTS_VISUALS_IMAGE_MODEL") or DEFAULT_IMAGE_MODEL,
            variation_model=(
                variation_model or os.getenv("SPORTS_VISUALS_VARIATION_MODEL") or DEFAULT_VARIATION_MODEL
            ),
            dryrun=getenv_flag("SPORTS_VISUALS_DRYRUN", False) if dryrun is None else dryrun,
        )


def resolve_api_key() -> str | None:
    for name in API_KEY_ENV_VARS:
        value = str(os.getenv(name) or "").strip()
        if value:
            return value
    return None
