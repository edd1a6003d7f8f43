"""Gateway contracts shared by every backend."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


class GatewayError(RuntimeError):
    """Base class for failures surfaced by a generation gateway."""


class ClassificationError(GatewayError):
    """Persona call failed or returned something that is not a persona reply."""


class GenerationError(GatewayError):
    """Batch or variation call failed at the transport/service level."""


@dataclass(frozen=True)
class PersonaReply:
    is_valid_request: bool
    bot_response: str


class GenerationGateway(Protocol):
    name: str

    async def classify_and_respond(self, prompt: str) -> PersonaReply:
        ...

    async def generate_batch(self, prompt: str) -> list[str]:
        ...

    async def generate_variation(self, base_image: str, feedback: str) -> str | None:
        ...
