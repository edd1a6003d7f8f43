"""Gateway selection."""

from __future__ import annotations

from ..settings import GatewaySettings
from .base import GenerationGateway
from .dryrun import DryRunGateway
from .google import GoogleGenAIGateway


def default_gateway(settings: GatewaySettings) -> GenerationGateway:
    if settings.dryrun:
        return DryRunGateway(image_count=settings.image_count)
    return GoogleGenAIGateway(settings)
