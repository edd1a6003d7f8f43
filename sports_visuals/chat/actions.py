"""Tagged user actions routed through the state machine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class TextSubmitted:
    text: str


@dataclass(frozen=True)
class StyleChosen:
    style: str


@dataclass(frozen=True)
class SatisfactionChosen:
    choice: str


@dataclass(frozen=True)
class VaryRequested:
    index: int


@dataclass(frozen=True)
class ImageClicked:
    url: str


Action = Union[TextSubmitted, StyleChosen, SatisfactionChosen, VaryRequested, ImageClicked]
