"""UI surface contract driven by the conversation state machine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

SENDER_USER = "user"
SENDER_BOT = "bot"

AFFORDANCE_STYLE = "style"
AFFORDANCE_SATISFACTION = "satisfaction"


@dataclass(frozen=True)
class ChoiceOption:
    value: str
    label: str


STYLE_OPTIONS: tuple[ChoiceOption, ...] = (
    ChoiceOption("realistic", "Realistic"),
    ChoiceOption("cartoon", "Cartoon"),
    ChoiceOption("digital art", "Digital Art"),
    ChoiceOption("cinematic", "Cinematic"),
)

SATISFACTION_SATISFIED = "satisfied"
SATISFACTION_VARIATIONS = "variations"
SATISFACTION_RETRY = "retry"

SATISFACTION_OPTIONS: tuple[ChoiceOption, ...] = (
    ChoiceOption(SATISFACTION_SATISFIED, "I'm satisfied"),
    ChoiceOption(SATISFACTION_VARIATIONS, "Generate variations"),
    ChoiceOption(SATISFACTION_RETRY, "Try another idea"),
)

AFFORDANCE_OPTIONS: dict[str, tuple[ChoiceOption, ...]] = {
    AFFORDANCE_STYLE: STYLE_OPTIONS,
    AFFORDANCE_SATISFACTION: SATISFACTION_OPTIONS,
}

STYLE_VALUES = frozenset(option.value for option in STYLE_OPTIONS)
SATISFACTION_VALUES = frozenset(option.value for option in SATISFACTION_OPTIONS)


class UISurface(Protocol):
    def add_message(self, text: str, sender: str, affordance: str | None = None) -> None:
        ...

    def show_loading(self) -> None:
        ...

    def hide_loading(self) -> None:
        ...

    def remove_affordance(self, kind: str) -> None:
        ...

    def render_image_grid(self, images: Sequence[str], prompt: str) -> None:
        ...

    def render_image(self, image: str, caption: str) -> None:
        ...

    def show_preview(self, url: str) -> None:
        ...
