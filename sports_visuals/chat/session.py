"""In-memory session record for a single chat."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

PHASE_IDLE = "idle"
PHASE_AWAITING_PERSONA_REPLY = "awaiting_persona_reply"
PHASE_AWAITING_STYLE_CHOICE = "awaiting_style_choice"
PHASE_GENERATING_BATCH = "generating_batch"
PHASE_AWAITING_SATISFACTION = "awaiting_satisfaction"
PHASE_AWAITING_VARIATION_FEEDBACK = "awaiting_variation_feedback"
PHASE_GENERATING_VARIATION = "generating_variation"

PHASES = (
    PHASE_IDLE,
    PHASE_AWAITING_PERSONA_REPLY,
    PHASE_AWAITING_STYLE_CHOICE,
    PHASE_GENERATING_BATCH,
    PHASE_AWAITING_SATISFACTION,
    PHASE_AWAITING_VARIATION_FEEDBACK,
    PHASE_GENERATING_VARIATION,
)


@dataclass
class Session:
    phase: str = PHASE_IDLE
    busy: bool = False
    last_prompt: str = ""
    last_image_set: list[str] = field(default_factory=list)
    active_variation_image: str | None = None
    pending_variation_feedback: bool = False

    def enter(self, phase: str, *, busy: bool) -> None:
        if phase not in PHASES:
            raise ValueError(f"Unknown phase: {phase}")
        self.phase = phase
        self.busy = busy

    def clear_images(self) -> None:
        self.last_image_set = []
        self.active_variation_image = None

    def image_at(self, index: int) -> str | None:
        if index < 0 or index >= len(self.last_image_set):
            return None
        return self.last_image_set[index]

    def snapshot(self) -> dict[str, Any]:
        return {
            "phase": self.phase,
            "busy": self.busy,
            "last_prompt": self.last_prompt,
            "image_count": len(self.last_image_set),
            "has_active_variation_image": self.active_variation_image is not None,
            "pending_variation_feedback": self.pending_variation_feedback,
        }
