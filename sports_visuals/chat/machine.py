"""Conversation state machine for the sports image chat.

The machine owns the single :class:`Session`, decides which gateway call each
user action triggers and tells the UI surface what to render. Every phase check
and transition happens before the one ``await`` on the gateway, so an action
that arrives while a call is outstanding sees the updated phase and is dropped.
"""

from __future__ import annotations

from typing import Any

from ..gateway.base import GatewayError, GenerationGateway, PersonaReply
from ..prompts import build_batch_prompt
from ..runs.events import EventWriter
from ..ui.surface import (
    AFFORDANCE_SATISFACTION,
    AFFORDANCE_STYLE,
    SATISFACTION_RETRY,
    SATISFACTION_SATISFIED,
    SATISFACTION_VALUES,
    SATISFACTION_VARIATIONS,
    SENDER_BOT,
    SENDER_USER,
    STYLE_VALUES,
    UISurface,
)
from ..utils import monotonic_ms
from . import messages
from .actions import (
    Action,
    ImageClicked,
    SatisfactionChosen,
    StyleChosen,
    TextSubmitted,
    VaryRequested,
)
from .session import (
    PHASE_AWAITING_PERSONA_REPLY,
    PHASE_AWAITING_SATISFACTION,
    PHASE_AWAITING_STYLE_CHOICE,
    PHASE_AWAITING_VARIATION_FEEDBACK,
    PHASE_GENERATING_BATCH,
    PHASE_GENERATING_VARIATION,
    PHASE_IDLE,
    Session,
)

_VARY_PHASES = {PHASE_IDLE, PHASE_AWAITING_VARIATION_FEEDBACK}


class ConversationStateMachine:
    def __init__(
        self,
        gateway: GenerationGateway,
        surface: UISurface,
        events: EventWriter | None = None,
        session: Session | None = None,
    ) -> None:
        self.gateway = gateway
        self.surface = surface
        self.events = events
        if session is None:
            session = events.session if events is not None else Session()
        self.session = session

    def start(self) -> None:
        self._emit("session_started", gateway=getattr(self.gateway, "name", "unknown"))
        self.surface.add_message(messages.WELCOME, SENDER_BOT)
        self.surface.add_message(messages.WELCOME_FOLLOWUP, SENDER_BOT)

    async def dispatch(self, action: Action) -> None:
        if isinstance(action, TextSubmitted):
            await self.submit_text(action.text)
        elif isinstance(action, StyleChosen):
            await self.choose_style(action.style)
        elif isinstance(action, SatisfactionChosen):
            self.choose_satisfaction(action.choice)
        elif isinstance(action, VaryRequested):
            self.request_vary(action.index)
        elif isinstance(action, ImageClicked):
            self.open_preview(action.url)
        else:
            raise TypeError(f"Unsupported action: {action!r}")

    async def submit_text(self, text: str) -> None:
        if self.session.busy:
            return
        prompt = text.strip()
        if not prompt:
            return
        self.surface.add_message(prompt, SENDER_USER)
        if self.session.pending_variation_feedback:
            self.session.pending_variation_feedback = False
            await self._generate_variation(prompt)
        else:
            await self._classify_prompt(prompt)

    async def choose_style(self, style: str) -> None:
        session = self.session
        if session.phase != PHASE_AWAITING_STYLE_CHOICE or style not in STYLE_VALUES:
            return
        self.surface.remove_affordance(AFFORDANCE_STYLE)
        if not session.last_prompt:
            session.enter(PHASE_IDLE, busy=False)
            return
        session.clear_images()
        session.enter(PHASE_GENERATING_BATCH, busy=True)
        final_prompt = build_batch_prompt(session.last_prompt, style)
        self._emit("batch_requested", style=style, prompt=final_prompt)

        started = monotonic_ms()
        error: GatewayError | None = None
        images: list[str] = []
        self.surface.show_loading()
        try:
            images = list(await self.gateway.generate_batch(final_prompt))
        except GatewayError as exc:
            error = exc
        finally:
            self.surface.hide_loading()

        elapsed_ms = monotonic_ms() - started
        if error is not None:
            self._emit("generation_failed", stage="batch", error=str(error), elapsed_ms=elapsed_ms)
            session.clear_images()
            self.surface.add_message(messages.BATCH_FAILED, SENDER_BOT)
        elif not images:
            self._emit("batch_empty", elapsed_ms=elapsed_ms)
            self.surface.add_message(messages.BATCH_EMPTY, SENDER_BOT)
        else:
            session.last_image_set = images
            self._emit("batch_generated", count=len(images), elapsed_ms=elapsed_ms)
            self.surface.render_image_grid(list(images), session.last_prompt)
            self.surface.add_message(messages.BATCH_READY, SENDER_BOT)
        session.enter(PHASE_IDLE, busy=False)

    def request_vary(self, index: int) -> None:
        session = self.session
        if session.phase not in _VARY_PHASES:
            return
        image = session.image_at(index)
        if image is None:
            return
        session.active_variation_image = image
        session.pending_variation_feedback = True
        session.enter(PHASE_AWAITING_VARIATION_FEEDBACK, busy=False)
        self._emit("vary_selected", index=index)
        self.surface.add_message(messages.ASK_FEEDBACK, SENDER_BOT)

    def choose_satisfaction(self, choice: str) -> None:
        session = self.session
        if session.phase != PHASE_AWAITING_SATISFACTION or choice not in SATISFACTION_VALUES:
            return
        self.surface.remove_affordance(AFFORDANCE_SATISFACTION)
        self._emit("satisfaction_chosen", choice=choice)
        if choice == SATISFACTION_SATISFIED:
            self.surface.add_message(messages.SATISFIED, SENDER_BOT)
            self.surface.add_message(messages.WHAT_NEXT, SENDER_BOT)
            session.clear_images()
            session.enter(PHASE_IDLE, busy=False)
        elif choice == SATISFACTION_RETRY:
            self.surface.add_message(messages.RETRY, SENDER_BOT)
            session.clear_images()
            session.enter(PHASE_IDLE, busy=False)
        elif choice == SATISFACTION_VARIATIONS:
            session.pending_variation_feedback = True
            self.surface.add_message(messages.ASK_FEEDBACK, SENDER_BOT)
            session.enter(PHASE_AWAITING_VARIATION_FEEDBACK, busy=False)

    def open_preview(self, url: str) -> None:
        if url:
            self.surface.show_preview(url)

    async def _classify_prompt(self, prompt: str) -> None:
        session = self.session
        session.last_prompt = prompt
        session.enter(PHASE_AWAITING_PERSONA_REPLY, busy=True)
        self._emit("prompt_submitted", prompt=prompt)

        error: GatewayError | None = None
        reply: PersonaReply | None = None
        self.surface.show_loading()
        try:
            reply = await self.gateway.classify_and_respond(prompt)
        except GatewayError as exc:
            error = exc
        finally:
            self.surface.hide_loading()

        if error is not None or reply is None:
            self._emit("classification_failed", error=str(error))
            self.surface.add_message(messages.PERSONA_FAILED, SENDER_BOT)
            session.enter(PHASE_IDLE, busy=False)
            return
        self._emit("persona_reply", is_valid_request=reply.is_valid_request)
        if reply.is_valid_request:
            # Input stays blocked until a style button is clicked.
            session.enter(PHASE_AWAITING_STYLE_CHOICE, busy=True)
            self.surface.add_message(
                f"{reply.bot_response}\n\n{messages.CHOOSE_STYLE}",
                SENDER_BOT,
                affordance=AFFORDANCE_STYLE,
            )
        else:
            session.enter(PHASE_IDLE, busy=False)
            self.surface.add_message(reply.bot_response, SENDER_BOT)

    async def _generate_variation(self, feedback: str) -> None:
        session = self.session
        base_image = session.active_variation_image
        if not base_image:
            self._emit("variation_unavailable")
            self.surface.add_message(messages.NO_BASE_IMAGE, SENDER_BOT)
            session.enter(PHASE_IDLE, busy=False)
            return
        session.enter(PHASE_GENERATING_VARIATION, busy=True)
        self._emit("variation_requested", feedback=feedback)

        started = monotonic_ms()
        error: GatewayError | None = None
        variation: str | None = None
        self.surface.show_loading()
        try:
            variation = await self.gateway.generate_variation(base_image, feedback)
        except GatewayError as exc:
            error = exc
        finally:
            self.surface.hide_loading()

        elapsed_ms = monotonic_ms() - started
        if error is not None:
            self._emit("generation_failed", stage="variation", error=str(error), elapsed_ms=elapsed_ms)
            self.surface.add_message(messages.VARIATION_FAILED, SENDER_BOT)
            self.surface.add_message(
                messages.ASK_SATISFACTION_PREVIOUS, SENDER_BOT, affordance=AFFORDANCE_SATISFACTION
            )
        elif not variation:
            self._emit("variation_empty", elapsed_ms=elapsed_ms)
            self.surface.add_message(messages.VARIATION_EMPTY, SENDER_BOT)
            self.surface.add_message(
                messages.ASK_SATISFACTION_PREVIOUS, SENDER_BOT, affordance=AFFORDANCE_SATISFACTION
            )
        else:
            session.active_variation_image = variation
            self._emit("variation_generated", elapsed_ms=elapsed_ms)
            self.surface.render_image(variation, feedback)
            self.surface.add_message(messages.VARIATION_READY, SENDER_BOT, affordance=AFFORDANCE_SATISFACTION)
        # Input stays blocked until a satisfaction button is clicked.
        session.enter(PHASE_AWAITING_SATISFACTION, busy=True)

    def _emit(self, event_type: str, **payload: Any) -> None:
        if self.events is None:
            return
        self.events.emit(event_type, **payload)
