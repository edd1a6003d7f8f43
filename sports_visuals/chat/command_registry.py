"""Slash-command metadata for the console chat."""

from __future__ import annotations

from dataclasses import dataclass

from ..ui.surface import SATISFACTION_OPTIONS, STYLE_OPTIONS


@dataclass(frozen=True)
class CommandSpec:
    command: str
    action: str
    arg_kind: str


STYLE_COMMAND = CommandSpec("style", "choose_style", "raw")
VARY_COMMAND = CommandSpec("vary", "vary", "index")
VIEW_COMMAND = CommandSpec("view", "view", "optional_index")

SATISFACTION_COMMANDS: tuple[CommandSpec, ...] = tuple(
    CommandSpec(option.value, "choose_satisfaction", "none") for option in SATISFACTION_OPTIONS
)

NO_ARG_COMMANDS: tuple[CommandSpec, ...] = (
    CommandSpec("help", "help", "none"),
    CommandSpec("quit", "quit", "none"),
    CommandSpec("exit", "quit", "none"),
)

SATISFACTION_COMMAND_MAP = {spec.command: spec.action for spec in SATISFACTION_COMMANDS}
NO_ARG_COMMAND_MAP = {spec.command: spec.action for spec in NO_ARG_COMMANDS}

CHAT_HELP_COMMANDS: tuple[str, ...] = (
    "/style " + "|".join(option.value for option in STYLE_OPTIONS),
    "/vary <n>",
    "/view [n]",
    *(f"/{spec.command}" for spec in SATISFACTION_COMMANDS),
    "/help",
    "/quit",
)
