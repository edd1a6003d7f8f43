"""Parse console input into chat actions."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from .actions import Action, SatisfactionChosen, StyleChosen, TextSubmitted, VaryRequested
from .command_registry import (
    NO_ARG_COMMAND_MAP,
    SATISFACTION_COMMAND_MAP,
    STYLE_COMMAND,
    VARY_COMMAND,
    VIEW_COMMAND,
)

_SLASH_PATTERN = re.compile(r"^/(\w+)(?:\s+(.*))?$")


@dataclass
class Command:
    action: str
    raw: str
    chat_action: Action | None = None
    command_args: dict[str, Any] = field(default_factory=dict)


def _parse_display_index(arg: str) -> int | None:
    """Convert a 1-based index as shown in the console to a 0-based one."""
    try:
        return int(arg.strip()) - 1
    except ValueError:
        return None


def parse_command(text: str) -> Command:
    raw = text.strip()
    if not raw:
        return Command(action="noop", raw=text)
    match = _SLASH_PATTERN.match(raw)
    if not match:
        return Command(action="dispatch", raw=text, chat_action=TextSubmitted(raw))
    command = match.group(1).lower()
    arg = " ".join((match.group(2) or "").split()).lower()
    if command == STYLE_COMMAND.command:
        return Command(action="dispatch", raw=text, chat_action=StyleChosen(arg))
    if command in SATISFACTION_COMMAND_MAP:
        return Command(action="dispatch", raw=text, chat_action=SatisfactionChosen(command))
    if command == VARY_COMMAND.command:
        index = _parse_display_index(arg)
        if index is None:
            return Command(action="usage", raw=text, command_args={"usage": "/vary <n>"})
        return Command(action="dispatch", raw=text, chat_action=VaryRequested(index))
    if command == VIEW_COMMAND.command:
        index = _parse_display_index(arg) if arg else None
        return Command(action=VIEW_COMMAND.action, raw=text, command_args={"index": index})
    if command in NO_ARG_COMMAND_MAP:
        return Command(action=NO_ARG_COMMAND_MAP[command], raw=text)
    return Command(action="unknown", raw=text, command_args={"command": command, "arg": arg})
