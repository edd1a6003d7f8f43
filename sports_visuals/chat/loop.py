"""Interactive console chat loop."""

from __future__ import annotations

import asyncio
from pathlib import Path

from ..ui.console import ConsoleSurface
from .actions import ImageClicked, TextSubmitted
from .command_parser import Command, parse_command
from .command_registry import CHAT_HELP_COMMANDS
from .machine import ConversationStateMachine


class ChatLoop:
    def __init__(self, machine: ConversationStateMachine, surface: ConsoleSurface) -> None:
        self.machine = machine
        self.surface = surface

    def run(self) -> None:
        asyncio.run(self.run_async())

    async def run_async(self) -> None:
        self.surface.notice("Sports Visuals chat started. Type /help for commands.")
        self.machine.start()
        while True:
            try:
                line = await asyncio.to_thread(input, "> ")
            except (EOFError, KeyboardInterrupt):
                break
            if not await self.handle_line(line):
                break

    async def handle_line(self, line: str) -> bool:
        """Handle one line of input; returns False when the user asked to quit."""
        command = parse_command(line)
        if command.action == "quit":
            return False
        if command.action == "noop":
            return True
        if command.action == "help":
            self.surface.notice("Commands: " + " ".join(CHAT_HELP_COMMANDS))
            return True
        if command.action == "usage":
            self.surface.notice(f"Usage: {command.command_args.get('usage')}")
            return True
        if command.action == "unknown":
            self.surface.notice(f"Unknown command: /{command.command_args.get('command')}. Type /help for commands.")
            return True
        if command.action == "view":
            await self._view(command)
            return True
        if command.chat_action is None:
            return True
        if isinstance(command.chat_action, TextSubmitted) and self.machine.session.busy:
            self.surface.notice("Please pick one of the options above first.")
            return True
        await self.machine.dispatch(command.chat_action)
        return True

    async def _view(self, command: Command) -> None:
        index = command.command_args.get("index")
        path: Path | None = None
        if isinstance(index, int):
            if 0 <= index < len(self.surface.grid_paths):
                path = self.surface.grid_paths[index]
        else:
            path = self.surface.last_image_path
        if path is None:
            self.surface.notice("Nothing to view.")
            return
        await self.machine.dispatch(ImageClicked(str(path)))
