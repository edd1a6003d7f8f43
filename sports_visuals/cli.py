"""Sports Visuals CLI entrypoints."""

from __future__ import annotations

import argparse
import sys
import uuid
from pathlib import Path

from .chat.loop import ChatLoop
from .chat.machine import ConversationStateMachine
from .chat.session import Session
from .gateway import default_gateway
from .runs.events import EventWriter
from .settings import GatewaySettings
from .ui.console import ConsoleSurface
from .utils import load_dotenv


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sports-visuals", description="Sports image chat assistant")
    sub = parser.add_subparsers(dest="command")

    chat = sub.add_parser("chat", help="Interactive chat loop")
    chat.add_argument("--out", required=True, help="Directory for generated images")
    chat.add_argument("--events", help="Path to events.jsonl")
    chat.add_argument("--dryrun", action="store_true", default=None, help="Use the offline gateway")
    chat.add_argument("--text-model", dest="text_model")
    chat.add_argument("--image-model", dest="image_model")
    chat.add_argument("--variation-model", dest="variation_model")
    return parser


def _run_chat(args: argparse.Namespace) -> int:
    settings = GatewaySettings.from_env(
        text_model=args.text_model,
        image_model=args.image_model,
        variation_model=args.variation_model,
        dryrun=args.dryrun,
    )
    try:
        gateway = default_gateway(settings)
    except RuntimeError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    out_dir = Path(args.out)
    events_path = Path(args.events) if args.events else out_dir / "events.jsonl"
    events = EventWriter(events_path, uuid.uuid4().hex, Session())
    surface = ConsoleSurface(out_dir)
    machine = ConversationStateMachine(gateway, surface, events=events)
    ChatLoop(machine, surface).run()
    return 0


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.command == "chat":
        return _run_chat(args)
    parser.print_help()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
