"""Terminal rendering of the chat surface."""

from __future__ import annotations

import sys
import time
from io import BytesIO
from pathlib import Path
from typing import Sequence, TextIO

from PIL import Image, UnidentifiedImageError

from ..gateway.google_utils import decode_payload
from .progress import ProgressTicker
from .surface import AFFORDANCE_OPTIONS, AFFORDANCE_STYLE, SENDER_BOT


class ConsoleSurface:
    """Prints chat bubbles and saves rendered images under ``out_dir``."""

    def __init__(self, out_dir: Path, stream: TextIO | None = None) -> None:
        self.out_dir = out_dir
        self.stream = stream or sys.stdout
        self.grid_paths: list[Path | None] = []
        self.last_image_path: Path | None = None
        self.live_affordances: set[str] = set()
        self._ticker: ProgressTicker | None = None

    def add_message(self, text: str, sender: str, affordance: str | None = None) -> None:
        prefix = "bot>" if sender == SENDER_BOT else "you>"
        self._write(f"{prefix} {text}")
        if affordance is None:
            return
        self.live_affordances.add(affordance)
        for option in AFFORDANCE_OPTIONS.get(affordance, ()):
            self._write(f"     [{option.label}] {_command_for(affordance, option.value)}")

    def show_loading(self) -> None:
        if self._ticker is not None:
            return
        self._ticker = ProgressTicker("Thinking", stream=self.stream)
        self._ticker.start_ticking()

    def hide_loading(self) -> None:
        ticker = self._ticker
        self._ticker = None
        if ticker is not None:
            ticker.stop()

    def remove_affordance(self, kind: str) -> None:
        self.live_affordances.discard(kind)

    def render_image_grid(self, images: Sequence[str], prompt: str) -> None:
        stamp = int(time.time() * 1000)
        self.grid_paths = []
        self._write(f"bot> Generated sports images for: {prompt}")
        for idx, payload in enumerate(images):
            path = self._save(payload, f"sports-image-{stamp}-{idx}.png")
            self.grid_paths.append(path)
            if path is None:
                self._write(f"     ({idx + 1}) could not be saved")
                continue
            self._write(f"     ({idx + 1}) {path}   /vary {idx + 1}   /view {idx + 1}")

    def render_image(self, image: str, caption: str) -> None:
        path = self._save(image, f"sports-variation-{int(time.time() * 1000)}.png")
        if path is None:
            self._write(f"bot> Variation ({caption}) could not be saved")
            return
        self.last_image_path = path
        self._write(f"bot> Variation ({caption}): {path}   /view")

    def notice(self, text: str) -> None:
        """Write a local hint that is not part of the chat transcript."""
        self._write(text)

    def show_preview(self, url: str) -> None:
        path = Path(url)
        if not path.exists():
            self._write(f"Preview failed: file not found ({path})")
            return
        with Image.open(path) as image:
            image.show(title=path.name)

    def _save(self, payload: str, filename: str) -> Path | None:
        path = self.out_dir / filename
        try:
            self.out_dir.mkdir(parents=True, exist_ok=True)
            # Re-encode so whatever the backend returned lands on disk as PNG.
            with Image.open(BytesIO(decode_payload(payload))) as image:
                image.save(path, format="PNG")
        except (ValueError, UnidentifiedImageError, OSError) as exc:
            self._write(f"Image save failed ({filename}): {exc}")
            return None
        return path

    def _write(self, line: str) -> None:
        self.stream.write(f"{line}\n")
        self.stream.flush()


def _command_for(affordance: str, value: str) -> str:
    if affordance == AFFORDANCE_STYLE:
        return f"/style {value}"
    return f"/{value}"
