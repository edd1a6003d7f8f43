"""Loading indicator for the console surface."""

from __future__ import annotations

import sys
import threading
import time
from typing import TextIO

_GREY = "\x1b[38;2;150;157;165m"
_RESET = "\x1b[0m"


class ProgressTicker:
    """Shows ``label`` with elapsed seconds until :meth:`stop` is called.

    On a terminal the line is redrawn in place from a background thread. Other
    streams get one start line and one ``Done in`` line.
    """

    def __init__(self, label: str, stream: TextIO | None = None, interval_s: float = 1.0) -> None:
        self.label = label
        self.stream = stream or sys.stdout
        self.interval_s = max(0.2, interval_s)
        self._tty = bool(getattr(self.stream, "isatty", lambda: False)())
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._started_at = time.monotonic()

    def start_ticking(self) -> None:
        self._started_at = time.monotonic()
        if not self._tty:
            self._write(f"{self.label}...\n")
            return
        self._write(f"\r{self._status()}\x1b[K")
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        if self._thread is not None:
            self._stop.set()
            self._thread.join()
            self._thread = None
        done = f"{_GREY}Done in {_format_duration(self._elapsed())}{_RESET}"
        self._write(f"\r{done}\x1b[K\n" if self._tty else f"{done}\n")

    def _run(self) -> None:
        while not self._stop.wait(self.interval_s):
            self._write(f"\r{self._status()}\x1b[K")

    def _status(self) -> str:
        return f"{self.label} ({_format_duration(self._elapsed())})"

    def _elapsed(self) -> int:
        return max(0, int(time.monotonic() - self._started_at))

    def _write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()


def _format_duration(seconds: int) -> str:
    minutes, secs = divmod(seconds, 60)
    if minutes:
        return f"{minutes}m {secs:02d}s"
    return f"{secs}s"
