"""Append-only JSONL log of one chat session."""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import Any

from ..chat.session import Session
from ..utils import now_utc_iso


@dataclass
class EventWriter:
    """Writes one line per event, stamped with the session's current state.

    Callers pass identifiers, counts and text only; image payloads never go
    through here.
    """

    path: Path
    session_id: str
    session: Session
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, init=False)

    def emit(self, event_type: str, **fields: Any) -> dict[str, Any]:
        event: dict[str, Any] = {
            "type": event_type,
            "session_id": self.session_id,
            "ts": now_utc_iso(),
            "session": self.session.snapshot(),
        }
        event.update(fields)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self._lock:
            with self.path.open("a", encoding="utf-8") as handle:
                handle.write(json.dumps(event) + "\n")
        return event
