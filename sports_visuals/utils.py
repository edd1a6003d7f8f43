"""Small helpers shared across Sports Visuals."""

from __future__ import annotations

import os
import time
from datetime import datetime, timezone
from pathlib import Path


def now_utc_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


def getenv_flag(key: str, default: bool = False) -> bool:
    raw = os.getenv(key)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def load_dotenv(path: Path | None = None) -> bool:
    """Load ``KEY=value`` lines into ``os.environ`` without overriding it.

    Defaults to the ``.env`` next to the checkout, falling back to the current
    directory. Returns False when there is no file to read.
    """
    env_path = path or _default_env_path()
    if not env_path.exists():
        return False
    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip().removeprefix("export ").strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = (part.strip() for part in line.split("=", 1))
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        if key:
            os.environ.setdefault(key, value)
    return True


def _default_env_path() -> Path:
    cwd = Path.cwd()
    for current in (cwd, *cwd.parents):
        if (current / "sports_visuals").is_dir() and (current / ".env").exists():
            return current / ".env"
    return cwd / ".env"
