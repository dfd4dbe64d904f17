from __future__ import annotations

import os
from pathlib import Path

_QUOTE_CHARS = {"'", '"'}


def _parse_env_line(raw_line: str) -> tuple[str, str] | None:
    line = raw_line.strip()
    if not line or line.startswith("#") or "=" not in line:
        return None
    if line.startswith("export "):
        line = line[len("export ") :].lstrip()
    key, value = line.split("=", 1)
    key = key.strip()
    if not key:
        return None
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in _QUOTE_CHARS:
        return key, value[1:-1]
    # Unquoted values may carry an inline comment.
    if " #" in value:
        value = value.split(" #", 1)[0].rstrip()
    return key, value


def load_env_file(path: Path | None = None, *, override: bool = False) -> None:
    """Load key=value pairs from a .env file into ``os.environ``.

    Blank lines, comments and an optional ``export`` prefix are tolerated. Variables already
    present in the environment win unless ``override`` is set.
    """

    env_path = path or Path(__file__).resolve().parents[1] / ".env"
    try:
        content = env_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return

    for raw_line in content.splitlines():
        parsed = _parse_env_line(raw_line)
        if parsed is None:
            continue
        key, value = parsed
        if override or key not in os.environ:
            os.environ[key] = value
