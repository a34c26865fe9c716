"""Human-readable text for log events, keyed by ``(domain, action)``.

The catalog lives in ``event_templates.json`` next to this module, one object
per domain mapping action names to ``str.format`` templates.
"""

from __future__ import annotations

import json
from pathlib import Path

EVENT_TEMPLATES: dict[tuple[str, str], str] = {}
DEFAULT_PATH = Path(__file__).with_name("event_templates.json")


def _read_catalog(path: Path) -> dict[tuple[str, str], str]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {("app", "load_error"): "Event templates file missing"}
    except (OSError, ValueError) as e:
        return {("app", "load_error"): f"Failed to load event templates: {e}"[:200]}
    if not isinstance(raw, dict):
        return {}
    return {
        (domain, action): template
        for domain, actions in raw.items()
        if isinstance(actions, dict)
        for action, template in actions.items()
        if isinstance(template, str)
    }


def reload_event_templates(path: Path | None = None) -> None:
    # Updated in place; IRCLogger looks the dict up on every event.
    EVENT_TEMPLATES.clear()
    EVENT_TEMPLATES.update(_read_catalog(Path(path) if path else DEFAULT_PATH))


reload_event_templates()

__all__ = ["EVENT_TEMPLATES", "reload_event_templates"]
