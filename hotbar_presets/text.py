"""Minecraft JSON text components, as stored in display names."""
from __future__ import annotations

import json
from typing import Any


def unwrap_json_text(raw: str) -> str:
    """Return the plain text of a JSON text component.

    Falls back to ``raw`` itself when it is not JSON or the component has no
    literal text (translations, keybinds and the like).
    """
    try:
        parsed = json.loads(raw)
    except ValueError:
        return raw
    if isinstance(parsed, str):
        return parsed
    if isinstance(parsed, dict):
        plain = _flatten(parsed)
        if plain or set(parsed) == {"text"}:
            return plain
    return raw


def _flatten(component: Any) -> str:
    if isinstance(component, str):
        return component
    if isinstance(component, list):
        return "".join(_flatten(part) for part in component)
    if isinstance(component, dict):
        text = component.get("text")
        head = text if isinstance(text, str) else ""
        return head + _flatten(component.get("extra", []))
    return ""


def wrap_json_text(text: str) -> str:
    return json.dumps({"text": text}, ensure_ascii=False, separators=(",", ":"))
