"""Parsing and serialising ``.scriptsrc`` content."""
from __future__ import annotations

import json
import logging
from typing import Any, Iterable

from .errors import ParseError
from .models import ScriptRecord

logger = logging.getLogger(__name__)


def _extract_entries(data: Any) -> list[Any]:
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and isinstance(data.get("scripts"), list):
        return data["scripts"]
    raise ParseError(f"unsupported top-level shape: {type(data).__name__}")


def _optional_text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _required_text(value: Any) -> str:
    return "" if value is None else str(value)


def _record_from_entry(entry: dict[str, Any]) -> ScriptRecord:
    return ScriptRecord(
        name=_required_text(entry.get("name")),
        command=_required_text(entry.get("command")),
        description=_optional_text(entry.get("description")),
        category=_optional_text(entry.get("category")),
    )


def parse_scripts(content: str) -> list[ScriptRecord]:
    """Parse the text of a configuration file.

    Both a bare JSON array of scripts and an object with a ``scripts`` array are
    accepted. Anything else, including invalid JSON, yields an empty list; this
    function never raises.
    """

    try:
        try:
            data = json.loads(content)
        except (ValueError, RecursionError) as exc:
            raise ParseError(str(exc)) from exc
        entries = _extract_entries(data)
    except ParseError as exc:
        logger.debug("Ignoring unparseable scripts file: %s", exc)
        return []

    scripts: list[ScriptRecord] = []
    for entry in entries:
        if not isinstance(entry, dict):
            logger.debug("Skipping non-object script entry: %r", entry)
            continue
        scripts.append(_record_from_entry(entry))
    return scripts


def _record_to_entry(script: ScriptRecord) -> dict[str, str]:
    entry = {"name": script.name, "command": script.command}
    if script.description:
        entry["description"] = script.description
    if script.category:
        entry["category"] = script.category
    return entry


def serialize_scripts(scripts: Iterable[ScriptRecord]) -> str:
    """Render scripts in the ``{"scripts": [...]}`` form.

    Project tags are left out; they come from where the file lives.
    """

    payload = {"scripts": [_record_to_entry(script) for script in scripts]}
    return json.dumps(payload, ensure_ascii=False, indent=2) + "\n"


__all__ = ["parse_scripts", "serialize_scripts"]
