"""
Key events and configurable key bindings.

Keys are identified by Textual key names ("q", "tab", "shift+tab", "f12",
"ctrl+c", ...). Bindings can be overridden from a JSON file; any field left
out keeps its default.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeyEvent:
    """A single key press, detached from the terminal backend."""

    key: str
    character: str | None = None

    @classmethod
    def from_textual(cls, event) -> KeyEvent:
        """Build from a ``textual.events.Key``."""
        return cls(key=event.key, character=event.character)

    @property
    def is_printable(self) -> bool:
        return (
            self.character is not None
            and len(self.character) == 1
            and self.character.isprintable()
        )


def key_match(event: KeyEvent, binding: str) -> bool:
    return event.key == binding


@dataclass(frozen=True)
class KeysList:
    """Key bindings used by the controller, tabs and the log overlay."""

    exit: str = "ctrl+c"
    quit: str = "q"
    escape: str = "escape"
    enter: str = "enter"
    next_tab: str = "tab"
    prev_tab: str = "shift+tab"
    toggle_logs: str = "f12"
    move_left: str = "left"
    move_left_h: str = "h"
    move_right: str = "right"
    move_right_l: str = "l"
    move_up: str = "up"
    move_up_k: str = "k"
    move_down: str = "down"
    move_down_j: str = "j"

    def is_up(self, event: KeyEvent) -> bool:
        return event.key in (self.move_up, self.move_up_k)

    def is_down(self, event: KeyEvent) -> bool:
        return event.key in (self.move_down, self.move_down_j)

    @classmethod
    def load(cls, path: Path | None) -> KeysList:
        """Load bindings from ``path``, patching the defaults.

        A missing file is not an error. Unreadable or malformed files are
        logged and the defaults are returned.
        """
        keys = cls()
        if path is None or not path.exists():
            return keys

        try:
            patch = json.loads(path.read_text())
        except (json.JSONDecodeError, OSError) as e:
            logger.error("KeysList parse error: %s", e)
            return keys

        if not isinstance(patch, dict):
            logger.error("KeysList parse error: expected an object in %s", path)
            return keys

        known = {f.name for f in fields(cls)}
        values = {}
        for name, value in patch.items():
            if name not in known:
                logger.warning("Ignoring unknown key binding %r", name)
            elif not isinstance(value, str) or not value:
                logger.warning("Ignoring invalid key binding %r=%r", name, value)
            else:
                values[name] = value
        return replace(keys, **values)
