"""
Visual theme.

The theme is built once at startup (defaults patched from an optional JSON
file) and never mutated afterwards. Style helpers are pure functions of
their arguments.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path

from rich.color import Color, ColorParseError
from rich.style import Style

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Theme:
    """Colour table. Colour fields hold Rich colour names or hex values."""

    selected_tab: str = "yellow"
    command_fg: str = "white"
    selection_bg: str = "blue"
    selection_fg: str = "white"
    cmdbar_bg: str = "blue"
    cmdbar_extra_lines_bg: str = "blue"
    disabled_fg: str = "bright_black"
    enabled_fg: str = "blue"
    danger_fg: str = "red"
    line_break: str = "¶"
    block_title_focused: str = "default"

    def block(self, focus: bool) -> Style:
        if focus:
            return Style()
        return Style(color=self.disabled_fg)

    def title(self, focused: bool) -> Style:
        if focused:
            return Style(color=self.block_title_focused, bold=True)
        return Style(color=self.disabled_fg)

    def tab(self, enabled: bool, selected: bool) -> Style:
        if selected:
            return self.text(enabled, selected) + Style(
                color=self.selected_tab, bgcolor="default", bold=True
            )
        return self.text(enabled, selected)

    def text(self, enabled: bool, selected: bool) -> Style:
        if not enabled and not selected:
            return Style(color=self.disabled_fg)
        if not enabled and selected:
            return Style(bgcolor=self.disabled_fg)
        if enabled and not selected:
            return Style(color=self.enabled_fg)
        return Style(color=self.command_fg)

    def text_danger(self) -> Style:
        return Style(color=self.danger_fg)

    def commandbar(self, enabled: bool, line: int) -> Style:
        fg = self.command_fg if enabled else self.disabled_fg
        bg = self.cmdbar_bg if line == 0 else self.cmdbar_extra_lines_bg
        return Style(color=fg, bgcolor=bg)

    @staticmethod
    def attention_block() -> Style:
        return Style(color="yellow")

    @classmethod
    def load(cls, path: Path | None) -> Theme:
        """Build a theme from the defaults patched with ``path``.

        Missing files give the default theme. Parse errors, unknown fields
        and unparseable colours are logged and skipped.
        """
        theme = cls()
        if path is None or not path.exists():
            return theme

        try:
            patch = json.loads(path.read_text())
        except (json.JSONDecodeError, OSError) as e:
            logger.error("theme parse error in %s: %s", path, e)
            return theme

        if not isinstance(patch, dict):
            logger.error("theme parse error in %s: expected an object", path)
            return theme

        known = {f.name for f in fields(cls)}
        values = {}
        for name, value in patch.items():
            if name not in known:
                logger.warning("Ignoring unknown theme field %r", name)
                continue
            if not isinstance(value, str):
                logger.warning("Ignoring theme field %r: not a string", name)
                continue
            if name != "line_break":
                try:
                    Color.parse(value)
                except ColorParseError:
                    logger.warning("Ignoring theme field %r: bad colour %r", name, value)
                    continue
            values[name] = value

        logger.debug("theme loaded from %s (%d overrides)", path, len(values))
        return replace(theme, **values)
