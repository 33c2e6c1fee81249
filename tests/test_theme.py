"""Tests for theme.py - style helpers and theme files."""

import dataclasses
import json
import logging
from pathlib import Path

import pytest
from rich.style import Style

from dbmanager.theme import Theme


class TestStyles:
    """Tests for the pure style functions."""

    @pytest.mark.parametrize(
        "enabled,selected,expected",
        [
            (False, False, Style(color="bright_black")),
            (False, True, Style(bgcolor="bright_black")),
            (True, False, Style(color="blue")),
            (True, True, Style(color="white")),
        ],
    )
    def test_text(self, enabled: bool, selected: bool, expected: Style) -> None:
        assert Theme().text(enabled, selected) == expected

    def test_selected_tab_is_bold_and_highlighted(self) -> None:
        style = Theme().tab(False, True)
        assert style.bold
        assert style.color.name == "yellow"

    def test_unselected_tab_matches_text(self) -> None:
        theme = Theme()
        assert theme.tab(True, False) == theme.text(True, False)
        assert theme.tab(False, False) == theme.text(False, False)

    def test_block(self) -> None:
        theme = Theme()
        assert theme.block(True) == Style()
        assert theme.block(False) == Style(color="bright_black")

    def test_title(self) -> None:
        theme = Theme()
        assert theme.title(True).bold
        assert theme.title(False) == Style(color="bright_black")

    def test_commandbar(self) -> None:
        theme = Theme(cmdbar_extra_lines_bg="green")
        assert theme.commandbar(True, 0) == Style(color="white", bgcolor="blue")
        assert theme.commandbar(False, 1) == Style(color="bright_black", bgcolor="green")

    def test_danger_and_attention(self) -> None:
        assert Theme().text_danger() == Style(color="red")
        assert Theme.attention_block() == Style(color="yellow")

    def test_immutable(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            Theme().danger_fg = "green"


class TestLoad:
    """Tests for patching the theme from a file."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        assert Theme.load(tmp_path / "theme.json") == Theme()

    def test_patch(self, tmp_path: Path) -> None:
        path = tmp_path / "theme.json"
        path.write_text(json.dumps({"selection_bg": "white", "line_break": "$"}))
        theme = Theme.load(path)
        assert theme.selection_bg == "white"
        assert theme.line_break == "$"
        assert theme.selection_fg == Theme().selection_fg

    def test_bad_values_skipped(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        path = tmp_path / "theme.json"
        path.write_text(
            json.dumps({"danger_fg": "not-a-colour", "nope": "red", "enabled_fg": "#00ff00"})
        )
        with caplog.at_level(logging.WARNING, logger="dbmanager.theme"):
            theme = Theme.load(path)
        assert theme.danger_fg == "red"
        assert theme.enabled_fg == "#00ff00"
        assert "not-a-colour" in caplog.text
        assert "nope" in caplog.text

    def test_parse_error(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        path = tmp_path / "theme.json"
        path.write_text("(selection_bg: Some(White))")
        with caplog.at_level(logging.ERROR, logger="dbmanager.theme"):
            assert Theme.load(path) == Theme()
        assert "theme parse error" in caplog.text
