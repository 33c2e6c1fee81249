"""
Contracts for the pieces the controller drives.

Protocols define the interface; concrete tabs and popups live in views/ and
can be swapped for testing.
"""

from typing import Protocol

from rich.console import RenderableType
from textual.geometry import Region

from dbmanager.events import EventSender, PopupKind
from dbmanager.keys import KeyEvent


class Tab(Protocol):
    """A unit of main-view content."""

    def draw(self, region: Region) -> RenderableType:
        """Render into an area of ``region``'s size."""
        ...

    def handle_input(self, key: KeyEvent, sender: EventSender) -> None:
        """Consume one key; may send at most one event."""
        ...

    def is_disabled(self) -> bool:
        ...

    def set_disabled(self, disabled: bool) -> None:
        ...

    def get_title(self) -> str:
        ...


class Popup(Protocol):
    """A modal overlay drawn above the main view."""

    kind: PopupKind

    def handle_input(self, key: KeyEvent, sender: EventSender) -> None:
        """Consume one key; may send at most one event."""
        ...

    def render_widget(self, area: Region) -> RenderableType:
        """Render the popup for a screen of ``area``'s size."""
        ...
