"""Main screen: title, tab bar, current tab and status line."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual import events
from textual.app import ComposeResult
from textual.screen import Screen

from dbmanager.keys import KeyEvent
from dbmanager.views.widgets import (
    ControllerView,
    StatusLine,
    TabBar,
    TabBody,
    TitleBar,
)

if TYPE_CHECKING:
    from dbmanager.controller import Controller


def forward_key(screen: Screen, event: events.Key) -> None:
    """Hand a key to the app's frame step; nothing else sees it."""
    event.stop()
    event.prevent_default()
    screen.app.run_frame(KeyEvent.from_textual(event))


class MainScreen(Screen, inherit_bindings=False):
    """The tabbed workspace. Always at the bottom of the screen stack."""

    DEFAULT_CSS = """
    MainScreen {
        layout: vertical;
    }
    """

    def __init__(self, controller: Controller, **kwargs) -> None:
        super().__init__(**kwargs)
        self._controller = controller

    def compose(self) -> ComposeResult:
        yield TitleBar()
        yield TabBar(self._controller)
        yield TabBody(self._controller)
        yield StatusLine(self._controller)

    def on_key(self, event: events.Key) -> None:
        forward_key(self, event)

    def refresh_view(self) -> None:
        for view in self.query(ControllerView):
            view.refresh_view()
