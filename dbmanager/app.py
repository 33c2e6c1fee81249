"""
Database Manager TUI Application.

Main entry point for the terminal user interface.
"""

from __future__ import annotations

import logging

from textual.app import App

from dbmanager.controller import Controller
from dbmanager.keys import KeyEvent
from dbmanager.views.dashboard import MainScreen
from dbmanager.views.overlays import LogScreen, PopupScreen, popup_screen

logger = logging.getLogger(__name__)

# Stands in for the log overlay in the list of wanted overlay screens.
LOG_OVERLAY = object()


class DbManagerApp(App, inherit_bindings=False):
    """Hosts the controller and mirrors its state onto Textual screens.

    Textual's message loop is the frame loop: it draws, waits for a key and
    hands it to ``run_frame``. Popups and the log overlay become screens
    pushed above ``MainScreen`` so the main view stays visible underneath.
    """

    TITLE = "Database Manager"
    ENABLE_COMMAND_PALETTE = False

    CSS = """
    Screen {
        background: $surface;
    }
    """

    def __init__(self, controller: Controller | None = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self._controller = controller or Controller()

    @property
    def controller(self) -> Controller:
        return self._controller

    def on_mount(self) -> None:
        """Called when app is mounted."""
        logger.debug("starting application")
        self.push_screen(MainScreen(self._controller))

    def run_frame(self, key: KeyEvent) -> None:
        """Dispatch one key, fold queued events, then redraw."""
        self._controller.handle_key(key)
        if not self._controller.is_running:
            logger.debug("closing application")
            self.exit()
            return
        self._sync_screens()
        self.refresh_views()

    def _overlay_screens(self) -> list[PopupScreen | LogScreen]:
        return [s for s in self.screen_stack if isinstance(s, (PopupScreen, LogScreen))]

    def _sync_screens(self) -> None:
        """Make the overlay screens match the controller's popups and overlay flag."""
        wanted: list[object] = list(self._controller.popups)
        if self._controller.show_logs:
            wanted.append(LOG_OVERLAY)

        current = [
            s.popup if isinstance(s, PopupScreen) else LOG_OVERLAY
            for s in self._overlay_screens()
        ]
        keep = 0
        while keep < min(len(current), len(wanted)) and current[keep] is wanted[keep]:
            keep += 1

        for _ in range(len(current) - keep):
            self.pop_screen()
        for source in wanted[keep:]:
            if source is LOG_OVERLAY:
                self.push_screen(LogScreen(self._controller))
            else:
                self.push_screen(popup_screen(source))

    def refresh_views(self) -> None:
        for screen in self.screen_stack:
            if isinstance(screen, (MainScreen, PopupScreen, LogScreen)):
                screen.refresh_view()
