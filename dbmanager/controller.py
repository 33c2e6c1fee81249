"""
Application controller.

Owns the tabs, the popup stack, the current tab index and the event bus.
One call to ``handle_key`` is one frame of input handling: the key is
routed, then every event queued by the tabs and popups is applied in order.
"""

from __future__ import annotations

import logging
from enum import Enum

from dbmanager.events import (
    AppEvent,
    ClosePopup,
    ConfirmQuit,
    ConnectionParams,
    DbType,
    EventBus,
    FormSubmitted,
    OpenPopup,
    PopupKind,
    SelectionMade,
)
from dbmanager.keys import KeyEvent, KeysList, key_match
from dbmanager.logs import LogBuffer, LogView
from dbmanager.providers import Popup, Tab
from dbmanager.theme import Theme
from dbmanager.views.popups import ConnectionFormPopup, QuitConfirmPopup
from dbmanager.views.tabs import default_tabs

logger = logging.getLogger(__name__)


class QuitState(Enum):
    RUNNING = "running"
    CLOSING = "closing"


class Controller:
    """Top-level UI state machine."""

    def __init__(
        self,
        tabs: list[Tab] | None = None,
        theme: Theme | None = None,
        keys: KeysList | None = None,
        log_buffer: LogBuffer | None = None,
    ) -> None:
        self.theme = theme or Theme()
        self.keys = keys or KeysList()
        self.tabs: list[Tab] = list(tabs) if tabs is not None else default_tabs(self.theme, self.keys)
        if not self.tabs:
            raise ValueError("Controller needs at least one tab")

        self.current_tab_index = 0
        self.popups: list[Popup] = []
        self.quit_state = QuitState.RUNNING
        self.show_logs = False
        self.log_view = LogView(log_buffer if log_buffer is not None else LogBuffer())
        self.bus = EventBus()

        self.selected_db_type: DbType | None = None
        self.submitted_connection: ConnectionParams | None = None

    @property
    def current_tab(self) -> Tab:
        return self.tabs[self.current_tab_index]

    @property
    def active_popup(self) -> Popup | None:
        return self.popups[-1] if self.popups else None

    @property
    def is_running(self) -> bool:
        return self.quit_state is QuitState.RUNNING

    # -- input -------------------------------------------------------------

    def handle_key(self, key: KeyEvent) -> None:
        """Route one key, then apply all events it produced."""
        self.dispatch(key)
        self.process_events()

    def dispatch(self, key: KeyEvent) -> None:
        if self.popups:
            self.popups[-1].handle_input(key, self.bus.sender)
        elif self.show_logs:
            self._handle_log_key(key)
        else:
            self._handle_main_key(key)

    def _handle_main_key(self, key: KeyEvent) -> None:
        keys = self.keys
        if key_match(key, keys.quit) or key_match(key, keys.escape):
            self.bus.send(OpenPopup(PopupKind.QUIT_CONFIRM))
        elif key_match(key, keys.exit):
            logger.info("exit requested")
            self.quit_state = QuitState.CLOSING
        elif key_match(key, keys.next_tab):
            self.switch_next_tab()
        elif key_match(key, keys.prev_tab):
            self.switch_prev_tab()
        elif key_match(key, keys.toggle_logs):
            self.toggle_logs()
        else:
            self.current_tab.handle_input(key, self.bus.sender)

    def _handle_log_key(self, key: KeyEvent) -> None:
        keys = self.keys
        if key_match(key, keys.move_down_j):
            self.log_view.next_page()
        elif key_match(key, keys.move_up_k):
            self.log_view.prev_page()
        elif key_match(key, keys.quit) or key_match(key, keys.escape):
            self.show_logs = False
        elif key_match(key, keys.toggle_logs):
            self.toggle_logs()

    def toggle_logs(self) -> None:
        self.show_logs = not self.show_logs
        if self.show_logs:
            self.log_view.page = 0

    # -- tabs --------------------------------------------------------------

    def enabled_tab_count(self) -> int:
        return sum(1 for tab in self.tabs if not tab.is_disabled())

    def switch_next_tab(self) -> None:
        self._switch_tab(1)

    def switch_prev_tab(self) -> None:
        self._switch_tab(-1)

    def _switch_tab(self, step: int) -> None:
        # With fewer than two enabled tabs there is nowhere to go.
        if self.enabled_tab_count() < 2:
            return
        index = self.current_tab_index
        for _ in range(len(self.tabs)):
            index = (index + step) % len(self.tabs)
            if not self.tabs[index].is_disabled():
                break
        logger.debug("switched tab %d -> %d", self.current_tab_index, index)
        self.current_tab_index = index

    # -- events ------------------------------------------------------------

    def process_events(self) -> int:
        """Apply every queued event in arrival order. Returns the count."""
        count = 0
        for event in self.bus.drain():
            self.apply_event(event)
            count += 1
        return count

    def apply_event(self, event: AppEvent) -> None:
        logger.debug("applying %r", event)
        if isinstance(event, SelectionMade):
            self.selected_db_type = event.db_type
            logger.info("selected database type: %s", event.db_type.label)
            self.switch_next_tab()
        elif isinstance(event, OpenPopup):
            self._open_popup(event.kind)
        elif isinstance(event, FormSubmitted):
            self.submitted_connection = event.params
            logger.info("connection form submitted: %r", event.params)
        elif isinstance(event, ClosePopup):
            self._pop_popup()
        elif isinstance(event, ConfirmQuit):
            if self.active_popup is not None and self.active_popup.kind is PopupKind.QUIT_CONFIRM:
                self._pop_popup()
            self.quit_state = QuitState.CLOSING
        else:
            raise TypeError(f"Unhandled app event: {event!r}")

    def _open_popup(self, kind: PopupKind) -> None:
        if kind is PopupKind.CONNECTION_FORM:
            if self.selected_db_type is None:
                logger.warning("no database type selected; ignoring connection form request")
                return
            popup: Popup = ConnectionFormPopup(
                self.selected_db_type.label, theme=self.theme, keys=self.keys
            )
        elif kind is PopupKind.QUIT_CONFIRM:
            popup = QuitConfirmPopup(theme=self.theme, keys=self.keys)
        else:
            raise TypeError(f"Unhandled popup kind: {kind!r}")
        self.popups.append(popup)
        logger.debug("popup opened: %r (depth %d)", popup, len(self.popups))

    def _pop_popup(self) -> None:
        if not self.popups:
            return
        popup = self.popups.pop()
        logger.debug("popup closed: %r", popup)
