"""Screens stacked above the main screen: popups, the connection form and the log overlay."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.containers import Container, Vertical
from textual.geometry import Region
from textual.screen import ModalScreen, Screen
from textual.widgets import Input, Static

from dbmanager import strings
from dbmanager.keys import KeyEvent
from dbmanager.views.dashboard import forward_key
from dbmanager.views.popups import FIELD_ORDER, ConnectionFormPopup, FormField
from dbmanager.views.widgets import LogPanel, PopupView

if TYPE_CHECKING:
    from dbmanager.controller import Controller
    from dbmanager.providers import Popup


class PopupScreen(ModalScreen, inherit_bindings=False):
    """Modal wrapper around one popup of the controller's stack."""

    DEFAULT_CSS = """
    PopupScreen {
        align: center middle;
    }
    """

    def __init__(self, popup: Popup, **kwargs) -> None:
        super().__init__(**kwargs)
        self.popup = popup

    def compose(self) -> ComposeResult:
        yield PopupView(self.popup)

    def routes_key(self, event: events.Key) -> bool:
        """Whether ``event`` goes to the controller."""
        return True

    def on_key(self, event: events.Key) -> None:
        if self.routes_key(event):
            forward_key(self, event)

    def on_resize(self) -> None:
        self.refresh_view()

    def refresh_view(self) -> None:
        for view in self.query(PopupView):
            view.refresh_view()


class ConnectionFormScreen(PopupScreen):
    """The connection form: one ``Input`` per field under the form's title.

    Editing keys go to the focused input; only the keys the form routes
    itself reach the controller.
    """

    DEFAULT_CSS = """
    #connection-dialog {
        height: auto;
        max-height: 100%;
        border: solid $warning;
        background: $surface;
        padding: 1 3;
        border-title-align: left;
        border-title-style: bold;
    }

    #connection-dialog .field-container {
        height: auto;
        border: solid $primary-darken-2;
        border-title-align: left;
        border-title-color: $text-muted;
    }

    #connection-dialog .field-container.focused {
        border: solid $warning;
    }

    #connection-dialog .field-container.invalid {
        border: solid $error;
    }

    #connection-dialog .field-container Input {
        border: none;
        height: 1;
        padding: 0 1;
    }

    #connection-dialog .error-text {
        padding: 0 1;
    }

    #connection-dialog .error-text.hidden {
        display: none;
    }

    #connection-footer {
        margin-top: 1;
        width: 100%;
    }
    """

    popup: ConnectionFormPopup

    def compose(self) -> ComposeResult:
        popup = self.popup
        with Vertical(id="connection-dialog"):
            for field in FIELD_ORDER:
                container = Container(id=f"container-{field.slug}", classes="field-container")
                container.border_title = field.label
                with container:
                    yield Input(
                        value=popup.values[field],
                        password=field is FormField.PASSWORD,
                        id=f"field-{field.slug}",
                    )
                    yield Static("", id=f"error-{field.slug}", classes="error-text hidden")
            yield Static(id="connection-footer")

    def on_mount(self) -> None:
        self.refresh_view()

    def routes_key(self, event: events.Key) -> bool:
        return self.popup.routes_key(KeyEvent.from_textual(event))

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        field = FormField[event.input.id.removeprefix("field-").upper()]
        self.popup.set_value(field, event.value)
        self.refresh_view()

    def refresh_view(self) -> None:
        if not self.query("#connection-dialog"):
            return
        popup = self.popup
        size = self.app.size
        area = Region(0, 0, size.width, size.height)

        dialog = self.query_one("#connection-dialog", Vertical)
        dialog.border_title = popup.title
        dialog.styles.width = popup.region(area).width

        for field in FIELD_ORDER:
            error = popup.errors[field]
            container = self.query_one(f"#container-{field.slug}", Container)
            container.set_class(field is popup.active, "focused")
            container.set_class(bool(error), "invalid")
            message = self.query_one(f"#error-{field.slug}", Static)
            message.update(popup.error_text(field))
            message.set_class(not error, "hidden")

        self.query_one("#connection-footer", Static).update(popup.render_widget(area))
        self.query_one(f"#field-{popup.active.slug}", Input).focus()


class LogScreen(Screen, inherit_bindings=False):
    """Full-screen log overlay."""

    DEFAULT_CSS = """
    LogScreen {
        layout: vertical;
    }

    LogScreen .log-footer {
        height: 1;
        color: $text-muted;
    }
    """

    def __init__(self, controller: Controller, **kwargs) -> None:
        super().__init__(**kwargs)
        self._controller = controller

    def compose(self) -> ComposeResult:
        yield LogPanel(self._controller)
        yield Static(Text(strings.LOGS_FOOTER), classes="log-footer")

    def on_key(self, event: events.Key) -> None:
        forward_key(self, event)

    def refresh_view(self) -> None:
        for view in self.query(LogPanel):
            view.refresh_view()


def popup_screen(popup: Popup) -> PopupScreen:
    """The screen that hosts ``popup``."""
    if isinstance(popup, ConnectionFormPopup):
        return ConnectionFormScreen(popup)
    return PopupScreen(popup)
