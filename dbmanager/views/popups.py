"""Modal popups: the new-connection form and the quit confirmation."""

from __future__ import annotations

import logging
from enum import Enum

from rich.console import Group, RenderableType
from rich.padding import Padding
from rich.panel import Panel
from rich.text import Text
from textual.geometry import Region

from dbmanager import strings
from dbmanager.events import (
    ClosePopup,
    ConfirmQuit,
    ConnectionParams,
    EventSender,
    FormSubmitted,
    PopupKind,
)
from dbmanager.keys import KeyEvent, KeysList, key_match
from dbmanager.theme import Theme

logger = logging.getLogger(__name__)

FOOTER_MARGIN = 15


def centered_rect_exact_height(percent_x: int, height: int, area: Region) -> Region:
    """A rect ``percent_x`` of ``area``'s width and ``height`` rows, centred."""
    width = area.width * percent_x // 100
    x = (area.width - width) // 2
    y = max(0, (area.height - height) // 2)
    return Region(x, y, width, height)


def popup_rect(percent_x: int, height: int, area: Region, footer: str) -> Region:
    """Centred popup rect, taller when the footer has to wrap."""
    rect = centered_rect_exact_height(percent_x, height, area)
    footer_len = len(footer) + FOOTER_MARGIN
    if 0 < rect.width < footer_len:
        rect = Region(rect.x, rect.y, rect.width, rect.height + footer_len // rect.width)
    return rect


class FormField(Enum):
    HOST = ("Host", "Host cannot be empty.")
    DBNAME = ("Database Name", "Database name cannot be empty.")
    USERNAME = ("Username", "Username cannot be empty.")
    PASSWORD = ("Password", "Password cannot be empty.")

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def empty_error(self) -> str:
        return self.value[1]

    @property
    def slug(self) -> str:
        return self.name.lower()


FIELD_ORDER = list(FormField)


class ConnectionFormPopup:
    """Form collecting host, database name, username and password.

    The popup owns the field values, the active field and the validation
    errors. Text editing happens in the field widgets, which report every
    change through ``set_value``; ``handle_input`` only sees the keys that
    move between fields, cancel or confirm (see ``routes_key``).
    """

    kind = PopupKind.CONNECTION_FORM

    def __init__(
        self,
        db_driver_name: str,
        theme: Theme | None = None,
        keys: KeysList | None = None,
    ) -> None:
        self.db_driver_name = db_driver_name
        self.theme = theme or Theme()
        self.keys = keys or KeysList()
        self.values = {field: "" for field in FIELD_ORDER}
        self.errors = {field: "" for field in FIELD_ORDER}
        self.active = FormField.HOST

    def get_db_driver_name(self) -> str:
        return self.db_driver_name

    @property
    def title(self) -> str:
        return strings.CONNECTION_POPUP_TITLE.format(driver=self.get_db_driver_name())

    def routes_key(self, key: KeyEvent) -> bool:
        """True for keys the form handles itself rather than the active field."""
        keys = self.keys
        bindings = (keys.escape, keys.exit, keys.enter, keys.next_tab, keys.move_down, keys.move_up)
        return any(key_match(key, binding) for binding in bindings)

    def handle_input(self, key: KeyEvent, sender: EventSender) -> None:
        if key_match(key, self.keys.escape) or key_match(key, self.keys.exit):
            self.cancel(sender)
        elif key_match(key, self.keys.enter):
            self.confirm(sender)
        elif key_match(key, self.keys.next_tab) or key_match(key, self.keys.move_down):
            self.navigate_to_next_field()
        elif key_match(key, self.keys.move_up):
            self.navigate_to_previous_field()

    def set_value(self, field: FormField, value: str) -> None:
        """Record an edit of ``field`` and re-validate that field only."""
        if value == self.values[field]:
            return
        self.values[field] = value
        self.validate_field(field)

    def cancel(self, sender: EventSender) -> None:
        sender.send(ClosePopup())

    def confirm(self, sender: EventSender) -> bool:
        if not self.validate_all():
            logger.debug("connection form invalid: %s", self.error_messages())
            return False
        sender.send(FormSubmitted(self.params()))
        return True

    def navigate_to_next_field(self) -> None:
        index = FIELD_ORDER.index(self.active)
        self.active = FIELD_ORDER[(index + 1) % len(FIELD_ORDER)]

    def navigate_to_previous_field(self) -> None:
        index = FIELD_ORDER.index(self.active)
        self.active = FIELD_ORDER[(index - 1) % len(FIELD_ORDER)]

    def validate_field(self, field: FormField) -> bool:
        if self.values[field]:
            self.errors[field] = ""
        else:
            self.errors[field] = field.empty_error
        return not self.errors[field]

    def validate_all(self) -> bool:
        results = [self.validate_field(field) for field in FIELD_ORDER]
        return all(results)

    def error_messages(self) -> dict[FormField, str]:
        return {field: msg for field, msg in self.errors.items() if msg}

    def error_text(self, field: FormField) -> Text:
        return Text(self.errors[field], style=self.theme.text_danger())

    def params(self) -> ConnectionParams:
        return ConnectionParams(
            host=self.values[FormField.HOST],
            dbname=self.values[FormField.DBNAME],
            username=self.values[FormField.USERNAME],
            password=self.values[FormField.PASSWORD],
        )

    def region(self, area: Region) -> Region:
        return popup_rect(70, 20, area, strings.CONNECTION_POPUP_FOOTER)

    def render_widget(self, area: Region) -> RenderableType:
        """The key help shown under the fields; the fields are input widgets."""
        rect = self.region(area)
        if rect.width < 4 or rect.height < 3:
            return Text()
        return Text(strings.CONNECTION_POPUP_FOOTER, justify="center")

    def __repr__(self) -> str:
        return f"ConnectionFormPopup(driver={self.db_driver_name!r}, active={self.active.name})"


class QuitConfirmPopup:
    """Two-way gate: confirm the quit or go back."""

    kind = PopupKind.QUIT_CONFIRM
    CANCEL_CHAR = "c"

    def __init__(self, theme: Theme | None = None, keys: KeysList | None = None) -> None:
        self.theme = theme or Theme()
        self.keys = keys or KeysList()

    def handle_input(self, key: KeyEvent, sender: EventSender) -> None:
        if key_match(key, self.keys.escape) or key_match(key, self.CANCEL_CHAR):
            sender.send(ClosePopup())
        elif key_match(key, self.keys.enter) or key_match(key, self.keys.quit):
            sender.send(ConfirmQuit())

    def render_widget(self, area: Region) -> RenderableType:
        rect = popup_rect(40, 8, area, strings.QUIT_POPUP_FOOTER)
        if rect.width < 4 or rect.height < 3:
            return Text()

        body = Group(
            Text(strings.QUIT_POPUP_PROMPT, justify="center"),
            Text(""),
            Text(strings.QUIT_POPUP_FOOTER, justify="center"),
        )
        return Panel(
            Padding(body, (1, 2)),
            title=strings.QUIT_POPUP_TITLE,
            border_style=self.theme.attention_block(),
            width=rect.width,
            height=rect.height,
        )

    def __repr__(self) -> str:
        return "QuitConfirmPopup()"
