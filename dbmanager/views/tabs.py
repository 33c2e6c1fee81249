"""Tab views shown in the main area."""

from __future__ import annotations

from dataclasses import dataclass

from rich.console import RenderableType
from rich.style import Style
from rich.text import Text
from textual.geometry import Region

from dbmanager import strings
from dbmanager.events import DbType, EventSender, OpenPopup, PopupKind, SelectionMade
from dbmanager.keys import KeyEvent, KeysList, key_match
from dbmanager.theme import Theme

HIGHLIGHT_STYLE = Style(color="yellow")


class ListCursor:
    """Selection cursor over a list whose length may change between frames.

    Movement wraps at both ends. The item count is passed on every call so
    the cursor always lands inside the live list.
    """

    def __init__(self, selected: int = 0) -> None:
        self.selected = selected

    def move_down(self, count: int) -> int:
        if count <= 0:
            self.selected = 0
        else:
            self.selected = (self.selected + 1) % count
        return self.selected

    def move_up(self, count: int) -> int:
        if count <= 0:
            self.selected = 0
        else:
            self.selected = (self.selected - 1) % count
        return self.selected

    def clamp(self, count: int) -> int:
        if count <= 0 or self.selected >= count:
            self.selected = max(0, count - 1)
        return self.selected


class BaseTab:
    """Title and enabled flag shared by every tab; draws the title only."""

    def __init__(
        self,
        title: str,
        theme: Theme | None = None,
        keys: KeysList | None = None,
        disabled: bool = False,
    ) -> None:
        self.title = title
        self.theme = theme or Theme()
        self.keys = keys or KeysList()
        self.disabled = disabled

    def draw(self, region: Region) -> RenderableType:
        if region.width <= 0 or region.height <= 0:
            return Text()
        return Text(self.get_title(), style=self.theme.title(not self.disabled), no_wrap=True)

    def handle_input(self, key: KeyEvent, sender: EventSender) -> None:
        return None

    def is_disabled(self) -> bool:
        return self.disabled

    def set_disabled(self, disabled: bool) -> None:
        self.disabled = disabled

    def get_title(self) -> str:
        return self.title

    def __repr__(self) -> str:
        return f"{type(self).__name__}(title={self.title!r}, disabled={self.disabled})"


class ListTab(BaseTab):
    """A tab showing a selectable list, one blank row above it."""

    item_style = Style()

    def __init__(self, title: str, **kwargs) -> None:
        super().__init__(title, **kwargs)
        self.cursor = ListCursor()

    def item_labels(self) -> list[str]:
        raise NotImplementedError

    def on_enter(self, index: int, sender: EventSender) -> None:
        pass

    def draw(self, region: Region) -> RenderableType:
        if region.width <= 0 or region.height <= 0:
            return Text()

        labels = self.item_labels()
        selected = self.cursor.clamp(len(labels))
        visible = max(0, region.height - 1)
        offset = max(0, selected - visible + 1) if visible else 0

        text = Text(no_wrap=True, overflow="ellipsis")
        text.append("\n")
        for i, label in enumerate(labels[offset : offset + visible]):
            index = offset + i
            if i:
                text.append("\n")
            if index == selected:
                text.append(strings.LIST_HIGHLIGHT_SYMBOL + label, style=HIGHLIGHT_STYLE)
            else:
                text.append(" " * len(strings.LIST_HIGHLIGHT_SYMBOL))
                text.append(label, style=self.item_style)
        return text

    def handle_input(self, key: KeyEvent, sender: EventSender) -> None:
        count = len(self.item_labels())
        if self.keys.is_down(key):
            self.cursor.move_down(count)
        elif self.keys.is_up(key):
            self.cursor.move_up(count)
        elif key_match(key, self.keys.enter) and count:
            self.on_enter(self.cursor.clamp(count), sender)


class TypesTab(ListTab):
    """Lists the supported database engines; Enter selects one."""

    def __init__(self, **kwargs) -> None:
        super().__init__(strings.TAB_TYPES, **kwargs)
        self.db_types: list[DbType] = list(DbType)

    def item_labels(self) -> list[str]:
        return [db_type.label for db_type in self.db_types]

    @property
    def selected_type(self) -> DbType:
        return self.db_types[self.cursor.clamp(len(self.db_types))]

    def on_enter(self, index: int, sender: EventSender) -> None:
        sender.send(SelectionMade(self.db_types[index]))


@dataclass
class Connection:
    name: str
    is_create_new: bool = False


class ConnectionsTab(ListTab):
    """Saved connections, headed by a "create new" entry."""

    item_style = Style(color="white")

    def __init__(self, **kwargs) -> None:
        super().__init__(strings.TAB_CONNECTIONS, **kwargs)
        self.connections: list[Connection] = [
            Connection(name=strings.CREATE_NEW_CONNECTION, is_create_new=True)
        ]

    def item_labels(self) -> list[str]:
        return [conn.name for conn in self.connections]

    def on_enter(self, index: int, sender: EventSender) -> None:
        if self.connections[index].is_create_new:
            sender.send(OpenPopup(PopupKind.CONNECTION_FORM))


class DatabasesTab(BaseTab):
    def __init__(self, **kwargs) -> None:
        kwargs.setdefault("disabled", True)
        super().__init__(strings.TAB_DATABASES, **kwargs)


class TablesTab(BaseTab):
    def __init__(self, **kwargs) -> None:
        kwargs.setdefault("disabled", True)
        super().__init__(strings.TAB_TABLES, **kwargs)


def default_tabs(theme: Theme | None = None, keys: KeysList | None = None) -> list[BaseTab]:
    """The workspace tabs in display order."""
    return [
        TypesTab(theme=theme, keys=keys),
        ConnectionsTab(theme=theme, keys=keys),
        DatabasesTab(theme=theme, keys=keys),
        TablesTab(theme=theme, keys=keys),
    ]
