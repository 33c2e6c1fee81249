"""Widgets that draw controller state."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text
from textual.app import ComposeResult
from textual.geometry import Region
from textual.widgets import Label, Static

from dbmanager import strings

if TYPE_CHECKING:
    from dbmanager.controller import Controller
    from dbmanager.providers import Popup


class ControllerView(Static):
    """Static whose content is rebuilt from the controller on demand."""

    def __init__(self, controller: Controller, **kwargs) -> None:
        super().__init__(**kwargs)
        self._controller = controller

    def on_mount(self) -> None:
        self.refresh_view()

    def on_resize(self) -> None:
        self.refresh_view()

    def view_region(self) -> Region:
        """Area available for drawing, in local coordinates."""
        size = self.size
        return Region(0, 0, size.width, size.height)

    def refresh_view(self) -> None:
        raise NotImplementedError


class TitleBar(Static):
    """Application title across the top row."""

    DEFAULT_CSS = """
    TitleBar {
        height: 1;
        content-align: center middle;
    }

    TitleBar .title {
        width: 100%;
        text-align: center;
        text-style: bold;
        background: $primary-darken-2;
    }
    """

    def compose(self) -> ComposeResult:
        yield Label(strings.APP_TITLE, classes="title")


class TabBar(ControllerView):
    """Row of tab titles; the current tab is highlighted, disabled tabs dimmed."""

    DEFAULT_CSS = """
    TabBar {
        layout: horizontal;
        height: 3;
        border: solid $primary-darken-2;
        padding: 0 1;
    }

    TabBar .tab {
        width: auto;
    }

    TabBar .tab.-selected {
        text-style: bold;
    }

    TabBar .divider {
        width: auto;
        color: $text-muted;
    }
    """

    def __init__(self, controller: Controller, **kwargs) -> None:
        super().__init__(controller, **kwargs)
        self._labels = [
            Label(tab.get_title(), classes="tab") for tab in controller.tabs
        ]

    def compose(self) -> ComposeResult:
        for index, label in enumerate(self._labels):
            if index:
                yield Label(strings.TAB_DIVIDER, classes="divider")
            yield label

    def refresh_view(self) -> None:
        controller = self._controller
        theme = controller.theme
        for index, (tab, label) in enumerate(zip(controller.tabs, self._labels)):
            selected = index == controller.current_tab_index
            enabled = not tab.is_disabled()
            if selected:
                style = theme.tab(False, True)
            else:
                style = theme.tab(enabled, False)
            label.set_class(selected, "-selected")
            label.set_class(not enabled, "-disabled")
            label.update(Text(tab.get_title(), style=style))


class TabBody(ControllerView):
    """Content of the current tab."""

    DEFAULT_CSS = """
    TabBody {
        height: 1fr;
        min-height: 5;
    }
    """

    def refresh_view(self) -> None:
        self.update(self._controller.current_tab.draw(self.view_region()))


class StatusLine(ControllerView):
    """Current tab index and key help."""

    DEFAULT_CSS = """
    StatusLine {
        layout: horizontal;
        height: 1;
    }

    StatusLine .tab-index {
        width: auto;
        text-style: bold;
        padding: 0 1;
    }

    StatusLine .help {
        width: 1fr;
    }
    """

    def __init__(self, controller: Controller, **kwargs) -> None:
        super().__init__(controller, **kwargs)
        self._index = Label(classes="tab-index")
        self._help = Label(classes="help")

    def compose(self) -> ComposeResult:
        yield self._index
        yield self._help

    def refresh_view(self) -> None:
        controller = self._controller
        style = controller.theme.commandbar(True, 0)
        self._index.update(Text(str(controller.current_tab_index), style=style))
        self._help.update(Text(strings.MAIN_FOOTER, style=style))


class LogPanel(ControllerView):
    """Paged view over the log buffer."""

    DEFAULT_CSS = """
    LogPanel {
        height: 1fr;
    }
    """

    def refresh_view(self) -> None:
        self.update(self._controller.log_view.render(self.view_region()))


class PopupView(Static):
    """Renders one popup, sized against the whole screen."""

    DEFAULT_CSS = """
    PopupView {
        width: auto;
        height: auto;
    }
    """

    def __init__(self, popup: Popup, **kwargs) -> None:
        super().__init__(**kwargs)
        self.popup = popup

    def on_mount(self) -> None:
        self.refresh_view()

    def refresh_view(self) -> None:
        size = self.app.size
        self.update(self.popup.render_widget(Region(0, 0, size.width, size.height)))
