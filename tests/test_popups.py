"""Tests for views/popups.py - connection form and quit confirmation."""

import io

import pytest
from rich.console import Console
from textual.geometry import Region

from dbmanager.events import (
    ClosePopup,
    ConfirmQuit,
    ConnectionParams,
    EventBus,
    FormSubmitted,
    PopupKind,
)
from dbmanager.keys import KeyEvent
from dbmanager.theme import Theme
from dbmanager.views.popups import (
    ConnectionFormPopup,
    FormField,
    QuitConfirmPopup,
    centered_rect_exact_height,
    popup_rect,
)


def key(name: str) -> KeyEvent:
    return KeyEvent(name, name if len(name) == 1 else None)


def fill(popup: ConnectionFormPopup, **values: str) -> None:
    for name, value in values.items():
        popup.set_value(FormField[name.upper()], value)


def render_plain(renderable, width: int = 100) -> str:
    console = Console(file=io.StringIO(), width=width, record=True, color_system=None)
    console.print(renderable)
    return console.export_text()


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def form() -> ConnectionFormPopup:
    return ConnectionFormPopup("PostgreSQL")


class TestConnectionFormNavigation:
    """Tests for moving between form fields."""

    def test_starts_on_host(self, form: ConnectionFormPopup) -> None:
        assert form.active is FormField.HOST
        assert form.kind is PopupKind.CONNECTION_FORM
        assert form.get_db_driver_name() == "PostgreSQL"

    def test_tab_and_down_cycle_forward(self, form: ConnectionFormPopup, bus: EventBus) -> None:
        seen = []
        for name in ("tab", "down", "tab", "down"):
            form.handle_input(key(name), bus.sender)
            seen.append(form.active)
        assert seen == [
            FormField.DBNAME,
            FormField.USERNAME,
            FormField.PASSWORD,
            FormField.HOST,
        ]

    def test_up_cycles_backward(self, form: ConnectionFormPopup, bus: EventBus) -> None:
        form.handle_input(key("up"), bus.sender)
        assert form.active is FormField.PASSWORD
        form.handle_input(key("up"), bus.sender)
        assert form.active is FormField.USERNAME


class TestConnectionFormRouting:
    """Tests for which keys the form takes from the input widgets."""

    @pytest.mark.parametrize("name", ["escape", "ctrl+c", "enter", "tab", "up", "down"])
    def test_routed(self, form: ConnectionFormPopup, name: str) -> None:
        assert form.routes_key(key(name))

    @pytest.mark.parametrize("name", ["j", "k", "q", "c", "backspace", "left", "home"])
    def test_left_to_the_field(self, form: ConnectionFormPopup, name: str) -> None:
        assert not form.routes_key(key(name))

    @pytest.mark.parametrize("name", ["j", "k", "q", "c", "backspace"])
    def test_unrouted_keys_do_nothing(
        self, form: ConnectionFormPopup, bus: EventBus, name: str
    ) -> None:
        form.handle_input(key(name), bus.sender)
        assert form.active is FormField.HOST
        assert form.values[FormField.HOST] == ""
        assert len(bus) == 0


class TestConnectionFormCancel:
    """Tests for leaving the form."""

    @pytest.mark.parametrize("name", ["escape", "ctrl+c"])
    def test_cancel_keys(self, form: ConnectionFormPopup, bus: EventBus, name: str) -> None:
        fill(form, host="db")
        form.handle_input(key(name), bus.sender)
        assert list(bus.drain()) == [ClosePopup()]
        assert form.values[FormField.HOST] == "db"


class TestConnectionFormValidation:
    """Tests for per-field validation."""

    def test_enter_on_empty_form(self, form: ConnectionFormPopup, bus: EventBus) -> None:
        form.handle_input(key("enter"), bus.sender)
        assert len(bus) == 0
        assert form.error_messages() == {
            FormField.HOST: "Host cannot be empty.",
            FormField.DBNAME: "Database name cannot be empty.",
            FormField.USERNAME: "Username cannot be empty.",
            FormField.PASSWORD: "Password cannot be empty.",
        }

    @pytest.mark.parametrize("empty", list(FormField))
    def test_single_empty_field(
        self, form: ConnectionFormPopup, bus: EventBus, empty: FormField
    ) -> None:
        for field in FormField:
            if field is not empty:
                form.set_value(field, "x")
        form.handle_input(key("enter"), bus.sender)

        assert len(bus) == 0
        assert list(form.error_messages()) == [empty]

    def test_all_filled_submits_and_clears_errors(
        self, form: ConnectionFormPopup, bus: EventBus
    ) -> None:
        form.handle_input(key("enter"), bus.sender)
        fill(form, host="localhost", dbname="app", username="admin", password="pw")
        form.handle_input(key("enter"), bus.sender)

        assert form.error_messages() == {}
        assert list(bus.drain()) == [
            FormSubmitted(ConnectionParams("localhost", "app", "admin", "pw"))
        ]

    def test_edit_revalidates_only_that_field(self, form: ConnectionFormPopup, bus: EventBus) -> None:
        form.handle_input(key("enter"), bus.sender)
        fill(form, host="h")
        assert FormField.HOST not in form.error_messages()
        assert set(form.error_messages()) == {
            FormField.DBNAME,
            FormField.USERNAME,
            FormField.PASSWORD,
        }

    def test_two_fields_filled_then_enter(self, form: ConnectionFormPopup, bus: EventBus) -> None:
        fill(form, host="localhost", dbname="app")
        form.handle_input(key("enter"), bus.sender)
        assert set(form.error_messages()) == {FormField.USERNAME, FormField.PASSWORD}
        assert len(bus) == 0

    def test_erasing_sets_error(self, form: ConnectionFormPopup) -> None:
        fill(form, host="h")
        assert form.error_messages() == {}
        fill(form, host="")
        assert form.error_messages() == {FormField.HOST: "Host cannot be empty."}

    def test_unchanged_value_is_not_validated(self, form: ConnectionFormPopup) -> None:
        # Input widgets report their initial empty value on mount.
        fill(form, password="")
        assert form.error_messages() == {}

    def test_navigation_does_not_validate(self, form: ConnectionFormPopup, bus: EventBus) -> None:
        form.handle_input(key("tab"), bus.sender)
        form.handle_input(key("up"), bus.sender)
        assert form.error_messages() == {}


class TestConnectionFormRender:
    """Tests for the pieces the form screen draws."""

    def test_title(self, form: ConnectionFormPopup) -> None:
        assert form.title == "New DB Connection: PostgreSQL"

    def test_footer(self, form: ConnectionFormPopup) -> None:
        output = render_plain(form.render_widget(Region(0, 0, 160, 40)), width=160)
        assert "Esc or <Ctrl-c>: Cancel" in output

    def test_error_text_uses_danger_style(self, bus: EventBus) -> None:
        form = ConnectionFormPopup("MySQL", theme=Theme(danger_fg="magenta"))
        assert form.error_text(FormField.HOST).plain == ""
        form.handle_input(key("enter"), bus.sender)
        text = form.error_text(FormField.HOST)
        assert text.plain == "Host cannot be empty."
        assert text.style == Theme(danger_fg="magenta").text_danger()

    def test_region(self, form: ConnectionFormPopup) -> None:
        rect = form.region(Region(0, 0, 100, 40))
        assert rect.width == 70
        assert rect.x == 15

    def test_tiny_area(self, form: ConnectionFormPopup) -> None:
        assert render_plain(form.render_widget(Region(0, 0, 0, 0))).strip() == ""


class TestQuitConfirmPopup:
    """Tests for the quit confirmation gate."""

    @pytest.mark.parametrize("name", ["escape", "c"])
    def test_cancel(self, bus: EventBus, name: str) -> None:
        QuitConfirmPopup().handle_input(key(name), bus.sender)
        assert list(bus.drain()) == [ClosePopup()]

    @pytest.mark.parametrize("name", ["enter", "q"])
    def test_confirm(self, bus: EventBus, name: str) -> None:
        QuitConfirmPopup().handle_input(key(name), bus.sender)
        assert list(bus.drain()) == [ConfirmQuit()]

    @pytest.mark.parametrize("name", ["x", "tab", "f12", "ctrl+c"])
    def test_other_keys_ignored(self, bus: EventBus, name: str) -> None:
        QuitConfirmPopup().handle_input(key(name), bus.sender)
        assert len(bus) == 0

    def test_render(self) -> None:
        output = render_plain(QuitConfirmPopup().render_widget(Region(0, 0, 200, 40)), width=200)
        assert "Quit Confirmation" in output
        assert "Are you sure you want to quit?" in output
        assert "Q or Enter: quit | Esc or C: Cancel" in output


class TestPopupGeometry:
    """Tests for popup placement."""

    def test_centered_rect(self) -> None:
        assert centered_rect_exact_height(40, 8, Region(0, 0, 100, 30)) == Region(30, 11, 40, 8)

    def test_taller_when_footer_wraps(self) -> None:
        footer = "x" * 45
        rect = popup_rect(40, 8, Region(0, 0, 100, 30), footer)
        assert rect.width == 40
        assert rect.height == 8 + 60 // 40

    def test_small_screen(self) -> None:
        rect = centered_rect_exact_height(70, 20, Region(0, 0, 10, 5))
        assert rect.y == 0
        assert rect.width == 7
