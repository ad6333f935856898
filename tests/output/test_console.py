"""Tests for the Rich console factory."""

from io import StringIO

import pytest

from cement.output.console import create_console, get_output


@pytest.fixture(autouse=True)
def _plain_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("FORCE_COLOR", "NO_COLOR", "TTY_COMPATIBLE"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("TERM", "xterm-256color")


class TestCreateConsole:
    def test_renders_to_buffer(self) -> None:
        console = create_console()
        assert isinstance(console.file, StringIO)
        console.print("hello")
        assert get_output(console) == "hello\n"

    def test_plain_when_not_a_terminal(self) -> None:
        console = create_console()
        console.print("ok", style="bold green")
        assert "\x1b[" not in get_output(console)

    def test_forced_terminal_emits_styles(self) -> None:
        console = create_console(force_terminal=True)
        console.print("ok", style="bold red")
        assert "\x1b[" in get_output(console)

    def test_no_color_overrides_terminal(self) -> None:
        console = create_console(no_color=True, force_terminal=True)
        console.print("ok", style="red")
        assert "\x1b[31" not in get_output(console)
