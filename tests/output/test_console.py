"""Tests for Rich Console factory and theme."""

from io import StringIO

from followgraph.output.console import FOLLOW_THEME, create_console, get_output


class TestCreateConsole:
    def test_returns_console_with_stringio(self) -> None:
        assert isinstance(create_console().file, StringIO)

    def test_no_color_disables_ansi(self) -> None:
        console = create_console(no_color=True)
        console.print("[fg.error]hello[/fg.error]")
        output = get_output(console)
        assert "\x1b" not in output
        assert "hello" in output

    def test_widths(self) -> None:
        assert create_console().width == 120
        assert create_console(width=80).width == 80


class TestTheme:
    def test_styles_defined(self) -> None:
        for name in ("fg.ok", "fg.error", "fg.username", "fg.count"):
            assert name in FOLLOW_THEME.styles
