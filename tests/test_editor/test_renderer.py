"""Tests for syntax highlighting."""

from bsh import ansi
from bsh.editor import render_command, rendered_end
from bsh.editor.renderer import render_template, white_space
from bsh.parser import Parser, parse


def _render(text: str, programs=("echo", "test")) -> str:
    command, _ = parse(text)
    return render_command(command, programs)


class TestRenderer:
    """Test coloring and layout of rendered commands."""

    def test_known_program_is_green(self):
        assert _render("echo") == ansi.paint("echo", ansi.GREEN)

    def test_unknown_program_is_red(self):
        assert _render("nope") == ansi.paint("nope", ansi.RED)

    def test_keeps_whitespace(self):
        assert _render(" test   ab cd") == " " + ansi.paint("test", ansi.GREEN) + "   ab cd"

    def test_white_space(self):
        assert white_space(3) == "   "
        assert white_space(-1) == ""

    def test_single_quoted(self):
        template = Parser("'a $b'").template()
        assert render_template(template) == ansi.paint("'a $b'", ansi.YELLOW)

    def test_double_quoted_with_variable(self):
        template = Parser('"hi $name"').template()
        quote = ansi.paint('"', ansi.YELLOW)
        assert render_template(template) == (
            quote + ansi.paint("hi ", ansi.YELLOW) + ansi.paint("$name", ansi.VARIABLE) + quote
        )

    def test_unquoted_variable(self):
        assert _render("echo $x") == (
            ansi.paint("echo", ansi.GREEN) + " " + ansi.paint("$x", ansi.VARIABLE)
        )

    def test_switches(self):
        expected = (
            ansi.paint("echo", ansi.GREEN)
            + " "
            + ansi.paint("-", ansi.SWITCH)
            + ansi.paint("x", ansi.SWITCH)
            + " "
            + ansi.paint("--", ansi.SWITCH)
            + ansi.paint("flag", ansi.SWITCH)
            + ansi.paint("=", ansi.SWITCH)
            + "val"
        )
        assert _render("echo -x --flag=val") == expected

    def test_lone_dash_highlighted(self):
        assert _render("echo -") == ansi.paint("echo", ansi.GREEN) + " " + ansi.paint("-", ansi.SWITCH)

    def test_rendered_end(self):
        command, _ = parse("echo a b  ")
        assert rendered_end(command) == 8
        command, _ = parse("  echo")
        assert rendered_end(command) == 6

    def test_visible_text_matches_input(self):
        text = "  echo -x --y='z' \"a$b\" c"
        command, rest = parse(text)
        rendered = render_command(command, ["echo"])
        assert rest == ""
        assert ansi.visible_width(rendered) == rendered_end(command)
