"""Tests for parameter to argument transformation."""

from bsh.interpreter import SwitchArgument, TextArgument, Transformer
from bsh.parser import parse


def _transform(text: str, variables=None, text_only=False):
    command, rest = parse(text)
    assert rest == ""
    return Transformer(variables or {}, text_only).transform(command.parameters)


class TestTransformer:
    """Test variable expansion and switch conversion."""

    def test_double_quoted_expansion(self):
        assert _transform('echo "hi $name"', {"name": "there"}) == [TextArgument("hi there")]

    def test_unquoted_expansion(self):
        assert _transform("echo $a-$b", {"a": "1", "b": "2"}) == [TextArgument("1-2")]

    def test_unknown_variable_is_empty(self):
        assert _transform("echo x$missing") == [TextArgument("x")]

    def test_single_quoted_is_verbatim(self):
        assert _transform("echo '$name'", {"name": "there"}) == [TextArgument("$name")]

    def test_structured_switches(self):
        assert _transform("cmd -x --flag=val") == [
            SwitchArgument("x", None, long=False),
            SwitchArgument("flag", "val", long=True),
        ]

    def test_switch_value_expansion(self):
        assert _transform('cmd --out="$dir/log"', {"dir": "/tmp"}) == [
            SwitchArgument("out", "/tmp/log", long=True),
        ]

    def test_text_only(self):
        arguments = _transform("cmd -x --flag=val plain", text_only=True)
        assert arguments == [TextArgument("-x"), TextArgument("--flag=val"), TextArgument("plain")]

    def test_to_texts(self):
        transformer = Transformer({})
        arguments = [TextArgument("a"), SwitchArgument("b", "c", long=False)]
        assert transformer.to_texts(arguments) == ["a", "-b=c"]


class TestArguments:
    def test_switch_to_text(self):
        assert SwitchArgument("v").to_text() == "--v"
        assert SwitchArgument("v", long=False).to_text() == "-v"
        assert SwitchArgument("o", "f", long=False).to_text() == "-o=f"
