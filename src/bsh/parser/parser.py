"""Recursive descent parser for the command grammar.

Grammar:
    command    := loose_ident (ws+ parameters)?
    parameters := parameter (ws+ parameter)* ws*
    parameter  := switch | literal
    switch     := ("--" | "-") loose_ident ("=" template)?
    literal    := template
    template   := "'" raw_text "'" | '"' body '"' | body
    body       := (literal_run | "$" strict_ident | "$")*
    comment    := "#" any_char*

Each rule either succeeds and leaves the cursor after what it consumed, or
raises ParseException with the cursor restored to where the rule started.
Alternatives are tried in order, so the first rule that matches wins.

Two entry points are provided:
- parse() is the best-effort mode used while the user is typing. It returns
  the command together with whatever text it could not consume.
- parse_strict() is used on submission and fails unless the whole input was
  consumed.
"""

import string
from typing import Callable, Optional, TypeVar

from .ast import (
    Command,
    Comment,
    DoubleQuotedTemplate,
    Identifier,
    LongSwitch,
    Param,
    Parameter,
    Parameters,
    ParamLiteral,
    Position,
    Program,
    RawText,
    ShortSwitch,
    SingleQuotedTemplate,
    Span,
    Switch,
    Template,
    TemplateBody,
    TemplateLiteral,
    TemplatePart,
    UnquotedTemplate,
    Variable,
)

T = TypeVar("T")

IDENTIFIER_CHARS = frozenset(string.ascii_letters + string.digits + "_?!")
LOOSE_IDENTIFIER_CHARS = IDENTIFIER_CHARS | frozenset("-.")

# Characters that end a literal run in every template body.
_BODY_STOP = frozenset('$\n"')
# Outside quotes a run also stops at single quotes and comments.
_UNQUOTED_STOP = _BODY_STOP | frozenset("'#")


class ParseException(Exception):
    """Raised when the input does not form a valid command."""

    def __init__(self, message: str, position: Optional[Position] = None):
        self.message = message
        self.position = position or Position()
        super().__init__(f"syntax error at {self.position}, {message}")


def _describe(char: str) -> str:
    if char == "":
        return "unexpected end of input"
    return f"unexpected character {char!r}"


class Parser:
    """Character-level recursive descent parser with backtracking."""

    def __init__(self, text: str):
        self.text = text
        self.pos = Position()
        self._furthest = Position()
        self._furthest_message = ""

    # Cursor primitives

    def peek(self, offset: int = 0) -> str:
        idx = self.pos.index + offset
        if idx < len(self.text):
            return self.text[idx]
        return ""

    def advance(self) -> str:
        char = self.text[self.pos.index]
        self.pos = self.pos.advance(char)
        return char

    def at_end(self) -> bool:
        return self.pos.index >= len(self.text)

    @property
    def remainder(self) -> str:
        return self.text[self.pos.index:]

    def fail(self, expected: str) -> ParseException:
        """Record a failure at the cursor and build the exception for it."""
        message = f"{_describe(self.peek())}, expected {expected}"
        if self.pos.index >= self._furthest.index:
            self._furthest = self.pos
            self._furthest_message = message
        return ParseException(message, self.pos)

    def expect(self, char: str) -> None:
        if self.peek() != char:
            raise self.fail(repr(char))
        self.advance()

    def attempt(self, rule: Callable[[], T]) -> Optional[T]:
        """Run a rule, rewinding and returning None if it fails."""
        start = self.pos
        try:
            return rule()
        except ParseException:
            self.pos = start
            return None

    def skip_whitespace(self) -> int:
        count = 0
        while not self.at_end() and self.peek().isspace():
            self.advance()
            count += 1
        return count

    def span_from(self, start: Position) -> Span:
        return Span(start, self.pos)

    # Grammar rules

    def _identifier(self, allowed: frozenset, expected: str) -> Identifier:
        start = self.pos
        while self.peek() and self.peek() in allowed:
            self.advance()
        if self.pos == start:
            raise self.fail(expected)
        return Identifier(self.text[start.index:self.pos.index], self.span_from(start))

    def identifier(self) -> Identifier:
        """Strict identifier, used for variable names."""
        return self._identifier(IDENTIFIER_CHARS, "identifier")

    def loose_identifier(self) -> Identifier:
        """Identifier that may also contain '-' and '.'."""
        return self._identifier(LOOSE_IDENTIFIER_CHARS, "name")

    def variable(self) -> Variable:
        start = self.pos
        try:
            self.expect("$")
            ident = self.identifier()
        except ParseException:
            self.pos = start
            raise
        return Variable(ident, self.span_from(start))

    def template_literal(self, quoted: bool) -> TemplateLiteral:
        start = self.pos
        while not self.at_end():
            char = self.peek()
            if quoted:
                if char in _BODY_STOP:
                    break
            elif char in _UNQUOTED_STOP or char.isspace():
                break
            self.advance()
        if self.pos == start:
            raise self.fail("text")
        return TemplateLiteral(self.text[start.index:self.pos.index], self.span_from(start))

    def single_dollar(self) -> TemplateLiteral:
        start = self.pos
        self.expect("$")
        return TemplateLiteral("$", self.span_from(start))

    def template_part(self, quoted: bool) -> TemplatePart:
        for rule in (lambda: self.template_literal(quoted), self.variable, self.single_dollar):
            part = self.attempt(rule)
            if part is not None:
                return part
        raise self.fail("template text or variable")

    def template_body(self, quoted: bool) -> TemplateBody:
        start = self.pos
        parts: list[TemplatePart] = []
        while True:
            part = self.attempt(lambda: self.template_part(quoted))
            if part is None:
                break
            parts.append(part)
        # Inside quotes the body may be empty; unquoted it may not.
        if not parts and not quoted:
            raise self.fail("template")
        return TemplateBody(parts, self.span_from(start))

    def raw_text(self) -> RawText:
        start = self.pos
        while not self.at_end() and self.peek() != "'":
            self.advance()
        return RawText(self.text[start.index:self.pos.index], self.span_from(start))

    def single_quoted(self) -> Template:
        start = self.pos
        try:
            self.expect("'")
            raw = self.raw_text()
            self.expect("'")
        except ParseException:
            self.pos = start
            raise
        return SingleQuotedTemplate(raw)

    def double_quoted(self) -> Template:
        start = self.pos
        try:
            self.expect('"')
            body = self.template_body(quoted=True)
            self.expect('"')
        except ParseException:
            self.pos = start
            raise
        return DoubleQuotedTemplate(body)

    def unquoted(self) -> Template:
        return UnquotedTemplate(self.template_body(quoted=False))

    def template(self) -> Template:
        for rule in (self.single_quoted, self.double_quoted, self.unquoted):
            template = self.attempt(rule)
            if template is not None:
                return template
        raise self.fail("template")

    def switch(self) -> Switch:
        start = self.pos
        name = self.loose_identifier()
        value = None
        if self.peek() == "=":
            self.advance()
            value = self.template()
        return Switch(name, value, self.span_from(start))

    def short_switch(self) -> Param:
        start = self.pos
        try:
            self.expect("-")
            # `--` always introduces a long switch.
            if self.peek() == "-":
                raise self.fail("switch name")
            return ShortSwitch(self.switch())
        except ParseException:
            self.pos = start
            raise

    def long_switch(self) -> Param:
        start = self.pos
        try:
            self.expect("-")
            self.expect("-")
            return LongSwitch(self.switch())
        except ParseException:
            self.pos = start
            raise

    def literal(self) -> Param:
        start = self.pos
        template = self.template()
        return ParamLiteral(template, self.span_from(start))

    def parameter(self) -> Parameter:
        start = self.pos
        for rule in (self.short_switch, self.long_switch, self.literal):
            param = self.attempt(rule)
            if param is not None:
                return Parameter(param, self.span_from(start))
        raise self.fail("parameter")

    def parameters(self) -> Parameters:
        start = self.pos
        params = [self.parameter()]
        while True:
            if not self.skip_whitespace():
                break
            param = self.attempt(self.parameter)
            if param is None:
                break
            params.append(param)
        return Parameters(params, self.span_from(start))

    def program(self) -> Program:
        start = self.pos
        ident = self.loose_identifier()
        return Program(ident, self.span_from(start))

    def command(self) -> Command:
        start = self.pos
        program = self.program()
        self.skip_whitespace()
        parameters = self.attempt(self.parameters)
        return Command(program, parameters, self.span_from(start))

    def comment(self) -> Comment:
        self.expect("#")
        start = self.pos
        while not self.at_end() and self.peek() != "\n":
            self.advance()
        return Comment(self.text[start.index:self.pos.index], self.span_from(start))

    # Entry points

    def parse_partial(self) -> Command:
        self.skip_whitespace()
        command = self.command()
        self.attempt(self.comment)
        return command

    def parse_complete(self) -> Command:
        command = self.parse_partial()
        self.skip_whitespace()
        if not self.at_end():
            if self._furthest.index > self.pos.index:
                raise ParseException(self._furthest_message, self._furthest)
            raise ParseException(_describe(self.peek()), self.pos)
        return command


def parse(text: str) -> tuple[Command, str]:
    """Parse as much of text as forms a command.

    Returns the command and the unconsumed remainder. Raises ParseException
    only when no command name can be read at all.
    """
    parser = Parser(text)
    command = parser.parse_partial()
    return command, parser.remainder


def parse_strict(text: str) -> Command:
    """Parse text as exactly one command, optionally followed by a comment."""
    return Parser(text).parse_complete()
