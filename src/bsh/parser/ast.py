"""AST node types for the command grammar.

Every node records the Span of input text it was parsed from. Nodes are
plain dataclasses; the parser creates a fresh tree for every call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass(frozen=True, order=True)
class Position:
    """A location in the parsed text.

    line and column are 1-based; index is the 0-based offset into the
    string.
    """

    line: int = 1
    column: int = 1
    index: int = 0

    def advance(self, char: str) -> Position:
        if char == "\n":
            return Position(self.line + 1, 1, self.index + 1)
        return Position(self.line, self.column + 1, self.index + 1)

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class Span:
    """Half-open range [start, end) of the input."""

    start: Position = field(default_factory=Position)
    end: Position = field(default_factory=Position)


@dataclass
class Identifier:
    name: str
    span: Span = field(default_factory=Span)


@dataclass
class Variable:
    """A `$name` reference."""

    id: Identifier
    span: Span = field(default_factory=Span)


@dataclass
class TemplateLiteral:
    """Raw text between variables of a template body."""

    value: str
    span: Span = field(default_factory=Span)


TemplatePart = Union[TemplateLiteral, Variable]


@dataclass
class TemplateBody:
    parts: list[TemplatePart]
    span: Span = field(default_factory=Span)


@dataclass
class RawText:
    """Contents of a single-quoted template, never interpolated."""

    text: str
    span: Span = field(default_factory=Span)


@dataclass
class UnquotedTemplate:
    body: TemplateBody


@dataclass
class SingleQuotedTemplate:
    raw: RawText


@dataclass
class DoubleQuotedTemplate:
    body: TemplateBody


Template = Union[UnquotedTemplate, SingleQuotedTemplate, DoubleQuotedTemplate]


@dataclass
class Switch:
    name: Identifier
    value: Optional[Template] = None
    span: Span = field(default_factory=Span)


@dataclass
class ParamLiteral:
    literal: Template
    span: Span = field(default_factory=Span)


@dataclass
class ShortSwitch:
    """`-name[=value]`"""

    switch: Switch


@dataclass
class LongSwitch:
    """`--name[=value]`"""

    switch: Switch


Param = Union[ParamLiteral, ShortSwitch, LongSwitch]


@dataclass
class Parameter:
    param: Param
    span: Span = field(default_factory=Span)


@dataclass
class Parameters:
    """Non-empty list of parameters; absence is None on the Command."""

    params: list[Parameter]
    span: Span = field(default_factory=Span)


@dataclass
class Program:
    id: Identifier
    span: Span = field(default_factory=Span)


@dataclass
class Command:
    """Parse root: a program name and its optional parameters."""

    program: Program
    parameters: Optional[Parameters] = None
    span: Span = field(default_factory=Span)


@dataclass
class Comment:
    """Trailing `#...` text, excluding the `#`."""

    content: str
    span: Span = field(default_factory=Span)
