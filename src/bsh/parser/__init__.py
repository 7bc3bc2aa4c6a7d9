"""Parser module for bsh."""

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
from .parser import (
    IDENTIFIER_CHARS,
    LOOSE_IDENTIFIER_CHARS,
    Parser,
    ParseException,
    parse,
    parse_strict,
)

__all__ = [
    # AST
    "Command",
    "Comment",
    "DoubleQuotedTemplate",
    "Identifier",
    "LongSwitch",
    "Param",
    "Parameter",
    "Parameters",
    "ParamLiteral",
    "Position",
    "Program",
    "RawText",
    "ShortSwitch",
    "SingleQuotedTemplate",
    "Span",
    "Switch",
    "Template",
    "TemplateBody",
    "TemplateLiteral",
    "TemplatePart",
    "UnquotedTemplate",
    "Variable",
    # Parser
    "IDENTIFIER_CHARS",
    "LOOSE_IDENTIFIER_CHARS",
    "Parser",
    "ParseException",
    "parse",
    "parse_strict",
]
