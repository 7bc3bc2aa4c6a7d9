"""Syntax highlighting for a parsed command.

The renderer is a pure function of the AST and the program registry: it
repaints each node with its color and re-emits the whitespace between nodes
as spaces, so the highlighted line lines up with the buffer.

Colors:
- program name: green if registered, red otherwise
- quoted templates: yellow
- variables: color 93
- switch prefixes, names and `=`: color 39, also used for a lone `-`
  that is likely the start of a switch
"""

from collections.abc import Container

from .. import ansi
from ..parser.ast import (
    Command,
    DoubleQuotedTemplate,
    LongSwitch,
    Parameter,
    Parameters,
    ParamLiteral,
    Program,
    ShortSwitch,
    SingleQuotedTemplate,
    Switch,
    Template,
    TemplateLiteral,
    UnquotedTemplate,
    Variable,
)


def white_space(size: int) -> str:
    return " " * max(size, 0)


def render_variable(variable: Variable) -> str:
    return ansi.paint(f"${variable.id.name}", ansi.VARIABLE)


def render_template(template: Template) -> str:
    if isinstance(template, SingleQuotedTemplate):
        return ansi.paint(f"'{template.raw.text}'", ansi.YELLOW)

    if isinstance(template, DoubleQuotedTemplate):
        middle = "".join(
            ansi.paint(part.value, ansi.YELLOW)
            if isinstance(part, TemplateLiteral)
            else render_variable(part)
            for part in template.body.parts
        )
        quote = ansi.paint('"', ansi.YELLOW)
        return f"{quote}{middle}{quote}"

    output = []
    for i, part in enumerate(template.body.parts):
        if isinstance(part, TemplateLiteral):
            if i == 0 and part.value == "-":
                # The user is probably about to type a switch.
                output.append(ansi.paint("-", ansi.SWITCH))
            else:
                output.append(part.value)
        else:
            output.append(render_variable(part))
    return "".join(output)


def render_switch(switch: Switch) -> str:
    output = ansi.paint(switch.name.name, ansi.SWITCH)
    if switch.value is not None:
        output += ansi.paint("=", ansi.SWITCH)
        output += render_template(switch.value)
    return output


def render_parameter(parameter: Parameter) -> str:
    param = parameter.param
    if isinstance(param, ParamLiteral):
        return render_template(param.literal)
    if isinstance(param, LongSwitch):
        return ansi.paint("--", ansi.SWITCH) + render_switch(param.switch)
    if isinstance(param, ShortSwitch):
        return ansi.paint("-", ansi.SWITCH) + render_switch(param.switch)
    raise TypeError(f"unknown parameter type: {type(param).__name__}")


def render_parameters(parameters: Parameters, prefix_index: int) -> str:
    """Render parameters, padding each with the gap since prefix_index."""
    output = []
    pos = prefix_index
    for param in parameters.params:
        output.append(white_space(param.span.start.index - pos))
        output.append(render_parameter(param))
        pos = param.span.end.index
    return "".join(output)


def render_program(program: Program, programs: Container[str]) -> str:
    color = ansi.GREEN if program.id.name in programs else ansi.RED
    return ansi.paint(program.id.name, color)


def render_command(command: Command, programs: Container[str]) -> str:
    """Highlight a command, keeping its original layout.

    Text past the last parameter (trailing spaces, comments, unparsed input)
    is left to the caller.
    """
    output = white_space(command.span.start.index) + render_program(command.program, programs)
    if command.parameters is not None:
        output += render_parameters(command.parameters, command.program.span.end.index)
    return output


def rendered_end(command: Command) -> int:
    """Index just past the last node render_command paints."""
    if command.parameters is not None:
        return command.parameters.params[-1].span.end.index
    return command.program.span.end.index
