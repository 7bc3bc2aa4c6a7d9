"""Turn parsed parameters into program arguments.

Variables are expanded against the variable store; an unknown variable
expands to the empty string. Single-quoted text is passed through verbatim.

In structured mode switches become SwitchArgument values. In text-only mode
every argument is flattened to a string (`--name=value`, `-name`, ...), for
programs that only accept a list of strings.
"""

from collections.abc import Mapping

from ..parser.ast import (
    LongSwitch,
    Parameter,
    Parameters,
    ParamLiteral,
    RawText,
    SingleQuotedTemplate,
    Switch,
    Template,
    TemplateBody,
    TemplateLiteral,
    Variable,
)
from .types import Argument, SwitchArgument, TextArgument


class Transformer:
    def __init__(self, variables: Mapping[str, str], text_only: bool = False):
        self._variables = variables
        self._text_only = text_only

    def transform(self, parameters: Parameters) -> list[Argument]:
        return [self.parameter(param) for param in parameters.params]

    def to_texts(self, arguments: list[Argument]) -> list[str]:
        return [argument.to_text() for argument in arguments]

    def parameter(self, parameter: Parameter) -> Argument:
        param = parameter.param
        if isinstance(param, ParamLiteral):
            return TextArgument(self.template(param.literal))
        return self.switch(param.switch, long=isinstance(param, LongSwitch))

    def switch(self, switch: Switch, long: bool) -> Argument:
        value = self.template(switch.value) if switch.value is not None else None
        argument = SwitchArgument(switch.name.name, value, long)
        if self._text_only:
            return TextArgument(argument.to_text())
        return argument

    def template(self, template: Template) -> str:
        if isinstance(template, SingleQuotedTemplate):
            return self.raw_text(template.raw)
        return self.template_body(template.body)

    def raw_text(self, raw: RawText) -> str:
        return raw.text

    def template_body(self, body: TemplateBody) -> str:
        return "".join(
            self.template_literal(part) if isinstance(part, TemplateLiteral) else self.variable(part)
            for part in body.parts
        )

    def template_literal(self, literal: TemplateLiteral) -> str:
        return literal.value

    def variable(self, variable: Variable) -> str:
        return self._variables.get(variable.id.name, "")
