# Cmdspec CLI Templates — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Compiles command line templates into `ArgSpec` descriptors.

Template grammar:

    spec      := ["*"] ( "[" body "]" | body ) ["?" helptext]
    body      := key [ (":"|" ") valuelist ]
    valuelist := valuespec (sep valuespec)*
    valuespec := "[" sep? "*"? "<" typename "-" name ">" "]"
               | sep? "*"? "<" typename "-" name ">"
    sep       := "," | " "

Examples:
    test:<string-flag1>,<string-flag2>
    *[-t:<string-tflag>]?Adds a tag
    -x[:<bool-v1>][,<bool-v2>]
    --create <string-user> [<int-uid>]
    ~ <path-file>

Malformed templates raise `TemplateSyntaxError` carrying the expected construct
and the unparsed remainder. Type names are resolved through a value type
provider; names it does not know are rejected.
"""
from __future__ import annotations

import re

from cmdspec.exceptions import DuplicateNameError, TemplateSyntaxError
from cmdspec.logger import logger
from cmdspec.parser.arg_spec import UNNAMED_KEY, ArgSpec, ValueSpec
from cmdspec.protocols import ValueTypeProvider
from cmdspec.value_types import DefaultValueTypes

TOKEN_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
ARGUMENT_TOKEN = re.compile(r"[A-Za-z_](?:[A-Za-z0-9_-]*[A-Za-z0-9_])?")

_default_value_types = DefaultValueTypes()


def is_token_name(text: str) -> bool:
    return TOKEN_NAME.fullmatch(text) is not None


def is_argument_token(key: str) -> bool:
    """Whether `key`, minus one or two leading dashes, is a valid token."""
    trimmed = key.removeprefix("-").removeprefix("-")
    return ARGUMENT_TOKEN.fullmatch(trimmed) is not None


class TemplateCursor:
    """Read position over one section of a template."""

    def __init__(self, template: str, text: str, origin: int = 0) -> None:
        self.template = template
        self.text = text
        self.origin = origin
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self, ahead: int = 0) -> str:
        index = self.pos + ahead
        return self.text[index] if index < len(self.text) else ""

    def advance(self, count: int = 1) -> None:
        self.pos += count

    def find(self, token: str) -> int:
        return self.text.find(token, self.pos)

    def error(self, expected: str, pos: int | None = None) -> TemplateSyntaxError:
        if pos is None:
            pos = self.pos
        return TemplateSyntaxError(
            expected=expected,
            template=self.template,
            remainder=self.text[pos:],
            offset=self.origin + pos,
        )


def _compile_value_spec(
    cursor: TemplateCursor,
    values_delim: str,
    value_delim: str,
    previous: list[ValueSpec],
    value_types: ValueTypeProvider,
) -> tuple[ValueSpec, str]:
    if previous and previous[-1].multi:
        raise cursor.error("repeatable value spec to be last")

    optional = False
    char = cursor.peek()
    if char == "[":
        optional = True
        cursor.advance()
        char = cursor.peek()
    elif char == " " and cursor.peek(1) == "[":
        optional = True
        cursor.advance()

    if previous:
        if char not in (",", " "):
            raise cursor.error("value delimiter")
        if not value_delim:
            if char == " " and values_delim == ":":
                raise cursor.error("comma-separated value spec list")
            value_delim = char
        elif value_delim != char:
            raise cursor.error("uniform value delimiter")
        cursor.advance()
        char = cursor.peek()

    multi = False
    if char == "*":
        multi = True
        cursor.advance()
        char = cursor.peek()

    if char != "<":
        raise cursor.error("'<'")
    cursor.advance()

    dash = cursor.find("-")
    if dash < 0:
        raise cursor.error("'-'")
    type_name = cursor.text[cursor.pos : dash]
    attributes = value_types.type_name_to_attributes(type_name, cursor.template)
    if attributes is None:
        raise cursor.error("valid value type")
    cursor.pos = dash + 1

    close = cursor.find(">")
    if close < 0:
        raise cursor.error("'>'")
    name = cursor.text[cursor.pos : close]
    if not is_token_name(name):
        raise cursor.error("valid option name")
    cursor.pos = close + 1

    if optional:
        if cursor.peek() != "]":
            raise cursor.error("']'")
        cursor.advance()

    if any(value_spec.name == name for value_spec in previous):
        raise DuplicateNameError(
            name, f'duplicate value spec "{name}" in "{cursor.template}"'
        )

    value_spec = ValueSpec(
        name=name,
        kind=attributes.kind,
        type_name=type_name,
        optional=optional,
        multi=multi,
        default=attributes.default,
    )
    return value_spec, value_delim


def _compile_value_list(
    cursor: TemplateCursor, values_delim: str, value_types: ValueTypeProvider
) -> tuple[tuple[ValueSpec, ...], str]:
    if cursor.at_end():
        raise cursor.error("value spec")

    value_specs: list[ValueSpec] = []
    value_delim = ""
    while not cursor.at_end():
        value_spec, value_delim = _compile_value_spec(
            cursor, values_delim, value_delim, value_specs, value_types
        )
        value_specs.append(value_spec)
    return tuple(value_specs), value_delim


def compile_template(
    template: str,
    primary: bool = False,
    value_types: ValueTypeProvider | None = None,
) -> ArgSpec:
    """
    Compile one template into an `ArgSpec`.

    Args:
        template (str): The template text, including optional help text.
        primary (bool): True when compiling the primary argument of a command.
        value_types (ValueTypeProvider | None): Provider used to resolve type
            names. Defaults to `DefaultValueTypes`.

    Returns:
        ArgSpec: The compiled descriptor.

    Raises:
        TemplateSyntaxError: If the template is malformed or violates the
            primary or option rules.
        DuplicateNameError: If two values in the template share a name.
    """
    value_types = value_types or _default_value_types

    body = template
    help_text = ""
    help_cut = body.rfind("?")
    if help_cut >= 0:
        help_text = body[help_cut + 1 :]
        body = body[:help_cut]

    start = 0
    multi = body.startswith("*")
    if multi:
        body = body[1:]
        start += 1

    optional = body.startswith("[") and body.endswith("]")
    if optional:
        body = body[1:-1]
        start += 1

    key_cursor = TemplateCursor(template, body, start)
    values_delim = ""
    value_delim = ""
    value_specs: tuple[ValueSpec, ...] = ()

    match = re.search(r"[: ]", body)
    if match is None:
        key = body
    else:
        delim_index = match.start()
        key = body[:delim_index]
        values_delim = body[delim_index]
        rest = body[delim_index + 1 :]
        origin = start + delim_index + 1
        if key.endswith("["):
            key = key[:-1]
            rest = f"[{rest}"
            origin -= 1
        value_specs, value_delim = _compile_value_list(
            TemplateCursor(template, rest, origin), values_delim, value_types
        )

    if not key:
        raise key_cursor.error("argument name")

    unnamed = key == UNNAMED_KEY
    if not unnamed and not is_argument_token(key):
        raise key_cursor.error("a valid argument token")

    if primary:
        if optional:
            raise key_cursor.error("non-optional primary argument")
        if multi:
            raise key_cursor.error("single-value primary argument")
        if unnamed and values_delim == ":":
            raise key_cursor.error("unnamed argument without a value spec")
    elif unnamed:
        raise key_cursor.error("named secondary argument")

    spec = ArgSpec(
        key=key,
        unnamed=unnamed,
        optional=optional,
        multi=multi,
        values_delim=values_delim,
        value_delim=value_delim,
        value_specs=value_specs,
        help=help_text,
    )
    logger.debug("Compiled template %r into %r", template, spec)
    return spec
