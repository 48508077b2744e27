# Cmdspec CLI Templates — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Binds command line tokens to the values of one `ArgSpec`.

Binding precedence:
- An inline value (`-x:value`) is used first.
- Otherwise a space delimited spec consumes the next token that does not start
  with a dash.
- Comma separated values are split and distributed in order. When fewer values
  are supplied than declared, the last supplied value fills the rest.
- Space separated values consume one token each. A repeatable value absorbs
  every further token that does not start with a dash.

Shared by primary command binding, option binding and global option binding.
"""
from __future__ import annotations

from typing import Any

from cmdspec.exceptions import CommandLineError, ValueConversionError
from cmdspec.parser.arg_spec import ArgSpec, ValueSpec
from cmdspec.protocols import ValueTypeProvider


def split_colon(token: str) -> tuple[str, str | None]:
    """Split a token at its first colon into (switch, inline value)."""
    switch, separator, value = token.partition(":")
    return switch, value if separator else None


def is_bare(token: str) -> bool:
    return not token.startswith("-")


def default_for(
    spec: ArgSpec, value_spec: ValueSpec, value_types: ValueTypeProvider
) -> Any:
    if spec.is_multi_value(value_spec):
        return value_types.new_list(value_spec.kind)
    return value_spec.default


def store_value(
    spec: ArgSpec,
    value_spec: ValueSpec,
    values: dict[str, Any],
    text: str,
    value_types: ValueTypeProvider,
) -> None:
    try:
        if spec.is_multi_value(value_spec):
            current = values.get(value_spec.name)
            if current is None:
                current = value_types.new_list(value_spec.kind)
            values[value_spec.name] = value_types.append_list(
                value_spec.kind, current, text
            )
        else:
            values[value_spec.name] = value_types.make_value(value_spec.kind, text)
    except ValueError as error:
        raise ValueConversionError(value_spec.name, text, str(error)) from error


def _collect_space_values(
    spec: ArgSpec, inline_value: str | None, following: list[str]
) -> tuple[list[str], int]:
    parts = [] if inline_value is None else [inline_value]
    used = 0
    for index, value_spec in enumerate(spec.value_specs):
        if index >= len(parts):
            if used >= len(following) or not is_bare(following[used]):
                break
            parts.append(following[used])
            used += 1
        if value_spec.multi:
            while used < len(following) and is_bare(following[used]):
                parts.append(following[used])
                used += 1
    return parts, used


def bind_arg_spec(
    spec: ArgSpec,
    values: dict[str, Any],
    inline_value: str | None,
    following: list[str],
    value_types: ValueTypeProvider,
) -> int:
    """
    Bind the values of `spec` into `values`.

    Args:
        spec (ArgSpec): The argument being bound.
        values (dict[str, Any]): Mapping receiving the converted values.
        inline_value (str | None): Text after the first colon of the token.
        following (list[str]): Tokens after the one naming `spec`.
        value_types (ValueTypeProvider): Provider converting raw text.

    Returns:
        int: Number of tokens from `following` consumed.

    Raises:
        CommandLineError: If a required value is missing or a value was given
            to an argument that takes none.
        ValueConversionError: If the provider rejects a value.
    """
    used = 0
    source = inline_value
    if source is None and spec.values_delim == " ":
        if following and is_bare(following[0]):
            source = following[0]
            used = 1

    value_specs = spec.value_specs
    if source is None:
        if value_specs and not value_specs[0].optional:
            raise CommandLineError(f"required value {value_specs[0].name} is missing")
        for value_spec in value_specs:
            if value_spec.name not in values:
                values[value_spec.name] = default_for(spec, value_spec, value_types)
    elif not value_specs:
        raise CommandLineError(f"unexpected command argument: {source}")
    elif len(value_specs) == 1:
        value_spec = value_specs[0]
        store_value(spec, value_spec, values, source, value_types)
        if value_spec.multi and spec.values_delim == " ":
            while used < len(following) and is_bare(following[used]):
                store_value(spec, value_spec, values, following[used], value_types)
                used += 1
    else:
        if spec.value_delim == ",":
            parts = source.split(",")
        else:
            parts, used = _collect_space_values(spec, inline_value, following)

        for index, value_spec in enumerate(value_specs):
            if index >= len(parts):
                if spec.value_delim == ",":
                    store_value(spec, value_spec, values, parts[-1], value_types)
                    continue
                if not value_spec.optional:
                    raise CommandLineError(f"required value {value_spec.name} is missing")
                for skipped in value_specs[index:]:
                    if skipped.name not in values:
                        values[skipped.name] = default_for(spec, skipped, value_types)
                break
            if value_spec.multi:
                for part in parts[index:]:
                    store_value(spec, value_spec, values, part, value_types)
            else:
                store_value(spec, value_spec, values, parts[index], value_types)

    values[spec.key] = True
    return used
