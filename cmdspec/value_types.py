# Cmdspec CLI Templates — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the built-in value types and the default value type provider.

Templates name the type of every value (`<int-count>`, `<path-output>`). The
compiler resolves those names through a provider when a template is registered,
and the binder calls the same provider to convert raw argument text when a
command line is processed.

`ValueKind` enumerates the built-in types. `DefaultValueTypes` dispatches over
those kinds and hands any type it does not know to an optional delegate, so
applications can add types without subclassing.

Exports:
    - ValueKind: Enum of the built-in value types.
    - TypeAttributes: Resolved kind and default value for a type name.
    - DefaultValueTypes: The default provider.

Example:
    ValueKind("float64")  → ValueKind.FLOAT (via alias)
    DefaultValueTypes().make_value(ValueKind.INT, "12") → 12
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Hashable

from dateutil import parser as date_parser

from cmdspec.protocols import ValueTypeProvider

TRUE_STRINGS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
FALSE_STRINGS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


class ValueKind(Enum):
    """
    Built-in value types understood by `DefaultValueTypes`.

    Members:
        BOOL: Strict boolean (`1`, `t`, `true`, `0`, `f`, `false`, ...).
        INT: Base 10 integer.
        FLOAT: Floating point number.
        STRING: Raw text.
        PATH: Filesystem path made absolute.
        DATETIME: Date and time parsed with dateutil.

    Aliases:
        - "float64" → "float"
        - "str" → "string"
        - "integer" → "int"
        - "boolean" → "bool"
    """

    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    PATH = "path"
    DATETIME = "datetime"

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "float64": "float",
            "str": "string",
            "integer": "int",
            "boolean": "bool",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> ValueKind:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        alias = cls._get_alias(value)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TypeAttributes:
    """Kind and default value resolved for one type name."""

    kind: Hashable
    default: Any


def parse_bool(text: str) -> bool:
    if text in TRUE_STRINGS:
        return True
    if text in FALSE_STRINGS:
        return False
    raise ValueError(f"invalid boolean value {text!r}")


def parse_int(text: str) -> int:
    try:
        return int(text, 10)
    except ValueError:
        raise ValueError(f"invalid integer value {text!r}") from None


def parse_float(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        raise ValueError(f"invalid float value {text!r}") from None


def parse_datetime(text: str) -> datetime:
    try:
        return date_parser.parse(text)
    except (ValueError, OverflowError) as error:
        raise ValueError(f"invalid datetime value {text!r}") from error


class DefaultValueTypes:
    """
    Default value type provider.

    Supports `bool`, `int`, `float` (alias `float64`), `string`, `path` and
    `datetime`. Any other type name, and any kind that is not a `ValueKind`, is
    forwarded to `delegate` when one is given.

    Args:
        delegate (ValueTypeProvider | None): Provider consulted for types this
            provider does not handle.
    """

    def __init__(self, delegate: ValueTypeProvider | None = None) -> None:
        self.delegate = delegate

    def type_name_to_attributes(
        self, type_name: str, template: str
    ) -> TypeAttributes | None:
        try:
            kind = ValueKind(type_name)
        except ValueError:
            if self.delegate:
                return self.delegate.type_name_to_attributes(type_name, template)
            return None
        return TypeAttributes(kind=kind, default=self.default_for(kind))

    @staticmethod
    def default_for(kind: ValueKind) -> Any:
        match kind:
            case ValueKind.BOOL:
                return False
            case ValueKind.INT:
                return 0
            case ValueKind.FLOAT:
                return 0.0
            case ValueKind.DATETIME:
                return None
            case _:
                return ""

    def make_value(self, kind: Hashable, text: str) -> Any:
        match kind:
            case ValueKind.BOOL:
                return parse_bool(text)
            case ValueKind.INT:
                return parse_int(text)
            case ValueKind.FLOAT:
                return parse_float(text)
            case ValueKind.STRING:
                return text
            case ValueKind.PATH:
                return os.path.abspath(text)
            case ValueKind.DATETIME:
                return parse_datetime(text)
            case _:
                return self._delegate_for(kind).make_value(kind, text)

    def new_list(self, kind: Hashable) -> list[Any]:
        if isinstance(kind, ValueKind):
            return []
        return self._delegate_for(kind).new_list(kind)

    def append_list(self, kind: Hashable, values: list[Any], text: str) -> list[Any]:
        if not isinstance(kind, ValueKind):
            return self._delegate_for(kind).append_list(kind, values, text)
        values.append(self.make_value(kind, text))
        return values

    def _delegate_for(self, kind: Hashable) -> ValueTypeProvider:
        if self.delegate is None:
            raise TypeError(f"No value type provider handles kind {kind!r}")
        return self.delegate
