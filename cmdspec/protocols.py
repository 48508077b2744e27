# Cmdspec CLI Templates — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines structural protocols for the pluggable parts of cmdspec.

These runtime-checkable `Protocol` classes specify the expected interfaces for:
- Value type providers that resolve type names and convert argument text
- Handlers invoked for commands and global options

Protocols:
- ValueTypeProvider: Resolves `<type-name>` and converts raw text to typed values.
- CommandHandler: Callable receiving the bound `Values` of one invocation.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Hashable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cmdspec.value_types import TypeAttributes
    from cmdspec.values import Values


@runtime_checkable
class ValueTypeProvider(Protocol):
    def type_name_to_attributes(
        self, type_name: str, template: str
    ) -> TypeAttributes | None: ...

    def make_value(self, kind: Hashable, text: str) -> Any: ...

    def new_list(self, kind: Hashable) -> list[Any]: ...

    def append_list(self, kind: Hashable, values: list[Any], text: str) -> list[Any]: ...


@runtime_checkable
class CommandHandler(Protocol):
    def __call__(self, values: Values) -> Any: ...
