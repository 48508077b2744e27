# Cmdspec CLI Templates — (c) 2025 rtj.dev LLC — MIT Licensed
"""values.py"""
from __future__ import annotations

from typing import Any

from rich.console import Console


class Values(dict):
    """
    Mapping of keys and value names to the values bound for one invocation.

    Command and option keys map to `True` when present on the command line and
    `False` when optional and absent. Value names map to their converted value,
    or to a list for repeatable values.

    Attributes:
        context (Any): Caller supplied object passed through `process()`.
        console (Console | None): Output sink of the owning `CommandLine`.
    """

    def __init__(
        self, *args, context: Any = None, console: Console | None = None, **kwargs
    ) -> None:
        super().__init__(*args, **kwargs)
        self.context = context
        self.console = console

    def __repr__(self) -> str:
        return f"Values({dict.__repr__(self)})"
