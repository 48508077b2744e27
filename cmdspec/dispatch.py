# Cmdspec CLI Templates — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Maps a process argument list onto the registered commands and runs them.

Processing is a single pass with no backtracking:

1. Global scan: every token naming a global option is bound and queued. All
   other tokens are kept for the command.
2. Global execution: queued global handlers run in the order they appeared.
3. Command resolution: the unnamed command when unnamed mode is active,
   otherwise the command named by the first remaining token.
4. Primary binding, then an option scan over the remaining tokens.
5. Defaulting: missing required options fail; absent optional options are
   recorded as `False` and their values take type defaults.
6. Invocation of the command handler.

Usage problems raise `CommandLineError`. Conversion failures raise
`ValueConversionError`. Handler exceptions propagate unchanged.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from rich.console import Console

from cmdspec.exceptions import CommandLineError, DefinitionError
from cmdspec.logger import logger
from cmdspec.parser import ArgSpec, bind_arg_spec, split_colon
from cmdspec.registry import Command, GlobalOption, Registry
from cmdspec.values import Values


@dataclass
class GlobalOptionToRun:
    """A global option bound during the global scan, waiting to run."""

    option: GlobalOption
    values: Values


class Dispatcher:
    """
    Runs one command line against a `Registry`.

    All per-call state lives on the stack of `process()`, so concurrent calls
    are safe once registration is finished.

    Args:
        registry (Registry): Source of commands and global options.
        console (Console): Output sink handed to handlers through `Values`.
    """

    def __init__(self, registry: Registry, console: Console) -> None:
        self.registry = registry
        self.console = console

    def _new_values(self, context: Any) -> Values:
        return Values(context=context, console=self.console)

    def _apply_defaults(self, values: Values, spec: ArgSpec) -> None:
        values.setdefault(spec.key, False)
        for value_spec in spec.value_specs:
            if value_spec.name not in values:
                if spec.is_multi_value(value_spec):
                    values[value_spec.name] = self.registry.value_types.new_list(
                        value_spec.kind
                    )
                else:
                    values[value_spec.name] = value_spec.default

    def scan_global_options(
        self, args: list[str], context: Any
    ) -> tuple[list[GlobalOptionToRun], list[str]]:
        to_run: list[GlobalOptionToRun] = []
        command_args: list[str] = []
        index = 0
        while index < len(args):
            arg = args[index]
            switch, inline_value = split_colon(arg)
            global_option = self.registry.global_options.get(switch)
            if global_option is None:
                command_args.append(arg)
                index += 1
                continue
            values = self._new_values(context)
            used = bind_arg_spec(
                global_option.spec,
                values,
                inline_value,
                args[index + 1 :],
                self.registry.value_types,
            )
            to_run.append(GlobalOptionToRun(option=global_option, values=values))
            index += used + 1
        return to_run, command_args

    def resolve_command(self, args: list[str]) -> tuple[Command, str | None, int]:
        """Return the command, its inline primary value and the tokens it names."""
        unnamed = self.registry.unnamed_command
        if unnamed is not None:
            return unnamed, None, 0
        if not args:
            raise CommandLineError("a command is required")
        switch, inline_value = split_colon(args[0])
        command = self.registry.commands.get(switch)
        if command is None:
            raise CommandLineError(f"unrecognized command: {switch}")
        return command, inline_value, 1

    def bind_options(self, command: Command, values: Values, args: list[str]) -> None:
        required = [key for key, option in command.options.items() if not option.optional]
        seen: set[str] = set()
        index = 0
        while index < len(args):
            switch, inline_value = split_colon(args[index])
            option = command.options.get(switch)
            if option is None:
                raise CommandLineError(f"unrecognized command argument: {switch}")
            values[switch] = True
            used = bind_arg_spec(
                option, values, inline_value, args[index + 1 :], self.registry.value_types
            )
            seen.add(switch)
            index += used + 1

        missing = [key for key in required if key not in seen]
        if missing:
            raise CommandLineError(f"arguments required: {', '.join(missing)}")

        for option in command.options.values():
            if option.optional:
                self._apply_defaults(values, option)

    def process(self, args: list[str], context: Any = None) -> None:
        """
        Process one command line.

        Args:
            args (list[str]): Arguments without the program name.
            context (Any): Object made available to handlers as `Values.context`.

        Raises:
            DefinitionError: If no command is registered.
            CommandLineError: If the arguments do not match the templates.
            ValueConversionError: If a value cannot be converted.
        """
        if not self.registry.commands:
            raise DefinitionError("at least one command must be registered")

        to_run, command_args = self.scan_global_options(list(args), context)
        for global_option in to_run:
            logger.debug("Running global option '%s'.", global_option.option.key)
            global_option.option.handler(global_option.values)

        command, inline_value, consumed = self.resolve_command(command_args)
        values = self._new_values(context)
        used = bind_arg_spec(
            command.primary,
            values,
            inline_value,
            command_args[consumed:],
            self.registry.value_types,
        )
        self.bind_options(command, values, command_args[consumed + used :])
        self._apply_defaults(values, command.primary)

        logger.debug("Running command '%s' with %r.", command.key, values)
        command.handler(values)
