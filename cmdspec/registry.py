# Cmdspec CLI Templates — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Holds the commands and global options registered on a `CommandLine`.

Every registration compiles its templates, then re-validates name uniqueness
across the whole registry before anything is added:

- Global option keys and their value names share one namespace.
- Every command key joins that namespace.
- Within one command, the primary value names, option keys and option value
  names must be unique and must not collide with the shared namespace.

Value names may repeat across different commands, since only one command binds
per invocation.

A command whose key is `~` is the unnamed command. It is invoked without a
command token, but only while it is the sole registered command. Registering
any further command turns unnamed mode off for good.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from cmdspec.exceptions import DefinitionError, DuplicateNameError
from cmdspec.logger import logger
from cmdspec.parser import ArgSpec, compile_template, split_colon
from cmdspec.protocols import CommandHandler, ValueTypeProvider
from cmdspec.value_types import DefaultValueTypes


@dataclass
class Command:
    """
    A handler with its primary argument and options.

    Attributes:
        handler (CommandHandler): Called with the bound values.
        primary (ArgSpec): The command identifying argument.
        options (dict[str, ArgSpec]): Options keyed by their literal token, in
            registration order.
    """

    handler: CommandHandler
    primary: ArgSpec
    options: dict[str, ArgSpec] = field(default_factory=dict)

    @property
    def key(self) -> str:
        return self.primary.key

    @property
    def has_arguments(self) -> bool:
        return bool(self.options or self.primary.value_specs)


@dataclass
class GlobalOption:
    """A handler with an option recognized anywhere on the command line."""

    handler: CommandHandler
    spec: ArgSpec

    @property
    def key(self) -> str:
        return self.spec.key

    def __str__(self) -> str:
        return str(self.spec)


def _claim(names: set[str], name: str) -> None:
    if name in names:
        raise DuplicateNameError(name)
    names.add(name)


class Registry:
    """
    Owning collection of commands and global options.

    Args:
        value_types (ValueTypeProvider | None): Provider used to resolve type
            names and convert values. Defaults to `DefaultValueTypes`.
    """

    def __init__(self, value_types: ValueTypeProvider | None = None) -> None:
        self.value_types: ValueTypeProvider = value_types or DefaultValueTypes()
        self.commands: dict[str, Command] = {}
        self.global_options: dict[str, GlobalOption] = {}
        self.unnamed_command: Command | None = None

    def build_command(self, handler: CommandHandler, *templates: str) -> Command:
        if not templates:
            raise DefinitionError("a primary argument template is required")
        if not callable(handler):
            raise DefinitionError(f"handler for {templates[0]!r} is not callable")

        primary = compile_template(
            templates[0], primary=True, value_types=self.value_types
        )
        command = Command(handler=handler, primary=primary)
        for template in templates[1:]:
            option = compile_template(template, value_types=self.value_types)
            if option.key in command.options:
                raise DuplicateNameError(option.key)
            command.options[option.key] = option
        return command

    def add_command(self, handler: CommandHandler, *templates: str) -> Command:
        command = self.build_command(handler, *templates)
        self.check_unique_names(new_command=command)

        self.commands[command.key] = command
        if len(self.commands) == 1 and command.primary.unnamed:
            self.unnamed_command = command
        else:
            if self.unnamed_command is not None:
                logger.warning(
                    "Registering '%s' disables the unnamed command.", command.key
                )
            self.unnamed_command = None
        logger.debug("Registered command '%s'.", command.key)
        return command

    def add_global_option(self, handler: CommandHandler, template: str) -> GlobalOption:
        if not callable(handler):
            raise DefinitionError(f"handler for {template!r} is not callable")
        spec = compile_template(template, value_types=self.value_types)
        global_option = GlobalOption(handler=handler, spec=spec)
        self.check_unique_names(new_global_option=global_option)

        self.global_options[global_option.key] = global_option
        logger.debug("Registered global option '%s'.", global_option.key)
        return global_option

    def check_unique_names(
        self,
        new_command: Command | None = None,
        new_global_option: GlobalOption | None = None,
    ) -> None:
        """
        Validate name uniqueness across the registry plus a pending addition.

        Raises:
            DuplicateNameError: If any key or value name collides.
        """
        global_options: list[GlobalOption] = list(self.global_options.values())
        if new_global_option is not None:
            global_options.append(new_global_option)
        commands: list[Command] = list(self.commands.values())
        if new_command is not None:
            commands.append(new_command)

        names: set[str] = set()
        for global_option in global_options:
            _claim(names, global_option.key)
            for name in global_option.spec.names:
                _claim(names, name)

        for command in commands:
            _claim(names, command.key)
            command_names = set(names)
            for name in command.primary.names:
                _claim(command_names, name)
            for option in command.options.values():
                _claim(command_names, option.key)
                for name in option.names:
                    _claim(command_names, name)

    @property
    def unnamed_mode(self) -> bool:
        return self.unnamed_command is not None

    def primary_command(self, args: Iterable[str]) -> str:
        """
        Return the key of the first command named in `args`, or "".

        Tokens naming a global option are skipped.
        """
        remaining = [
            arg for arg in args if split_colon(arg)[0] not in self.global_options
        ]
        for arg in remaining:
            switch, _ = split_colon(arg)
            if switch in self.commands:
                return switch
        return ""

    def summary(self) -> dict[str, Any]:
        """
        Describe the registered commands as plain data.

        Returns:
            dict: `{"unnamed": {...}}` in unnamed mode, otherwise
                `{"named": [...]}`. Each entry maps "primary" to
                `{display: help}` and, when the command has options, "options"
                to `{display: help}`. A "global" entry lists global options.
        """

        def describe(command: Command) -> dict[str, Any]:
            entry: dict[str, Any] = {
                "primary": {str(command.primary): command.primary.help}
            }
            if command.options:
                entry["options"] = {
                    str(option): option.help for option in command.options.values()
                }
            return entry

        result: dict[str, Any]
        if self.unnamed_command is not None:
            result = {"unnamed": describe(self.unnamed_command)}
        else:
            result = {"named": [describe(command) for command in self.commands.values()]}
        if self.global_options:
            result["global"] = {
                str(global_option): global_option.spec.help
                for global_option in self.global_options.values()
            }
        return result
