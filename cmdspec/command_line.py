# Cmdspec CLI Templates — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `CommandLine`, the public entry point of cmdspec.

A `CommandLine` owns one registry of commands and global options, one output
console and the operations built on them: registration, processing,
help rendering and introspection.

Key Features:
- Compact templates (`"test:<string-flag1>,<string-flag2>"`) compiled and
  validated at registration
- Two-phase definition checking: raise immediately, or collect every
  definition error into a startup report
- Global options recognized anywhere on the command line
- Typed values through a pluggable value type provider
- Filterable, column aligned help text rendered with Rich

Example:
    cl = CommandLine()
    cl.register_command(run, "run:<int-count>?Runs the job", "[--dry-run]?Only print")
    cl.register_global_option(set_env, "--env:<string-env>?Target environment")
    try:
        cl.process(sys.argv[1:])
    except CommandLineError as error:
        cl.help(error, "tool", sys.argv[1:])
"""
from __future__ import annotations

import sys
from typing import Any

from rich.console import Console

from cmdspec.console import console as default_console
from cmdspec.dispatch import Dispatcher
from cmdspec.exceptions import (
    CmdspecError,
    CommandLineError,
    DefinitionError,
    DefinitionReportError,
)
from cmdspec.help import HelpRenderer, is_help_request
from cmdspec.logger import logger
from cmdspec.protocols import CommandHandler, ValueTypeProvider
from cmdspec.registry import Command, GlobalOption, Registry
from cmdspec.utils import get_program_invocation


class CommandLine:
    """
    Template driven command line parser and dispatcher.

    Args:
        value_types (ValueTypeProvider | None): Provider for value types.
            Defaults to `DefaultValueTypes`.
        console (Console | None): Output sink for help text. Defaults to the
            shared cmdspec console.
        strict (bool): Raise definition errors at registration. When False,
            failing registrations are skipped and their errors collected in
            `definition_errors`.
        app_name (str | None): Program name shown in usage text. Defaults to the
            current program invocation.
    """

    def __init__(
        self,
        value_types: ValueTypeProvider | None = None,
        console: Console | None = None,
        strict: bool = True,
        app_name: str | None = None,
    ) -> None:
        self.console = console or default_console
        self.registry = Registry(value_types)
        self.dispatcher = Dispatcher(self.registry, self.console)
        self.help_renderer = HelpRenderer(self.registry, self.console)
        self.strict = strict
        self.app_name = app_name
        self.definition_errors: list[DefinitionError] = []

    def _report(self, error: DefinitionError) -> None:
        if self.strict:
            raise error
        logger.error("Skipping invalid definition: %s", error)
        self.definition_errors.append(error)

    def register_command(
        self, handler: CommandHandler, *templates: str
    ) -> Command | None:
        """
        Register a command.

        Args:
            handler (CommandHandler): Called with the bound `Values`.
            *templates (str): The primary argument template followed by option
                templates.

        Returns:
            Command | None: The registered command, or None when a definition
                error was collected in non-strict mode.

        Raises:
            DefinitionError: In strict mode, if a template is malformed or a
                name collides.
        """
        try:
            return self.registry.add_command(handler, *templates)
        except DefinitionError as error:
            self._report(error)
            return None

    def register_global_option(
        self, handler: CommandHandler, template: str
    ) -> GlobalOption | None:
        """Register a global option. See `register_command` for error handling."""
        try:
            return self.registry.add_global_option(handler, template)
        except DefinitionError as error:
            self._report(error)
            return None

    def raise_for_definition_errors(self) -> None:
        """Raise `DefinitionReportError` if any definition error was collected."""
        if self.definition_errors:
            raise DefinitionReportError(self.definition_errors)

    def process(self, args: list[str] | None = None, context: Any = None) -> None:
        """
        Process a command line, running global option and command handlers.

        Args:
            args (list[str] | None): Arguments without the program name.
                Defaults to `sys.argv[1:]`.
            context (Any): Made available to handlers as `Values.context`.

        Raises:
            CommandLineError: If the arguments do not match the templates.
            ValueConversionError: If a value cannot be converted.
        """
        if args is None:
            args = sys.argv[1:]
        self.dispatcher.process(args, context)

    def primary_command(self, args: list[str]) -> str:
        return self.registry.primary_command(args)

    def print_command(self, name: str) -> None:
        self.help_renderer.print_command(name)

    def print_commands(self, filter_text: str = "", include_global: bool = True) -> None:
        self.help_renderer.print_commands(filter_text, include_global)

    def help(
        self,
        error: BaseException | None,
        app_name: str | None = None,
        args: list[str] | None = None,
    ) -> None:
        if args is None:
            args = sys.argv[1:]
        app_name = app_name or self.app_name or get_program_invocation()
        self.help_renderer.help(error, app_name, args)

    def summary(self) -> dict[str, Any]:
        return self.registry.summary()

    def run(self, args: list[str] | None = None, context: Any = None) -> int:
        """
        Process a command line and print help when it fails.

        Returns:
            int: 0 on success, 2 on a usage error, 1 on any other cmdspec error.
        """
        if args is None:
            args = sys.argv[1:]
        try:
            self.process(args, context)
        except CommandLineError as error:
            logger.debug("Usage error: %s", error)
            self.help(error, args=args)
            return 0 if is_help_request(args) else 2
        except CmdspecError as error:
            logger.error("Processing failed: %s", error)
            self.help(error, args=args)
            return 1
        return 0
