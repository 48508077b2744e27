# Cmdspec CLI Templates — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Renders help text for the commands and global options of a `Registry`.

Output is a two column report: the display form of each argument on the left
and its help text on the right. Rendering happens in two passes over a queue
of lines:

1. The river, the column where descriptions start, is the widest left column
   plus two spaces, capped at 30.
2. Each line is emitted with its description padded to the river and wrapped
   greedily on spaces at 120 columns. Blank lines inside a description are
   kept, with consecutive blank lines collapsed to one.

The whole report is buffered and written to the console in one call, under a
lock, so concurrent renders do not interleave.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass, field

from rich.console import Console

from cmdspec.exceptions import (
    CommandLineError,
    CommandNotFoundError,
    HelpNotAvailableError,
)
from cmdspec.logger import logger
from cmdspec.parser import UNNAMED_KEY, ArgSpec
from cmdspec.registry import Command, Registry

MAX_LINE_WIDTH = 120
MAX_RIVER = 30
RIVER_SPACES = 2
HELP_SWITCHES = ("help", "--help")
SEARCH_HINT_THRESHOLD = 10


@dataclass
class HelpLine:
    text: str
    description: str = ""
    indent: int = 0
    columns: int = 1


def sort_key(text: str) -> tuple[str, str]:
    """Case-insensitive ordering with uppercase first on ties."""
    return text.lower(), text


def layout_columns(
    arg: str, river: int, description: str, width: int = MAX_LINE_WIDTH
) -> list[str]:
    """Lay out one two column entry, returning the rendered lines."""
    lines: list[str] = []
    current = ""
    column = 0
    if arg:
        current = arg
        column = len(arg)
        if not description:
            return [arg]
        if column >= river:
            lines.append(current)
            current = ""
            column = 0

    blank_emitted = False
    for source_line in description.split("\n"):
        if not source_line.strip():
            if column > 0:
                lines.append(current)
                current = ""
                column = 0
            elif not blank_emitted:
                lines.append("")
                blank_emitted = True
            continue

        blank_emitted = False
        remaining = source_line
        while remaining:
            if column < river:
                current += " " * (river - column)
                column = river

            piece = remaining
            if column + len(piece) > width:
                cut = -1
                while True:
                    next_cut = piece.find(" ", cut + 1)
                    if next_cut < 0 or next_cut + column > width:
                        break
                    cut = next_cut
                if cut > 0:
                    piece = piece[:cut]

            lines.append(current + piece.strip())
            current = ""
            column = 0
            remaining = remaining[len(piece) :].strip()
    return lines


@dataclass
class HelpBuffer:
    """Queue of help lines rendered in one pass."""

    lines: list[HelpLine] = field(default_factory=list)

    def println(self, text: str) -> None:
        self.lines.append(HelpLine(text=text))

    def columns(self, indent: int, arg_text: str, description: str) -> None:
        if arg_text:
            self.lines.append(
                HelpLine(text=arg_text, description=description, indent=indent, columns=2)
            )
        elif description:
            self.lines.append(HelpLine(text="  " * indent + description, columns=2))

    def blank(self) -> None:
        """Add a blank line unless the queue is empty or already ends in one."""
        if self.lines and self.lines[-1].text:
            self.println("")

    def blank_first(self) -> None:
        """Add a leading blank line to an empty queue."""
        if not self.lines:
            self.println("")

    def river(self) -> int:
        river = 0
        for line in self.lines:
            if line.columns < 2:
                continue
            width = len("  " * line.indent + line.text)
            if width > 0:
                river = max(river, min(width + RIVER_SPACES, MAX_RIVER))
        return river

    def render(self) -> str:
        river = self.river()
        output: list[str] = []
        for line in self.lines:
            arg = "  " * line.indent + line.text
            if line.columns == 1:
                output.append(arg)
            else:
                output.extend(layout_columns(arg, river, line.description))
        return "".join(f"{text}\n" for text in output)


def is_help_request(args: list[str]) -> bool:
    """Whether `args` ask for the help listing rather than a command."""
    return bool(args) and (args[0] in HELP_SWITCHES or args[0].endswith("?"))


def matches_filter(spec: ArgSpec, text: str) -> bool:
    return text in spec.key.lower() or text in spec.help.lower()


def should_show(primary: ArgSpec, options: list[ArgSpec], filter_text: str) -> bool:
    """Whether an argument, or any of its options, matches the help filter."""
    text = filter_text.strip().lower()
    if not text:
        return True
    return matches_filter(primary, text) or any(
        matches_filter(option, text) for option in options
    )


class HelpRenderer:
    """
    Renders help for one `Registry` to one `Console`.

    Args:
        registry (Registry): Commands and global options to describe.
        console (Console): Output sink.
    """

    def __init__(self, registry: Registry, console: Console) -> None:
        self.registry = registry
        self.console = console
        self._lock = threading.Lock()

    def flush(self, buffer: HelpBuffer) -> None:
        text = buffer.render()
        with self._lock:
            self.console.out(text, highlight=False, end="")

    def queue_command(self, buffer: HelpBuffer, name: str) -> None:
        want_unnamed = name in ("", UNNAMED_KEY)
        if want_unnamed:
            name = UNNAMED_KEY

        command = self.registry.commands.get(name)
        if command is None:
            if want_unnamed:
                raise CommandNotFoundError("unnamed command not found")
            raise CommandNotFoundError(f'command "{name}" not found')

        if not command.primary.help and not command.options:
            if want_unnamed:
                raise HelpNotAvailableError("help not available for the unnamed command")
            raise HelpNotAvailableError(f'help not available for the "{name}" command')

        option_indent = 1
        arg_text = str(command.primary)
        if arg_text:
            buffer.columns(0, arg_text, command.primary.help)
        elif command.primary.help:
            buffer.println(command.primary.help)
        else:
            option_indent = 0

        for option in command.options.values():
            buffer.columns(option_indent, str(option), option.help)

    def queue_commands(
        self, buffer: HelpBuffer, filter_text: str, include_global: bool
    ) -> None:
        registry = self.registry

        global_partial = False
        globals_to_print = []
        if include_global:
            for global_option in registry.global_options.values():
                if should_show(global_option.spec, [], filter_text):
                    globals_to_print.append(global_option)
                else:
                    global_partial = True

        filter_text = filter_text.strip().lower()

        command_partial = False
        commands_to_print: list[Command] = []
        for command in registry.commands.values():
            options = list(command.options.values())
            if not should_show(command.primary, options, filter_text):
                command_partial = True
                continue
            if (
                not command.primary.unnamed
                or command.primary.help
                or command.has_arguments
            ):
                commands_to_print.append(command)

        single = (
            next(iter(registry.commands.values())) if len(registry.commands) == 1 else None
        )
        simple_description = (
            single is not None
            and single.primary.unnamed
            and bool(single.primary.help)
            and not single.has_arguments
        )

        if globals_to_print:
            if global_partial:
                buffer.println("Matching Global Options:")
            else:
                buffer.println("Global Options:")
            buffer.blank()
            for global_option in sorted(globals_to_print, key=lambda g: sort_key(str(g))):
                buffer.columns(1, str(global_option), global_option.spec.help)
            buffer.blank()

        if commands_to_print:
            option_indent = 2
            if command_partial:
                buffer.println("Matching Commands:")
            elif len(registry.commands) > 1:
                buffer.println("All Commands:")
            elif simple_description and single is not None:
                buffer.println(f"Description: {single.primary.help}")
                option_indent = 1
            else:
                buffer.println("Command Options:")
                if single is not None and single.primary.unnamed:
                    option_indent = 1
            buffer.blank()

            for command in sorted(commands_to_print, key=lambda c: sort_key(str(c.primary))):
                if not simple_description:
                    arg_text = str(command.primary)
                    if arg_text:
                        buffer.columns(option_indent - 1, arg_text, command.primary.help)
                    elif command.primary.help:
                        buffer.println(command.primary.help)
                        buffer.blank()
                for option in command.options.values():
                    buffer.columns(option_indent, str(option), option.help)
            buffer.blank()
        elif not globals_to_print:
            has_arguments = any(
                command.has_arguments for command in registry.commands.values()
            )
            buffer.blank_first()
            if filter_text:
                buffer.println(f"No commands match help filter '{filter_text}'.")
            elif not has_arguments:
                buffer.println("This command has no options.")
            else:
                buffer.println("No help is available.")
            buffer.blank()

    def print_command(self, name: str) -> None:
        """
        Print help for one command.

        Args:
            name (str): The command key, or "" / "~" for the unnamed command.

        Raises:
            CommandNotFoundError: If no such command is registered.
            HelpNotAvailableError: If the command has no help text or options.
        """
        buffer = HelpBuffer()
        self.queue_command(buffer, name)
        self.flush(buffer)

    def print_commands(self, filter_text: str = "", include_global: bool = True) -> None:
        buffer = HelpBuffer()
        self.queue_commands(buffer, filter_text, include_global)
        self.flush(buffer)

    def _queue_usage(self, buffer: HelpBuffer, app_name: str) -> None:
        registry = self.registry
        if not registry.global_options:
            options = ""
        elif len(registry.commands) == 1:
            options = " <options>"
        else:
            options = " <global options>"

        command_options = ""
        if any(command.has_arguments for command in registry.commands.values()):
            command_options = " <options>"
        if command_options == options:
            command_options = ""

        command_token = "" if registry.unnamed_mode else " <command>"

        buffer.println(f"Usage: {app_name}{options}{command_token}{command_options}")
        buffer.blank()
        self.queue_commands(buffer, "", True)

        help_length = 0
        for command in registry.commands.values():
            help_length += 60 + len(command.primary.help) + len(str(command.primary))
            for option in command.options.values():
                help_length += 60 + len(option.help) + len(str(option))

        if help_length // 60 < SEARCH_HINT_THRESHOLD:
            return

        sample = next(iter(registry.commands), "")
        buffer.blank()
        if sample in ("", UNNAMED_KEY):
            buffer.println(f"Search help with: {app_name} --help <filter text>")
        else:
            buffer.println(
                f"Search help with {app_name} --help <filter text>. "
                f"Example: {app_name} --help {sample}"
            )
            buffer.println(
                f"Or, put a question mark on the end. Example: {app_name} {sample}?"
            )
        buffer.blank()

    def help(self, error: BaseException | None, app_name: str, args: list[str]) -> None:
        """
        Print the help that fits a processing outcome.

        With no error or a `CommandLineError`:
        - `help` / `--help [filter]` or a single `text?` token prints the
          filtered listing.
        - Arguments naming a command print that command's help after a
          syntax error notice.
        - Anything else prints full usage.

        Any other error prints just its message.
        """
        buffer = HelpBuffer()
        if error is not None and not isinstance(error, CommandLineError):
            buffer.println("")
            buffer.println(str(error))
            buffer.println("")
        elif is_help_request(args):
            filter_text = ""
            if args[0] in HELP_SWITCHES:
                if len(args) == 2:
                    filter_text = args[1]
            elif len(args) == 1:
                filter_text = args[0]
            if filter_text.endswith("?"):
                filter_text = filter_text[:-1]
                if filter_text in ("-", "--"):
                    filter_text = ""
            self.queue_commands(buffer, filter_text, True)
        elif args and (name := self.registry.primary_command(args)):
            buffer.blank_first()
            buffer.println("Syntax error.")
            buffer.blank()
            buffer.println("Command Help:")
            buffer.blank()
            try:
                self.queue_command(buffer, name)
            except HelpNotAvailableError:
                logger.debug("No help text registered for '%s'.", name)
            buffer.blank()
        else:
            self._queue_usage(buffer, app_name)
        self.flush(buffer)
