# Cmdspec CLI Templates — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by cmdspec.

Errors fall into two families. Definition errors describe defects in the
templates a program registers and surface at startup. Command line errors
describe mistakes in the arguments a user typed and are safe to pair with
rendered help text. Value conversion failures and handler exceptions are kept
apart from usage errors so callers can tell user mistakes from operational
failures.

Exception Hierarchy:
- CmdspecError
    ├── DefinitionError
    │     ├── TemplateSyntaxError
    │     ├── DuplicateNameError
    │     └── DefinitionReportError
    ├── CommandLineError
    ├── ValueConversionError
    ├── CommandNotFoundError
    ├── HelpNotAvailableError
    └── ConfigError
"""
from __future__ import annotations

SYNTAX_ERROR_PREFIX = "command line template syntax error! expected "


class CmdspecError(Exception):
    """Base exception for all cmdspec errors."""


class DefinitionError(CmdspecError):
    """Exception raised when a command or option definition is invalid."""


class TemplateSyntaxError(DefinitionError):
    """
    Exception raised when a template string cannot be compiled.

    Attributes:
        expected (str): Description of the construct the compiler expected.
        template (str): The full template text being compiled.
        remainder (str): The unparsed text at the point of failure.
        offset (int): Position of the remainder within the template.
    """

    def __init__(self, expected: str, template: str, remainder: str, offset: int):
        self.expected = expected
        self.template = template
        self.remainder = remainder
        self.offset = offset
        if not remainder or remainder == template:
            message = f'{SYNTAX_ERROR_PREFIX}{expected} in "{template}"'
        else:
            message = f'{SYNTAX_ERROR_PREFIX}{expected} at "{remainder}" of "{template}"'
        super().__init__(message)


class DuplicateNameError(DefinitionError):
    """Exception raised when a key or value name is already in use."""

    def __init__(self, name: str, message: str | None = None):
        self.name = name
        super().__init__(message or f'{SYNTAX_ERROR_PREFIX}unique argument "{name}"')


class DefinitionReportError(DefinitionError):
    """Exception raised to report every definition error collected at startup."""

    def __init__(self, errors: list[DefinitionError]):
        self.errors = list(errors)
        lines = "\n".join(f"  - {error}" for error in self.errors)
        super().__init__(f"{len(self.errors)} definition error(s):\n{lines}")


class CommandLineError(CmdspecError):
    """Exception raised when the user supplied arguments do not match the templates."""


class ValueConversionError(CmdspecError):
    """Exception raised when a value type provider cannot convert an argument."""

    def __init__(self, name: str, text: str, message: str):
        self.name = name
        self.text = text
        super().__init__(message)


class CommandNotFoundError(CmdspecError):
    """Exception raised when help is requested for a command that does not exist."""


class HelpNotAvailableError(CmdspecError):
    """Exception raised when a command has neither help text nor options."""


class ConfigError(CmdspecError):
    """Exception raised when a configuration file cannot be loaded."""
