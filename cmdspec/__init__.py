"""
Cmdspec CLI Templates

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .command_line import CommandLine
from .exceptions import (
    CmdspecError,
    CommandLineError,
    CommandNotFoundError,
    ConfigError,
    DefinitionError,
    DefinitionReportError,
    DuplicateNameError,
    HelpNotAvailableError,
    TemplateSyntaxError,
    ValueConversionError,
)
from .logger import logger
from .parser import ArgSpec, ValueSpec, compile_template
from .value_types import DefaultValueTypes, TypeAttributes, ValueKind
from .values import Values


__all__ = [
    "CommandLine",
    "Values",
    "ArgSpec",
    "ValueSpec",
    "compile_template",
    "DefaultValueTypes",
    "TypeAttributes",
    "ValueKind",
    "CmdspecError",
    "CommandLineError",
    "CommandNotFoundError",
    "ConfigError",
    "DefinitionError",
    "DefinitionReportError",
    "DuplicateNameError",
    "HelpNotAvailableError",
    "TemplateSyntaxError",
    "ValueConversionError",
]
