# Cmdspec CLI Templates — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Configuration loader for cmdspec command lines."""
from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any

import toml
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from cmdspec.command_line import CommandLine
from cmdspec.exceptions import ConfigError
from cmdspec.logger import logger


def import_handler(dotted_path: str) -> Any:
    """Dynamically imports an object from a dotted path like 'my.module.func'."""
    module_path, _, attr = dotted_path.rpartition(".")
    if not module_path:
        raise ConfigError(f"Invalid handler path: {dotted_path}")
    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as error:
        logger.error("Failed to import module '%s': %s", module_path, error)
        raise ConfigError(
            f"Could not import '{dotted_path}': {error}. Ensure the module is "
            "installed and discoverable via PYTHONPATH."
        ) from error
    try:
        return getattr(module, attr)
    except AttributeError as error:
        logger.error(
            "Module '%s' does not have attribute '%s': %s", module_path, attr, error
        )
        raise ConfigError(
            f"Module '{module_path}' has no attribute '{attr}'"
        ) from error


class RawGlobalOption(BaseModel):
    """Raw global option model for cmdspec configuration."""

    template: str
    handler: str


class RawCommand(BaseModel):
    """Raw command model for cmdspec configuration."""

    template: str
    handler: str
    options: list[str] = Field(default_factory=list)

    @field_validator("options", mode="before")
    @classmethod
    def validate_options(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        return value


class CommandLineConfig(BaseModel):
    """cmdspec configuration model."""

    app_name: str | None = None
    strict: bool = True
    value_types: str | None = None
    global_options: list[RawGlobalOption] = Field(default_factory=list)
    commands: list[RawCommand]

    @field_validator("commands")
    @classmethod
    def validate_commands(cls, value: list[RawCommand]) -> list[RawCommand]:
        if not value:
            raise ValueError("at least one command must be configured")
        return value

    def to_command_line(self) -> CommandLine:
        value_types = None
        if self.value_types:
            value_types = import_handler(self.value_types)()

        command_line = CommandLine(
            value_types=value_types,
            strict=self.strict,
            app_name=self.app_name,
        )
        for raw_option in self.global_options:
            command_line.register_global_option(
                import_handler(raw_option.handler), raw_option.template
            )
        for raw_command in self.commands:
            command_line.register_command(
                import_handler(raw_command.handler),
                raw_command.template,
                *raw_command.options,
            )
        return command_line


def loader(file_path: Path | str) -> CommandLine:
    """
    Load a cmdspec command line from a YAML or TOML file.

    The file should contain a dictionary with a list of commands. Each command
    is a dictionary with:
    - template: the primary argument template
    - handler: dotted import path to the handler function
    - options: optional list of option templates

    Args:
        file_path (Path | str): Path to the config file (YAML or TOML).

    Returns:
        CommandLine: A command line with the configured registrations.

    Raises:
        ConfigError: If the file is missing, unsupported, malformed, or names a
            handler that cannot be imported.
        DefinitionError: If a template is invalid and `strict` is enabled.
    """
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise ConfigError(f"No such config file: {file_path}")

    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as config_file:
        try:
            if suffix in (".yaml", ".yml"):
                raw_config = yaml.safe_load(config_file)
            elif suffix == ".toml":
                raw_config = toml.load(config_file)
            else:
                raise ConfigError(f"Unsupported config format: {suffix}")
        except (yaml.YAMLError, toml.TomlDecodeError) as error:
            raise ConfigError(f"Could not parse {path}: {error}") from error

    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a dictionary with a list of commands.\n"
            "Example:\n"
            "app_name: 'tool'\n"
            "commands:\n"
            "  - template: 'run?Runs the job'\n"
            "    handler: 'my_module.run'"
        )

    try:
        config = CommandLineConfig.model_validate(raw_config)
    except ValidationError as error:
        raise ConfigError(f"Invalid configuration in {path}:\n{error}") from error

    logger.debug(
        "Loaded %d command(s) and %d global option(s) from '%s'.",
        len(config.commands),
        len(config.global_options),
        path,
    )
    return config.to_command_line()
