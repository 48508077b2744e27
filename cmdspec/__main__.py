"""
Cmdspec CLI Templates

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import os
import sys
from pathlib import Path

from cmdspec.config import loader
from cmdspec.console import console
from cmdspec.exceptions import CmdspecError
from cmdspec.logger import logger


def find_cmdspec_config() -> Path | None:
    candidates = [
        Path.cwd() / "cmdspec.yaml",
        Path.cwd() / "cmdspec.toml",
        Path.cwd() / ".cmdspec.yaml",
        Path.cwd() / ".cmdspec.toml",
        Path.home() / ".config" / "cmdspec" / "cmdspec.yaml",
        Path.home() / ".config" / "cmdspec" / "cmdspec.toml",
    ]
    env_config = os.environ.get("CMDSPEC_CONFIG")
    if env_config:
        candidates.insert(0, Path(env_config))
    return next((p for p in candidates if p.exists()), None)


def bootstrap() -> Path | None:
    config_path = find_cmdspec_config()
    if config_path and str(config_path.parent) not in sys.path:
        sys.path.insert(0, str(config_path.parent))
    return config_path


def main(args: list[str] | None = None) -> int:
    config_path = bootstrap()
    if not config_path:
        console.print(
            "No cmdspec config found. Create cmdspec.yaml in the current directory, "
            "in ~/.config/cmdspec/, or point CMDSPEC_CONFIG at one.",
            markup=False,
            highlight=False,
        )
        return 1

    try:
        command_line = loader(config_path)
        command_line.raise_for_definition_errors()
    except CmdspecError as error:
        logger.error("Could not load '%s': %s", config_path, error)
        console.print(str(error), markup=False, highlight=False)
        return 1

    return command_line.run(args)


if __name__ == "__main__":
    sys.exit(main())
