# Cmdspec CLI Templates — (c) 2025 rtj.dev LLC — MIT Licensed
"""utils.py"""
from __future__ import annotations

import logging
import os
import shutil
import sys
from pathlib import Path

import pythonjsonlogger.json
from rich.logging import RichHandler

LOG_MODES = ("cli", "json")
JSON_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
TEXT_LOG_FORMAT = "%(asctime)s [%(name)s] [%(levelname)s] %(message)s"
CONTAINER_MARKERS = ("docker", "kubepods", "containerd", "podman")


def get_program_invocation() -> str:
    """Returns the program name to show in usage lines."""
    script = sys.argv[0]
    program = shutil.which(script)
    if program:
        return os.path.basename(program)
    if "python" in sys.executable:
        return f"python {script}"
    return script


def running_in_container(cgroup_file: Path = Path("/proc/1/cgroup")) -> bool:
    try:
        content = cgroup_file.read_text(encoding="UTF-8")
    except OSError:
        return False
    return any(marker in content for marker in CONTAINER_MARKERS)


def resolve_log_mode(mode: str | None) -> str:
    """Pick the console log mode: explicit, then `CMDSPEC_LOG_MODE`, then auto."""
    mode = mode or os.getenv("CMDSPEC_LOG_MODE")
    if not mode:
        return "json" if running_in_container() else "cli"
    if mode not in LOG_MODES:
        raise ValueError(f"Invalid log mode: {mode}")
    return mode


def _json_formatter() -> logging.Formatter:
    return pythonjsonlogger.json.JsonFormatter(JSON_LOG_FORMAT)


def build_console_handler(mode: str, level: int) -> logging.Handler:
    handler: logging.Handler
    if mode == "cli":
        handler = RichHandler(
            rich_tracebacks=True,
            show_path=False,
            markup=False,
            log_time_format="[%Y-%m-%d %H:%M:%S]",
        )
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(_json_formatter())
    handler.setLevel(level)
    return handler


def build_file_handler(filename: str, level: int, as_json: bool) -> logging.Handler:
    handler = logging.FileHandler(filename, "a", "UTF-8")
    handler.setLevel(level)
    if as_json:
        handler.setFormatter(_json_formatter())
    else:
        handler.setFormatter(
            logging.Formatter(TEXT_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        )
    return handler


def setup_logging(
    mode: str | None = None,
    log_filename: str | None = "cmdspec.log",
    json_log_to_file: bool = False,
    file_log_level: int = logging.DEBUG,
    console_log_level: int = logging.WARNING,
) -> None:
    """
    Configure root logging for a program built on cmdspec.

    Replaces the root handlers with a console handler and, unless
    `log_filename` is None, a file handler. cmdspec itself only logs through
    the "cmdspec" logger, so programs that already configure logging need not
    call this.

    Args:
        mode (str | None):
            "cli" for Rich console logs or "json" for structured logs. Falls
            back to `CMDSPEC_LOG_MODE`, then to "json" inside a container and
            "cli" elsewhere.
        log_filename (str | None): Log file path. None disables file logging.
        json_log_to_file (bool): Write the file log as JSON lines.
        file_log_level (int): Level for the file handler.
        console_log_level (int): Level for the console handler.

    Raises:
        ValueError: If `mode` is not "cli" or "json".
    """
    mode = resolve_log_mode(mode)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.handlers.clear()
    root.addHandler(build_console_handler(mode, console_log_level))
    if log_filename:
        root.addHandler(
            build_file_handler(log_filename, file_log_level, json_log_to_file)
        )

    logger = logging.getLogger("cmdspec")
    logger.propagate = True
    logger.debug("Logging initialized in '%s' mode.", mode)
