import io

import pytest
from rich.console import Console

from cmdspec import CommandLine


@pytest.fixture
def recording_console():
    """A console that writes to a buffer instead of the terminal."""
    return Console(file=io.StringIO(), width=200)


@pytest.fixture
def cl(recording_console):
    return CommandLine(console=recording_console, app_name="unit-test")


@pytest.fixture
def output(recording_console):
    """Return everything written to the recording console so far and reset it."""

    def read() -> str:
        text = recording_console.file.getvalue()
        recording_console.file.seek(0)
        recording_console.file.truncate()
        return text

    return read
