# Cmdspec CLI Templates — (c) 2025 rtj.dev LLC — MIT Licensed
"""Default console instance used when a CommandLine is not given its own."""
from rich.console import Console

console = Console(color_system="truecolor")
