"""
Cmdspec CLI Templates

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .arg_spec import UNNAMED_KEY, ArgSpec, ValueSpec
from .binder import bind_arg_spec, split_colon
from .compiler import TemplateCursor, compile_template

__all__ = [
    "ArgSpec",
    "ValueSpec",
    "UNNAMED_KEY",
    "TemplateCursor",
    "bind_arg_spec",
    "compile_template",
    "split_colon",
]
