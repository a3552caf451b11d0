"""Callsite-edit package root."""

from callsite_edit.exceptions import (
    EditIndexError,
    OutputWriteError,
    PatternError,
    RewriteError,
    SourceReadError,
    StructuralMismatchError,
)

__all__ = [
    "__version__",
    "EditIndexError",
    "OutputWriteError",
    "PatternError",
    "RewriteError",
    "SourceReadError",
    "StructuralMismatchError",
]

__version__ = "0.1.0"
