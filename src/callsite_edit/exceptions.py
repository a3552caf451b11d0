"""Failure taxonomy for call-site rewriting."""

from __future__ import annotations


class RewriteError(RuntimeError):
    """Fatal rewrite failure.

    Every failure aborts the whole run. The message names the operation, the
    function, the source path and, when the failure is tied to one, the line.
    """

    exit_code = 1

    def __init__(
        self,
        reason: str,
        *,
        operation: str = "",
        fn_name: str = "",
        path: str = "",
        line_number: int | None = None,
    ) -> None:
        self.reason = reason
        self.operation = operation
        self.fn_name = fn_name
        self.path = path
        self.line_number = line_number
        super().__init__(self._render())

    def _render(self) -> str:
        location = self.path or "<source>"
        if self.line_number is not None:
            location = f"{location}:{self.line_number}"
        operation = self.operation or "rewrite"
        if self.fn_name:
            return f"{operation} {self.fn_name!r} failed at {location}: {self.reason}"
        return f"{operation} failed at {location}: {self.reason}"


class SourceReadError(RewriteError):
    exit_code = 2


class PatternError(RewriteError):
    exit_code = 2


class StructuralMismatchError(RewriteError):
    """A matched call whose argument span could not be located."""


class EditIndexError(RewriteError):
    """An argument index outside the call's current argument list."""


class OutputWriteError(RewriteError):
    """The rewritten document or the run summary could not be written."""
