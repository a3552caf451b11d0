from __future__ import annotations

from pathlib import Path
import re
from typing import Iterator

from callsite_edit.exceptions import RewriteError, SourceReadError
from callsite_edit.rewrite.editor import apply_edit, join_arguments
from callsite_edit.rewrite.locator import compile_call_pattern, iter_call_sites
from callsite_edit.rewrite.model import (
    CallSite,
    RewriteRequest,
    RewriteSummary,
    RewrittenLine,
)

_LINE_SPLIT_RE = re.compile(r"(\r\n|\n)")


def split_source_lines(source: str) -> list[tuple[str, str]]:
    """Split ``source`` into ``(text, terminator)`` pairs.

    A trailing terminator does not produce an extra empty line, and the last
    line keeps an empty terminator when the source does not end with one.
    """
    parts = _LINE_SPLIT_RE.split(source)
    lines = [(parts[index], parts[index + 1]) for index in range(0, len(parts) - 1, 2)]
    if parts[-1]:
        lines.append((parts[-1], ""))
    return lines


class RewriteEngine:
    def __init__(self, request: RewriteRequest) -> None:
        self.request = request
        self.summary = RewriteSummary()
        self._pattern: re.Pattern[str] | None = None

    def _context_error(self, exc: RewriteError, *, line_number: int | None) -> RewriteError:
        return type(exc)(
            exc.reason,
            operation=self.request.operation,
            fn_name=self.request.fn_name,
            path=self.request.source_file,
            line_number=line_number if line_number is not None else exc.line_number,
        )

    def compile_pattern(self) -> re.Pattern[str]:
        if self._pattern is None:
            try:
                self._pattern = compile_call_pattern(
                    self.request.fn_name, literal=self.request.literal_name
                )
            except RewriteError as exc:
                raise self._context_error(exc, line_number=None) from exc
        return self._pattern

    def load_source(self) -> str:
        path = Path(self.request.source_file)
        try:
            # newline="" keeps CRLF terminators for split_source_lines.
            with path.open(encoding=self.request.encoding, newline="") as handle:
                return handle.read()
        except (OSError, UnicodeDecodeError, LookupError) as exc:
            raise SourceReadError(
                f"cannot read source file: {exc}",
                operation=self.request.operation,
                fn_name=self.request.fn_name,
                path=self.request.source_file,
            ) from exc

    def rewrite_line(self, text: str, *, line_number: int, terminator: str = "") -> RewrittenLine:
        pieces: list[str] = []
        sites: list[CallSite] = []
        replacements: list[str] = []
        cursor = 0
        pattern = self.compile_pattern()
        try:
            for site in iter_call_sites(text, pattern, line_number=line_number):
                arguments = apply_edit(self.request.edit, list(site.arguments))
                replacement = f"{site.name}({join_arguments(arguments)})"
                pieces.append(text[cursor : site.start])
                pieces.append(site.anchor)
                pieces.append(replacement)
                cursor = site.end
                sites.append(site)
                replacements.append(replacement)
        except RewriteError as exc:
            raise self._context_error(exc, line_number=line_number) from exc
        if not sites:
            return RewrittenLine(number=line_number, text=text, terminator=terminator)
        pieces.append(text[cursor:])
        return RewrittenLine(
            number=line_number,
            text="".join(pieces),
            terminator=terminator,
            call_sites=tuple(sites),
            replacements=tuple(replacements),
        )

    def iter_lines(self) -> Iterator[RewrittenLine]:
        """Return an iterator of rewritten lines.

        The name pattern is compiled and the source read before this returns,
        so startup failures surface before any line is produced. Edit failures
        surface from the iterator at the offending line.
        """
        self.compile_pattern()
        source = self.load_source()
        self.summary = RewriteSummary()
        return self._iter_source(source)

    def _iter_source(self, source: str) -> Iterator[RewrittenLine]:
        for number, (text, terminator) in enumerate(split_source_lines(source), start=1):
            line = self.rewrite_line(text, line_number=number, terminator=terminator)
            self.summary.record(line)
            yield line

    def rewrite_text(self) -> str:
        return "".join(line.rendered for line in self.iter_lines())
