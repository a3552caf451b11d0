from __future__ import annotations

import re
from typing import Iterator

from callsite_edit.exceptions import PatternError, StructuralMismatchError
from callsite_edit.rewrite.editor import split_arguments
from callsite_edit.rewrite.model import CallSite

# One non-identifier character, the name, then a parenthesised span without ')'.
# The anchor keeps `myfoo(` from matching `foo`; a name at column 0 never matches.
# The name is a regular expression unless `literal` escapes it.
_CALL_SITE_TEMPLATE = r"(?P<anchor>[^a-zA-Z_])(?P<name>{name})\((?P<args>[^)]+)\)"


def compile_call_pattern(fn_name: str, *, literal: bool = False) -> re.Pattern[str]:
    if not fn_name:
        raise PatternError("function name must not be empty")
    name = re.escape(fn_name) if literal else fn_name
    try:
        return re.compile(_CALL_SITE_TEMPLATE.format(name=name))
    except re.error as exc:
        raise PatternError(f"invalid function name pattern: {exc}") from exc


def iter_call_sites(
    line: str,
    pattern: re.Pattern[str],
    *,
    line_number: int = 0,
) -> Iterator[CallSite]:
    """Yield non-overlapping call sites in ``line`` from left to right."""
    for match in pattern.finditer(line):
        arguments_text = match.group("args")
        if not arguments_text:
            raise StructuralMismatchError(
                f"no argument list in matched call {match.group(0)!r}",
                line_number=line_number,
            )
        yield CallSite(
            line_number=line_number,
            start=match.start(),
            end=match.end(),
            anchor=match.group("anchor"),
            name=match.group("name"),
            arguments=tuple(split_arguments(arguments_text)),
        )
