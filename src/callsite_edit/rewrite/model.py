from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar, TypeAlias

from callsite_edit.config import DEFAULT_ENCODING

ARGUMENT_SEPARATOR = ", "


class EditKind(StrEnum):
    ADD = "add"
    REMOVE = "remove"
    MOVE = "move"


@dataclass(frozen=True)
class InsertArgument:
    expected_params_count: int
    # 1-based.
    param_to_set: int
    value_to_set: str

    kind: ClassVar[EditKind] = EditKind.ADD


@dataclass(frozen=True)
class RemoveArgument:
    expected_params_count: int
    param_to_remove: int

    kind: ClassVar[EditKind] = EditKind.REMOVE


@dataclass(frozen=True)
class MoveArgument:
    remove_index: int
    insert_index: int

    kind: ClassVar[EditKind] = EditKind.MOVE


ArgumentEdit: TypeAlias = InsertArgument | RemoveArgument | MoveArgument


@dataclass(frozen=True)
class CallSite:
    """One matched ``name(args)`` occurrence on a line.

    ``start`` is the offset of the anchor character preceding the name and
    ``end`` the offset just past the closing parenthesis.
    """

    line_number: int
    start: int
    end: int
    anchor: str
    name: str
    arguments: tuple[str, ...]

    @property
    def call_text(self) -> str:
        return f"{self.name}({ARGUMENT_SEPARATOR.join(self.arguments)})"


@dataclass(frozen=True)
class RewriteRequest:
    source_file: str
    fn_name: str
    edit: ArgumentEdit
    literal_name: bool = False
    encoding: str = DEFAULT_ENCODING

    @property
    def operation(self) -> str:
        return self.edit.kind.value


@dataclass(frozen=True)
class RewrittenLine:
    number: int
    text: str
    terminator: str
    call_sites: tuple[CallSite, ...] = ()
    replacements: tuple[str, ...] = ()

    @property
    def rendered(self) -> str:
        return self.text + self.terminator

    @property
    def changed(self) -> bool:
        return any(
            site.call_text != replacement
            for site, replacement in zip(self.call_sites, self.replacements)
        )


@dataclass
class RewriteSummary:
    lines: int = 0
    call_sites: int = 0
    edited_call_sites: int = 0

    def record(self, line: RewrittenLine) -> None:
        self.lines += 1
        self.call_sites += len(line.call_sites)
        self.edited_call_sites += sum(
            1
            for site, replacement in zip(line.call_sites, line.replacements)
            if site.call_text != replacement
        )
