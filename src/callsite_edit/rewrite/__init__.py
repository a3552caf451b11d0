from callsite_edit.rewrite.editor import (
    apply_edit,
    insert_argument,
    join_arguments,
    move_argument,
    remove_argument,
    split_arguments,
)
from callsite_edit.rewrite.engine import RewriteEngine, split_source_lines
from callsite_edit.rewrite.locator import compile_call_pattern, iter_call_sites
from callsite_edit.rewrite.model import (
    ArgumentEdit,
    CallSite,
    EditKind,
    InsertArgument,
    MoveArgument,
    RemoveArgument,
    RewriteRequest,
    RewriteSummary,
    RewrittenLine,
)

__all__ = [
    "ArgumentEdit",
    "CallSite",
    "EditKind",
    "InsertArgument",
    "MoveArgument",
    "RemoveArgument",
    "RewriteEngine",
    "RewriteRequest",
    "RewriteSummary",
    "RewrittenLine",
    "apply_edit",
    "compile_call_pattern",
    "insert_argument",
    "iter_call_sites",
    "join_arguments",
    "move_argument",
    "remove_argument",
    "split_arguments",
    "split_source_lines",
]
