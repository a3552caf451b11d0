"""Positional edits over a textual argument list.

Arguments are split on the literal ``", "`` separator and joined back with it.
Nested calls or string literals containing ``", "`` are mis-split; that is a
known limitation of the textual approach.
"""

from __future__ import annotations

from callsite_edit.exceptions import EditIndexError
from callsite_edit.rewrite.model import (
    ARGUMENT_SEPARATOR,
    ArgumentEdit,
    InsertArgument,
    MoveArgument,
    RemoveArgument,
)


def split_arguments(arguments_text: str) -> list[str]:
    return arguments_text.split(ARGUMENT_SEPARATOR)


def join_arguments(arguments: list[str]) -> str:
    return ARGUMENT_SEPARATOR.join(arguments)


def insert_argument(arguments: list[str], edit: InsertArgument) -> list[str]:
    """Insert ``value_to_set`` unless the call already has enough arguments."""
    if len(arguments) >= edit.expected_params_count:
        return list(arguments)
    index = edit.param_to_set - 1
    if index < 0 or index > len(arguments):
        raise EditIndexError(
            f"insert position {edit.param_to_set} out of range for {len(arguments)} argument(s)"
        )
    updated = list(arguments)
    updated.insert(index, edit.value_to_set)
    return updated


def remove_argument(arguments: list[str], edit: RemoveArgument) -> list[str]:
    """Drop ``param_to_remove`` unless the call already has few enough arguments."""
    if len(arguments) <= edit.expected_params_count:
        return list(arguments)
    if edit.param_to_remove < 0 or edit.param_to_remove >= len(arguments):
        raise EditIndexError(
            f"remove index {edit.param_to_remove} out of range for {len(arguments)} argument(s)"
        )
    updated = list(arguments)
    del updated[edit.param_to_remove]
    return updated


def move_argument(arguments: list[str], edit: MoveArgument) -> list[str]:
    # insert_index is resolved against the list after the removal.
    if edit.remove_index < 0 or edit.remove_index >= len(arguments):
        raise EditIndexError(
            f"move source index {edit.remove_index} out of range for {len(arguments)} argument(s)"
        )
    updated = list(arguments)
    moved = updated.pop(edit.remove_index)
    if edit.insert_index < 0 or edit.insert_index > len(updated):
        raise EditIndexError(
            f"move target index {edit.insert_index} out of range for {len(updated)} remaining argument(s)"
        )
    updated.insert(edit.insert_index, moved)
    return updated


def apply_edit(edit: ArgumentEdit, arguments: list[str]) -> list[str]:
    if type(edit) is InsertArgument:
        return insert_argument(arguments, edit)
    if type(edit) is RemoveArgument:
        return remove_argument(arguments, edit)
    if type(edit) is MoveArgument:
        return move_argument(arguments, edit)
    raise TypeError(f"unsupported argument edit: {edit!r}")
