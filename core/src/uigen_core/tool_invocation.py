from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Final, Literal

ToolState = Literal["partial-call", "call", "result"]

STR_REPLACE_EDITOR: Final[str] = "str_replace_editor"
FILE_MANAGER: Final[str] = "file_manager"

ICON_FILE_PLUS: Final[str] = "file-plus"
ICON_FILE_EDIT: Final[str] = "file-edit"
ICON_FOLDER_OPEN: Final[str] = "folder-open"
ICON_TRASH: Final[str] = "trash-2"

_EDITOR_COMMANDS: Final[dict[str, tuple[str, str]]] = {
    "create": (ICON_FILE_PLUS, "Creating {file}"),
    "str_replace": (ICON_FILE_EDIT, "Editing {file}"),
    "insert": (ICON_FILE_EDIT, "Inserting into {file}"),
    "view": (ICON_FOLDER_OPEN, "Viewing {file}"),
}
_EDITOR_DEFAULT: Final[tuple[str, str]] = (ICON_FILE_EDIT, "Modifying {file}")

_MANAGER_COMMANDS: Final[dict[str, tuple[str, str]]] = {
    "rename": (ICON_FILE_EDIT, "Renaming {file} to {new_file}"),
    "delete": (ICON_TRASH, "Deleting {file}"),
}
_MANAGER_DEFAULT: Final[tuple[str, str]] = (ICON_FILE_EDIT, "Managing {file}")


@dataclass(frozen=True)
class ToolInvocationView:
    icon: str
    label: str
    complete: bool


def display_name(path: str) -> str:
    """Final path segment; the whole path when it ends with '/'."""

    return path.split("/")[-1] or path


def parse_tool_args(args: str | Mapping[str, Any]) -> Mapping[str, Any]:
    """Accept serialized JSON or an already-decoded mapping.

    Malformed JSON raises json.JSONDecodeError. Well-formed JSON that is not an
    object carries no arguments and yields an empty mapping.
    """

    parsed = json.loads(args) if isinstance(args, str) else args
    return parsed if isinstance(parsed, Mapping) else {}


def _str_arg(args: Mapping[str, Any], key: str) -> str:
    value = args.get(key)
    return value if isinstance(value, str) else ""


def describe_tool_call(tool_name: str, args: Mapping[str, Any]) -> tuple[str, str]:
    command = _str_arg(args, "command")
    if tool_name == STR_REPLACE_EDITOR:
        icon, template = _EDITOR_COMMANDS.get(command, _EDITOR_DEFAULT)
    elif tool_name == FILE_MANAGER:
        icon, template = _MANAGER_COMMANDS.get(command, _MANAGER_DEFAULT)
    else:
        return ICON_FILE_EDIT, tool_name

    label = template.format(
        file=display_name(_str_arg(args, "path")),
        new_file=display_name(_str_arg(args, "new_path")),
    )
    return icon, label.rstrip()


def describe_tool_invocation(
    tool_name: str,
    args: str | Mapping[str, Any],
    state: ToolState,
    result: Any = None,
) -> ToolInvocationView:
    """Map a chat tool call to the chip shown in the conversation.

    Completion needs both the "result" state and a truthy result payload; a
    "result" state with an empty result still renders as in progress.
    """

    icon, label = describe_tool_call(tool_name, parse_tool_args(args))
    return ToolInvocationView(
        icon=icon,
        label=label,
        complete=state == "result" and bool(result),
    )
