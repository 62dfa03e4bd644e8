"""Format the entries found by `git_ls`."""

import json
from collections.abc import Sequence
from typing import Literal

import yaml
from colorama import Back, Fore, Style

from .git_ls import Entry, State
from .layout import PADDING, layout_columns, terminal_width

REPORT_FORMATS = ["grid", "list", "json", "yaml"]
REPORT_FORMATS_TYPE = Literal["grid", "list", "json", "yaml"]

TIME_FORMAT = "%b %d,%Y %H:%M"
SIZE_UNITS = ["b", "kb", "mb", "gb", "tb"]

STATE_COLORS: dict[State, str] = {
    State.OK: Style.BRIGHT,
    State.PLAIN_FILE: "",
    State.NO_VERSION_CONTROL: Style.BRIGHT + Fore.BLUE,
    State.DIRTY: Style.BRIGHT + Fore.RED,
    State.NO_REMOTE: Back.BLUE + Style.BRIGHT + Fore.RED,
    State.FETCH_FAILED: Back.RED + Style.BRIGHT + Fore.BLUE,
    State.BRANCH_AHEAD: Back.YELLOW + Style.BRIGHT + Fore.GREEN,
    State.BRANCH_BEHIND: Back.YELLOW + Style.BRIGHT + Fore.RED,
}


def human_readable(size: int) -> str:
    """Format a size in bytes, e.g. `10000` -> `"9.8 kb"`."""
    if size < 0:
        raise ValueError("negative input")
    value = float(size)
    for unit in SIZE_UNITS[:-1]:
        if value < 1024:  # noqa: PLR2004
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} {SIZE_UNITS[-1]}"


def colorize(text: str, state: State) -> str:
    """Wrap `text` in the color codes of `state`."""
    color = STATE_COLORS[state]
    if not color:
        return text
    return color + text + Style.RESET_ALL


def format_report(
    entries: Sequence[Entry],
    *,
    fmt: REPORT_FORMATS_TYPE,
    width: int | None = None,
) -> str:
    """Format entries to a readable output."""
    if fmt == "grid":
        return _format_grid(entries, terminal_width() if width is None else width)
    try:
        return {
            "list": _format_list,
            "json": _format_json,
            "yaml": _format_yaml,
        }[fmt](entries)
    except KeyError as e:
        raise ValueError(f"format_report got an unsupported {fmt=}") from e


def format_legend() -> str:
    """Show every state in its color."""
    return "\n".join(colorize(state.value, state) for state in State)


def _format_grid(entries: Sequence[Entry], width: int) -> str:
    cells = [(entry.name, colorize(entry.name, entry.state)) for entry in entries]
    return "\n".join(layout_columns(cells, width))


def _format_list(entries: Sequence[Entry]) -> str:
    rows = [
        (
            entry.name,
            colorize(entry.name, entry.state),
            human_readable(entry.size),
            entry.mtime.strftime(TIME_FORMAT),
            entry.status_line,
        )
        for entry in entries
    ]
    if not rows:
        return ""
    name_width = max(len(row[0]) for row in rows) + PADDING
    size_width = max(len(row[2]) for row in rows) + PADDING
    time_width = max(len(row[3]) for row in rows) + PADDING
    lines = []
    for name, decorated, size, mtime, status_line in rows:
        decorated = decorated.ljust(name_width + len(decorated) - len(name))
        line = f"{decorated}{size:<{size_width}}{mtime:<{time_width}}{status_line}"
        lines.append(line.rstrip())
    return "\n".join(lines)


def _format_json(entries: Sequence[Entry]) -> str:
    return json.dumps([entry.to_dict() for entry in entries], indent=2)


def _format_yaml(entries: Sequence[Entry]) -> str:
    return yaml.dump(
        [entry.to_dict() for entry in entries],
        allow_unicode=True,
        default_flow_style=False,
        indent=2,
        sort_keys=False,
    )
