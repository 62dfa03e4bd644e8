"""Arrange colored names in as many columns as fit the terminal."""

import math
import os
from collections.abc import Mapping, Sequence
from typing import NamedTuple

DEFAULT_WIDTH = 80
PADDING = 2


class ColumnPlan(NamedTuple):
    columns: int
    rows: int
    widths: list[int]


def terminal_width(environ: Mapping[str, str] | None = None) -> int:
    """Return the terminal width from $COLUMNS, or `DEFAULT_WIDTH`."""
    environ = os.environ if environ is None else environ
    try:
        width = int(environ.get("COLUMNS", ""))
    except ValueError:
        return DEFAULT_WIDTH
    return width if width > 0 else DEFAULT_WIDTH


def _column_widths(lengths: Sequence[int], rows: int) -> list[int]:
    # cells fill down each column first, like `ls`
    return [max(lengths[i : i + rows]) for i in range(0, len(lengths), rows)]


def _total_width(widths: Sequence[int], padding: int) -> int:
    return sum(widths) + padding * (len(widths) - 1)


def plan_columns(
    lengths: Sequence[int], width: int, padding: int = PADDING
) -> ColumnPlan:
    """Find the largest column count whose rows fit in `width`.

    `lengths` are the visible lengths of the cells, in output order.
    """
    if not lengths:
        return ColumnPlan(0, 0, [])
    columns = 0
    used = 0
    for length in lengths:
        used += length + padding
        if used > width:
            break
        columns += 1
    columns = max(columns, 1)
    rows = math.ceil(len(lengths) / columns)
    widths = _column_widths(lengths, rows)
    while _total_width(widths, padding) > width and columns > 1:
        columns -= 1
        rows = math.ceil(len(lengths) / columns)
        widths = _column_widths(lengths, rows)
    return ColumnPlan(len(widths), rows, widths)


def layout_columns(
    cells: Sequence[tuple[str, str]], width: int, padding: int = PADDING
) -> list[str]:
    """Lay out `(raw, decorated)` cells in columns, return the lines.

    Alignment is computed on the raw text; the invisible part of each
    decorated string is added back when padding.
    """
    plan = plan_columns([len(raw) for raw, _ in cells], width, padding)
    lines = []
    for row in range(plan.rows):
        line = []
        for column in range(plan.columns):
            index = column * plan.rows + row
            if index >= len(cells):
                break
            raw, decorated = cells[index]
            is_last = column == plan.columns - 1 or index + plan.rows >= len(cells)
            if is_last:
                line.append(decorated)
            else:
                invisible = len(decorated) - len(raw)
                line.append(
                    decorated.ljust(plan.widths[column] + padding + invisible)
                )
        lines.append("".join(line))
    return lines
