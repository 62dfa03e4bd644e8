"""Tests for format module."""

import json
import re
from datetime import datetime

import pytest
import yaml
from colorama import Back, Fore, Style

from git_ls.format import (
    colorize,
    format_legend,
    format_report,
    human_readable,
)
from git_ls.git_ls import Entry, Kind, State

MTIME = datetime(2024, 1, 2, 3, 4)
ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")


@pytest.fixture
def entries() -> list[Entry]:
    return [
        Entry("A", Kind.DIRECTORY, State.BRANCH_AHEAD, 4096, MTIME, "abc1234 - fix"),
        Entry("b", Kind.DIRECTORY, State.DIRTY, 4096, MTIME),
        Entry("c.txt", Kind.FILE, State.PLAIN_FILE, 6, MTIME),
    ]


class TestHumanReadable:
    """Test human_readable function."""

    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            (0, "0.0 b"),
            (6, "6.0 b"),
            (1000, "1000.0 b"),
            (1024, "1.0 kb"),
            (10000, "9.8 kb"),
            (5 * 1024**3, "5.0 gb"),
            (2 * 1024**5, "2048.0 tb"),
        ],
    )
    def test_sizes(self, size: int, expected: str) -> None:
        assert human_readable(size) == expected

    def test_negative_input(self) -> None:
        with pytest.raises(ValueError, match="negative input"):
            human_readable(-10)


class TestColorize:
    """Test colorize function."""

    def test_dirty_is_bold_red(self) -> None:
        assert colorize("b", State.DIRTY) == (
            Style.BRIGHT + Fore.RED + "b" + Style.RESET_ALL
        )

    def test_behind_has_background(self) -> None:
        result = colorize("repo", State.BRANCH_BEHIND)
        assert Back.YELLOW in result
        assert result.endswith("repo" + Style.RESET_ALL)

    def test_plain_file_is_undecorated(self) -> None:
        assert colorize("c.txt", State.PLAIN_FILE) == "c.txt"

    def test_every_state_has_a_color(self) -> None:
        for state in State:
            colorize("x", state)


class TestFormatReport:
    """Test format_report function."""

    def test_grid_format(self, entries: list[Entry]) -> None:
        result = format_report(entries, fmt="grid", width=80)
        assert result == (
            colorize("A", State.BRANCH_AHEAD)
            + "  "
            + colorize("b", State.DIRTY)
            + "  "
            + "c.txt"
        )

    def test_grid_uses_terminal_width(
        self, entries: list[Entry], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("COLUMNS", "4")
        result = format_report(entries, fmt="grid")
        assert len(result.splitlines()) == 3

    def test_grid_empty(self) -> None:
        assert format_report([], fmt="grid", width=80) == ""

    def test_list_format(self, entries: list[Entry]) -> None:
        lines = format_report(entries, fmt="list").splitlines()
        assert len(lines) == 3
        assert lines[0].startswith(colorize("A", State.BRANCH_AHEAD) + " " * 5)
        assert "4.0 kb" in lines[0]
        assert "Jan 02,2024 03:04" in lines[0]
        assert lines[0].endswith("abc1234 - fix")
        assert lines[2] == "c.txt  6.0 b   Jan 02,2024 03:04"

    def test_list_columns_align(self, entries: list[Entry]) -> None:
        lines = format_report(entries, fmt="list").splitlines()
        visible = [ANSI_ESCAPE.sub("", line) for line in lines]
        assert len({line.index("Jan") for line in visible}) == 1
        assert all(line[7].isdigit() for line in visible)

    def test_list_empty(self) -> None:
        assert format_report([], fmt="list") == ""

    def test_json_format(self, entries: list[Entry]) -> None:
        parsed = json.loads(format_report(entries, fmt="json"))
        assert parsed[0] == {
            "name": "A",
            "kind": "directory",
            "state": "branch_ahead",
            "size": 4096,
            "modified": "2024-01-02T03:04:00",
            "status_line": "abc1234 - fix",
        }
        assert [e["name"] for e in parsed] == ["A", "b", "c.txt"]

    def test_yaml_format(self, entries: list[Entry]) -> None:
        parsed = yaml.safe_load(format_report(entries, fmt="yaml"))
        assert [e["state"] for e in parsed] == ["branch_ahead", "dirty", "file"]

    def test_invalid_format_raises_error(self, entries: list[Entry]) -> None:
        with pytest.raises(ValueError, match="format_report got an unsupported"):
            format_report(entries, fmt="invalid")  # type: ignore[arg-type]


def test_legend() -> None:
    legend = format_legend().splitlines()
    assert len(legend) == len(State)
    assert colorize("dirty", State.DIRTY) in legend
