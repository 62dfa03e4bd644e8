"""List a directory and annotate every subdirectory with its git status.

Every subdirectory is checked by its own probe, which runs `git` through
GitPython and classifies the output. Probes run concurrently, see `scan`.

Run `git-ls -h` for help.
Requires GitPython package
"""

import logging
import os
import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from git import GitCommandError, GitError, Repo

logger = logging.getLogger(__name__)

CLEAN_MARKER = re.compile("nothing to commit")
FETCH_ERROR = re.compile("^fatal")
BRANCH_AHEAD = re.compile("branch is ahead of")
BRANCH_BEHIND = re.compile("branch is behind")

LAST_COMMIT_FORMAT = "--format=format:%h - %s"

# the markers above only exist in the untranslated output
_GIT_ENV = {"LC_ALL": "C", "LANGUAGE": "C"}


class State(Enum):
    """Classification of one listed entry."""

    OK = "ok"
    NO_VERSION_CONTROL = "no_version_control"
    DIRTY = "dirty"
    NO_REMOTE = "no_remote"
    FETCH_FAILED = "fetch_failed"
    BRANCH_AHEAD = "branch_ahead"
    BRANCH_BEHIND = "branch_behind"
    PLAIN_FILE = "file"

    @property
    def priority(self) -> int:
        """Rank used when sorting by state."""
        return _PRIORITY[self]


_PRIORITY = {
    State.OK: 0,
    State.NO_VERSION_CONTROL: 1,
    State.DIRTY: 2,
    State.NO_REMOTE: 3,
    State.FETCH_FAILED: 4,
    State.BRANCH_AHEAD: 5,
    State.BRANCH_BEHIND: 6,
    # plain files trail every directory state
    State.PLAIN_FILE: 7,
}


class Kind(Enum):
    FILE = "file"
    DIRECTORY = "directory"


class ProbeError(RuntimeError):
    """git could not be run on a folder; the whole listing is unusable."""


@dataclass(frozen=True)
class FolderItem:
    """A subdirectory waiting to be probed."""

    path: Path
    size: int
    mtime: datetime


@dataclass(frozen=True)
class Entry:
    """One listed child of the scanned directory."""

    name: str
    kind: Kind
    state: State
    size: int
    mtime: datetime
    status_line: str = ""

    def to_dict(self) -> dict[str, str | int]:
        return {
            "name": self.name,
            "kind": self.kind.value,
            "state": self.state.value,
            "size": self.size,
            "modified": self.mtime.isoformat(timespec="seconds"),
            "status_line": self.status_line,
        }


def list_folder(
    basedir: Path, *, include_hidden: bool, dirty_only: bool
) -> tuple[list[Entry], list[FolderItem]]:
    """Split the children of `basedir` into file entries and folders to probe."""
    basedir = Path(basedir)
    if not basedir.exists():
        raise FileNotFoundError(f"no such directory: '{basedir}'")
    if not basedir.is_dir():
        raise NotADirectoryError(f"not a directory: '{basedir}'")
    files: list[Entry] = []
    folders: list[FolderItem] = []
    for child in basedir.iterdir():
        if child.name[0] == "." and not include_hidden:
            continue
        try:
            info = child.stat()
        except OSError:
            # removed while listing, or a broken link
            logger.debug("skipping %s, stat failed", child)
            continue
        mtime = datetime.fromtimestamp(info.st_mtime)
        if child.is_dir():
            folders.append(FolderItem(child, info.st_size, mtime))
        elif not dirty_only:
            files.append(
                Entry(child.name, Kind.FILE, State.PLAIN_FILE, info.st_size, mtime)
            )
    return files, folders


def last_commit(repo: Repo, *, timeout: float | None = None) -> str:
    """Return a one line summary of HEAD, or "" for a repo without commits."""
    try:
        return repo.git.log(
            LAST_COMMIT_FORMAT, "-1", env=_GIT_ENV, kill_after_timeout=timeout
        )
    except GitCommandError:
        return ""


def fetch_failed(repo: Repo, *, timeout: float | None = None) -> bool:
    """Fetch from the remotes and tell whether that failed."""
    try:
        output = repo.git.fetch(env=_GIT_ENV, kill_after_timeout=timeout)
    except GitCommandError as e:
        logger.debug("fetch in %s failed: %s", repo.working_tree_dir, e)
        return True
    return bool(FETCH_ERROR.match(output.strip()))


def repo_state(
    repo: Repo, *, dirty_only: bool, timeout: float | None = None
) -> State | None:
    """Classify a repo. None means it is clean and only dirty ones are wanted."""
    status = repo.git.status(env=_GIT_ENV, kill_after_timeout=timeout)
    if not CLEAN_MARKER.search(status.strip()):
        return State.DIRTY
    if dirty_only:
        return None
    if not repo.git.remote("-v", env=_GIT_ENV, kill_after_timeout=timeout):
        return State.NO_REMOTE
    if fetch_failed(repo, timeout=timeout):
        return State.FETCH_FAILED
    status = repo.git.status(env=_GIT_ENV, kill_after_timeout=timeout).strip()
    if BRANCH_AHEAD.search(status):
        return State.BRANCH_AHEAD
    if BRANCH_BEHIND.search(status):
        return State.BRANCH_BEHIND
    return State.OK


def probe_folder(
    item: FolderItem, *, dirty_only: bool, timeout: float | None = None
) -> Entry | None:
    """Return the entry for one folder, or None if it should not be listed."""
    folder = item.path
    if not os.path.lexists(folder / ".git"):
        if dirty_only:
            return None
        return Entry(
            folder.name,
            Kind.DIRECTORY,
            State.NO_VERSION_CONTROL,
            item.size,
            item.mtime,
        )
    try:
        with Repo(folder) as repo:
            status_line = last_commit(repo, timeout=timeout)
            state = repo_state(repo, dirty_only=dirty_only, timeout=timeout)
    except GitError as e:
        raise ProbeError(f"Error while checking git status in '{folder}'") from e
    logger.debug("%s is %s", folder, "skipped" if state is None else state.value)
    if state is None:
        return None
    return Entry(folder.name, Kind.DIRECTORY, state, item.size, item.mtime, status_line)


def sort_entries(entries: list[Entry], *, by_state: bool) -> list[Entry]:
    """Sort entries by name (ignoring case) or by state priority, stably."""
    if by_state:
        return sorted(entries, key=lambda entry: entry.state.priority)
    return sorted(entries, key=lambda entry: entry.name.lower())
