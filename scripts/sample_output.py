"""Generate sample output."""

from datetime import datetime

from git_ls.format import format_report
from git_ls.git_ls import Entry, Kind, State

mtime = datetime(2025, 3, 14, 9, 26)
report = [
    Entry("my-repo", Kind.DIRECTORY, State.DIRTY, 4096, mtime, "1a2b3c4 - wip"),
    Entry("my-other-repo", Kind.DIRECTORY, State.BRANCH_AHEAD, 4096, mtime),
    Entry("my-3rd-repo", Kind.DIRECTORY, State.BRANCH_BEHIND, 4096, mtime),
    Entry("repo-4", Kind.DIRECTORY, State.OK, 4096, mtime, "5d6e7f8 - release"),
    Entry("scratch", Kind.DIRECTORY, State.NO_VERSION_CONTROL, 4096, mtime),
    Entry("local-only", Kind.DIRECTORY, State.NO_REMOTE, 4096, mtime),
    Entry("offline", Kind.DIRECTORY, State.FETCH_FAILED, 4096, mtime),
    Entry("notes.md", Kind.FILE, State.PLAIN_FILE, 10000, mtime),
]
print(format_report(report, fmt="grid", width=60))
print()
print(format_report(report, fmt="list"))
