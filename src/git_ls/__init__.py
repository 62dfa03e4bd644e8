"""git-ls: List a directory with the git status of every subdirectory."""

from ._version import version as _version
from .format import (
    REPORT_FORMATS_TYPE,
    format_report,
)
from .git_ls import (
    Entry,
    Kind,
    ProbeError,
    State,
)
from .scan import (
    ScanCoordinator,
    scan_folder,
)

__version__ = _version
__all__: list[str] = [
    "REPORT_FORMATS_TYPE",
    "Entry",
    "Kind",
    "ProbeError",
    "ScanCoordinator",
    "State",
    "format_report",
    "scan_folder",
]
