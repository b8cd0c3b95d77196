"""List the files changed between two git revisions."""

__version__ = "0.1.0"

from git_files_changed.errors import (
    CanceledError,
    DiffComputationError,
    GitFilesChangedError,
    RepositoryOpenError,
    RevisionResolutionError,
    UnsupportedChangeActionError,
)
from git_files_changed.git_scope import build_report, list_changed_files, list_changes
from git_files_changed.models import ChangedFile, ChangeReport

__all__ = [
    "CanceledError",
    "ChangeReport",
    "ChangedFile",
    "DiffComputationError",
    "GitFilesChangedError",
    "RepositoryOpenError",
    "RevisionResolutionError",
    "UnsupportedChangeActionError",
    "build_report",
    "list_changed_files",
    "list_changes",
]
