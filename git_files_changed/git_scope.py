"""Resolve two revisions and list the paths that differ between their trees."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator, Protocol

import pygit2
from pygit2.enums import DeltaStatus, DiffOption, RepositoryOpenFlag

from git_files_changed.errors import (
    CanceledError,
    DiffComputationError,
    GitFilesChangedError,
    RepositoryOpenError,
    RevisionResolutionError,
    UnsupportedChangeActionError,
)
from git_files_changed.logs import get_logger
from git_files_changed.models import ADDED, DELETED, MODIFIED, ChangedFile, ChangeReport


DEFAULT_HEAD_REF = "HEAD"
DEFAULT_BASE_REF = "main"

# pygit2 maps libgit2 error codes onto these (ENOTFOUND -> KeyError,
# EAMBIGUOUS/EINVALIDSPEC -> ValueError, the rest -> GitError).
_GIT_ERRORS = (pygit2.GitError, KeyError, ValueError, OSError)

logger = get_logger()


class CancelSignal(Protocol):
    def is_set(self) -> bool: ...


@contextmanager
def _translate(make_error: Callable[[str], GitFilesChangedError]) -> Iterator[None]:
    try:
        yield
    except _GIT_ERRORS as exc:
        raise make_error(str(exc) or exc.__class__.__name__) from exc


def _check_canceled(cancel: CancelSignal | None, step: str) -> None:
    if cancel is not None and cancel.is_set():
        raise CanceledError(step)


def open_repository(repo_path: str | Path) -> pygit2.Repository:
    """Open the repository at exactly ``repo_path``; parent directories are not searched."""
    path = str(Path(repo_path))
    if not Path(path).is_dir():
        raise RepositoryOpenError(path, "directory does not exist")
    with _translate(lambda reason: RepositoryOpenError(path, reason)):
        return pygit2.Repository(path, flags=RepositoryOpenFlag.NO_SEARCH)


def resolve_tree(
    repo: pygit2.Repository, ref: str, step: str
) -> tuple[pygit2.Commit, pygit2.Tree]:
    """Resolve a commit-ish to its commit and that commit's tree."""
    if not ref or not ref.strip():
        raise RevisionResolutionError(ref, step, "empty reference")
    with _translate(lambda reason: RevisionResolutionError(ref, step, reason)):
        commit = repo.revparse_single(ref).peel(pygit2.Commit)
        tree = commit.tree
    return commit, tree


def diff_trees(base_tree: pygit2.Tree, head_tree: pygit2.Tree) -> list[Any]:
    """Deltas from ``base_tree`` (old side) to ``head_tree`` (new side), in path order."""
    with _translate(DiffComputationError):
        diff = base_tree.diff_to_tree(head_tree, flags=DiffOption.INCLUDE_TYPECHANGE)
        return list(diff.deltas)


def classify_delta(delta: Any) -> ChangedFile:
    status = delta.status
    old_path = delta.old_file.path if delta.old_file is not None else None
    new_path = delta.new_file.path if delta.new_file is not None else None

    if status == DeltaStatus.ADDED:
        action, path = ADDED, new_path
    elif status in (DeltaStatus.MODIFIED, DeltaStatus.TYPECHANGE):
        action, path = MODIFIED, new_path
    elif status == DeltaStatus.DELETED:
        action, path = DELETED, old_path
    else:
        raise UnsupportedChangeActionError(status, old_path, new_path)

    if not path:
        raise UnsupportedChangeActionError(status, old_path, new_path)
    return ChangedFile(path=path, action=action, old_path=old_path, new_path=new_path)


def build_report(
    repo_path: str | Path,
    head_ref: str = DEFAULT_HEAD_REF,
    base_ref: str = DEFAULT_BASE_REF,
    *,
    cancel: CancelSignal | None = None,
) -> ChangeReport:
    _check_canceled(cancel, "open")
    repo = open_repository(repo_path)
    try:
        _check_canceled(cancel, "resolve-head")
        head, head_tree = resolve_tree(repo, head_ref, "resolve-head")
        _check_canceled(cancel, "resolve-base")
        base, base_tree = resolve_tree(repo, base_ref, "resolve-base")
        logger.debug("head %s -> %s, base %s -> %s", head_ref, head.id, base_ref, base.id)

        _check_canceled(cancel, "diff")
        deltas = diff_trees(base_tree, head_tree)

        changes: list[ChangedFile] = []
        for delta in deltas:
            _check_canceled(cancel, "classify")
            changes.append(classify_delta(delta))
        logger.debug("%d changed path(s) between %s and %s", len(changes), base_ref, head_ref)

        return ChangeReport(
            repository=str(repo_path),
            head_ref=head_ref,
            base_ref=base_ref,
            head_commit=str(head.id),
            base_commit=str(base.id),
            changes=changes,
        )
    finally:
        repo.free()


def list_changes(
    repo_path: str | Path,
    head_ref: str = DEFAULT_HEAD_REF,
    base_ref: str = DEFAULT_BASE_REF,
    *,
    cancel: CancelSignal | None = None,
) -> list[ChangedFile]:
    return build_report(repo_path, head_ref, base_ref, cancel=cancel).changes


def list_changed_files(
    repo_path: str | Path,
    head_ref: str = DEFAULT_HEAD_REF,
    base_ref: str = DEFAULT_BASE_REF,
    *,
    cancel: CancelSignal | None = None,
) -> list[str]:
    """Paths added, modified or deleted between ``base_ref`` and ``head_ref``.

    Paths are relative to the repository root with ``/`` separators, one per
    changed path, in tree-diff order. Any failure raises a
    ``GitFilesChangedError`` subclass naming the failing step; nothing is
    returned partially.
    """
    return build_report(repo_path, head_ref, base_ref, cancel=cancel).paths()
