from __future__ import annotations

import fnmatch
from typing import Iterable

from git_files_changed.models import ACTIONS, ADDED, DELETED, MODIFIED, ChangedFile


DIFF_FILTER_LETTERS = {"A": ADDED, "M": MODIFIED, "D": DELETED}


def parse_diff_filter(value: str | None) -> set[str] | None:
    """Translate git-style ``--diff-filter`` letters into action names.

    Uppercase letters select actions, lowercase letters exclude them. Mixing
    both starts from the uppercase selection.
    """
    if not value:
        return None

    selected: set[str] = set()
    excluded: set[str] = set()
    for ch in value.strip():
        action = DIFF_FILTER_LETTERS.get(ch.upper())
        if action is None:
            raise ValueError(f"Unknown diff filter letter '{ch}' (expected any of A, M, D)")
        if ch.isupper():
            selected.add(action)
        else:
            excluded.add(action)

    base = selected if selected else set(ACTIONS)
    return base - excluded


def _matches_any(path: str, patterns: list[str]) -> bool:
    for pattern in patterns:
        p = pattern.strip()
        if not p:
            continue
        if fnmatch.fnmatch(path, p):
            return True
    return False


def filter_changes(
    changes: Iterable[ChangedFile],
    include: list[str] | None = None,
    exclude: list[str] | None = None,
    actions: set[str] | None = None,
) -> list[ChangedFile]:
    out: list[ChangedFile] = []
    for change in changes:
        if actions is not None and change.action not in actions:
            continue
        if include and not _matches_any(change.path, include):
            continue
        if exclude and _matches_any(change.path, exclude):
            continue
        out.append(change)
    return out
