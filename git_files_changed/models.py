from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any


ADDED = "added"
MODIFIED = "modified"
DELETED = "deleted"

ACTIONS = (ADDED, MODIFIED, DELETED)

STATUS_LETTERS = {ADDED: "A", MODIFIED: "M", DELETED: "D"}


@dataclass(frozen=True)
class ChangedFile:
    path: str
    action: str
    old_path: str | None = None
    new_path: str | None = None

    @property
    def status_letter(self) -> str:
        return STATUS_LETTERS[self.action]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ChangeReport:
    repository: str
    head_ref: str
    base_ref: str
    head_commit: str
    base_commit: str
    changes: list[ChangedFile] = field(default_factory=list)

    def paths(self) -> list[str]:
        return [c.path for c in self.changes]

    def summary(self) -> dict[str, int]:
        counts = {k: 0 for k in ACTIONS}
        for change in self.changes:
            counts[change.action] = counts.get(change.action, 0) + 1
        counts["total"] = len(self.changes)
        return counts

    def with_changes(self, changes: list[ChangedFile]) -> "ChangeReport":
        return ChangeReport(
            repository=self.repository,
            head_ref=self.head_ref,
            base_ref=self.base_ref,
            head_commit=self.head_commit,
            base_commit=self.base_commit,
            changes=list(changes),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "repository": self.repository,
            "head_ref": self.head_ref,
            "base_ref": self.base_ref,
            "head_commit": self.head_commit,
            "base_commit": self.base_commit,
            "summary": self.summary(),
            "files": self.paths(),
            "changes": [c.to_dict() for c in self.changes],
        }
