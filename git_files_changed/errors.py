from __future__ import annotations


class GitFilesChangedError(RuntimeError):
    """Base error; ``step`` names the stage that failed."""

    def __init__(self, message: str, step: str) -> None:
        super().__init__(message)
        self.step = step


class RepositoryOpenError(GitFilesChangedError):
    def __init__(self, path: str, reason: str = "") -> None:
        msg = f"Not a git repository: {path}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg, step="open")
        self.path = path


class RevisionResolutionError(GitFilesChangedError):
    def __init__(self, ref: str, step: str, reason: str = "") -> None:
        msg = f"Cannot resolve '{ref}' to a commit"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg, step=step)
        self.ref = ref


class DiffComputationError(GitFilesChangedError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to diff trees: {reason}", step="diff")


class UnsupportedChangeActionError(GitFilesChangedError):
    """A diff delta carried a status other than added, modified or deleted."""

    def __init__(self, status: object, old_path: str | None, new_path: str | None) -> None:
        super().__init__(
            f"Unsupported change action {status!r} (old={old_path!r}, new={new_path!r})",
            step="classify",
        )
        self.status = status
        self.old_path = old_path
        self.new_path = new_path


class CanceledError(GitFilesChangedError):
    def __init__(self, step: str) -> None:
        super().__init__(f"Canceled before {step}", step=step)


class ConfigError(GitFilesChangedError):
    def __init__(self, message: str) -> None:
        super().__init__(message, step="config")
