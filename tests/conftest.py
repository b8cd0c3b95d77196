from __future__ import annotations

from pathlib import Path

import pygit2
import pytest


SIG = pygit2.Signature("Test User", "test@example.com")


def commit_files(repo: pygit2.Repository, changes: dict[str, str | None], message: str = "change") -> pygit2.Oid:
    """Write (or delete, when the content is None) files and commit them on HEAD."""
    workdir = Path(repo.workdir)
    for rel, content in changes.items():
        target = workdir / rel
        if content is None:
            target.unlink()
            repo.index.remove(rel)
        else:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content)
            repo.index.add(rel)
    repo.index.write()
    tree = repo.index.write_tree()
    parents = [] if repo.head_is_unborn else [repo.head.target]
    return repo.create_commit("HEAD", SIG, SIG, message, tree, parents)


@pytest.fixture
def repo(tmp_path: Path) -> pygit2.Repository:
    repo_path = tmp_path / "repo"
    repo_path.mkdir()
    return pygit2.init_repository(str(repo_path), initial_head="main")


@pytest.fixture
def scenario_repo(repo: pygit2.Repository) -> pygit2.Repository:
    """Commit A has README.md, src/a.go and docs/keep.md; B edits a.go, drops README.md, adds b.go."""
    a = commit_files(
        repo,
        {
            "README.md": "# demo\n",
            "src/a.go": "package a\n",
            "docs/keep.md": "unchanged\n",
        },
        "A",
    )
    repo.references.create("refs/tags/A", a)
    b = commit_files(
        repo,
        {
            "src/a.go": "package a\n\nfunc A() {}\n",
            "README.md": None,
            "src/b.go": "package b\n",
        },
        "B",
    )
    repo.references.create("refs/tags/B", b)
    return repo


@pytest.fixture
def repo_path(scenario_repo: pygit2.Repository) -> Path:
    return Path(scenario_repo.workdir)
