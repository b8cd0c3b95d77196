from __future__ import annotations

from pathlib import Path
import typer

from git_files_changed import __version__
from git_files_changed.config import apply_overrides, load_config, load_env_file
from git_files_changed.errors import ConfigError, GitFilesChangedError
from git_files_changed.filters import filter_changes, parse_diff_filter
from git_files_changed.git_scope import build_report
from git_files_changed.logs import configure_logging
from git_files_changed.reporters import encode_report, render_report, write_report

app = typer.Typer(help="git-files-changed: list files changed between two git refs")


@app.callback()
def main() -> None:
    """git-files-changed command group."""


@app.command()
def version() -> None:
    """Print the installed version."""
    typer.echo(__version__)


@app.command()
def files(
    path: str = typer.Option(".", help="Path to the repository"),
    head_ref: str | None = typer.Option(None, help="Head revision (default: config, env, then HEAD)"),
    base_ref: str | None = typer.Option(None, help="Base revision (default: config, env, then main)"),
    config: str | None = typer.Option(None, help="Config YAML path (default: <path>/.git-files-changed.yml)"),
    include: list[str] | None = typer.Option(None, help="Only report paths matching this glob (repeatable)"),
    exclude: list[str] | None = typer.Option(None, help="Drop paths matching this glob (repeatable)"),
    diff_filter: str | None = typer.Option(None, help="Actions to report: A, M, D; lowercase excludes"),
    fmt: str = typer.Option("text", "--format", help="Output format: text|json|markdown"),
    with_status: bool = typer.Option(False, "--with-status", help="Prefix text lines with A/M/D"),
    out: str | None = typer.Option(None, help="Write output to this file instead of stdout"),
    summary: bool = typer.Option(False, "--summary/--no-summary", help="Print counts to stderr"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr"),
) -> None:
    configure_logging(verbose)
    root = Path(path).resolve()

    load_env_file(Path.cwd() / ".env")
    load_env_file(root / ".env")

    try:
        cfg = apply_overrides(
            load_config(config, root if root.is_dir() else None),
            head_ref=head_ref,
            base_ref=base_ref,
            include=include,
            exclude=exclude,
        )
        actions = parse_diff_filter(diff_filter)
    except (ConfigError, FileNotFoundError, ValueError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)

    try:
        report = build_report(root, cfg.head_ref, cfg.base_ref)
    except GitFilesChangedError as exc:
        typer.secho(f"[{exc.step}] {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)

    report = report.with_changes(
        filter_changes(report.changes, cfg.include_paths, cfg.exclude_paths, actions)
    )

    try:
        text = render_report(report, fmt, with_status=with_status)
    except ValueError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)

    if out:
        try:
            write_report(text, Path(out))
        except OSError as exc:
            typer.secho(f"Cannot write output: {exc}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=2)
    else:
        typer.echo(encode_report(text), nl=False)

    if summary:
        s = report.summary()
        typer.echo(
            f"Changed files total={s['total']} added={s['added']} modified={s['modified']} deleted={s['deleted']} head={report.head_commit[:12]} base={report.base_commit[:12]}",
            err=True,
        )


if __name__ == "__main__":
    app()
