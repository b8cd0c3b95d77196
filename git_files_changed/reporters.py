from __future__ import annotations

import json
import re
from pathlib import Path

from git_files_changed.models import ChangeReport


def build_text_report(report: ChangeReport, with_status: bool = False) -> str:
    if with_status:
        lines = [f"{c.status_letter}\t{c.path}" for c in report.changes]
    else:
        lines = report.paths()
    return "\n".join(lines) + ("\n" if lines else "")


def build_json_report(report: ChangeReport) -> str:
    return json.dumps(report.to_dict(), indent=2) + "\n"


def build_markdown_report(report: ChangeReport) -> str:
    s = report.summary()
    lines = [
        "# Changed files",
        "",
        f"- **Repository:** `{report.repository}`",
        f"- **Head:** `{report.head_ref}` ({report.head_commit[:12]})",
        f"- **Base:** `{report.base_ref}` ({report.base_commit[:12]})",
        f"- **Added/Modified/Deleted:** {s['added']}/{s['modified']}/{s['deleted']}",
        f"- **Total:** {s['total']}",
        "",
    ]

    if not report.changes:
        lines.append("No changed files.")
    else:
        lines.extend(["| Action | Path |", "| --- | --- |"])
        for change in report.changes:
            lines.append(f"| {change.status_letter} | {_md_code(change.path)} |")

    return "\n".join(lines) + "\n"


def _md_code(path: str) -> str:
    # table cells split on unescaped pipes, even inside code spans
    cell = path.replace("|", "\\|")
    longest = max((len(run) for run in re.findall(r"`+", cell)), default=0)
    fence = "`" * (longest + 1)
    if longest:
        return f"{fence} {cell} {fence}"
    return f"{fence}{cell}{fence}"


REPORT_BUILDERS = {
    "json": build_json_report,
    "markdown": build_markdown_report,
}


def render_report(report: ChangeReport, fmt: str, with_status: bool = False) -> str:
    if fmt == "text":
        return build_text_report(report, with_status=with_status)
    builder = REPORT_BUILDERS.get(fmt)
    if builder is None:
        raise ValueError(f"Unknown output format '{fmt}' (expected text, json or markdown)")
    return builder(report)


def encode_report(text: str) -> bytes:
    """Bytes for output; git paths that are not valid UTF-8 round-trip via surrogateescape."""
    return text.encode("utf-8", errors="surrogateescape")


def write_report(text: str, path: Path) -> None:
    path.write_bytes(encode_report(text))
