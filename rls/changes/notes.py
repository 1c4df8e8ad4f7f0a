"""Render a ChangeSet as the markdown body of a release."""

from __future__ import annotations

from rls.changes.model import ChangeSet, Commit

SUBJECT_WIDTH = 33


def format_subject(message: str, width: int = SUBJECT_WIDTH) -> str:
    lines = message.strip().splitlines()
    subject = lines[0].strip() if lines else ""
    if not subject:
        return ""
    subject = subject[0].upper() + subject[1:]
    if len(subject) < width:
        return subject
    return subject[: width - 3] + "..."


def _section(title: str, commits: list[Commit]) -> list[str]:
    if not commits:
        return []
    lines = [f"### {title}", ""]
    lines.extend(f"  - {format_subject(c.message)}: {c.sha}" for c in commits)
    lines.append("")
    return lines


def render_notes(changes: ChangeSet) -> str:
    lines: list[str] = []
    lines += _section("Major Changes", changes.majors)
    lines += _section("Minor Changes", changes.minors)
    lines += _section("Patches", changes.patches)
    return "\n".join(lines).strip() + ("\n" if lines else "")
