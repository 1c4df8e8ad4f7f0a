"""Commit classification and release notes."""

from .classify import Chooser, classify_commits
from .model import ChangeKind, ChangeSet, Commit
from .notes import format_subject, render_notes

__all__ = [
    "ChangeKind",
    "ChangeSet",
    "Chooser",
    "Commit",
    "classify_commits",
    "format_subject",
    "render_notes",
]
