"""Error types for release reconciliation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReconcileErrorKind = Literal[
    "lookup_failed",
    "create_failed",
    "delete_release_failed",
    "delete_tag_failed",
    "cancelled",
]

ReconcileStep = Literal["lookup", "create", "delete-release", "delete-tag", "settle"]


@dataclass(frozen=True, slots=True)
class ReconcileError:
    """Why a reconcile stopped.

    Attributes:
        kind: Failure category
        step: The step that failed or was skipped
        message: Underlying cause
        hint: Suggested remediation, if any
        partial: True when the remote was left half-modified (release
            deleted, tag still present)
    """

    kind: ReconcileErrorKind
    step: ReconcileStep
    message: str
    hint: str | None = None
    partial: bool = False

    def pretty(self) -> str:
        text = f"{self.step}: {self.message}"
        if self.hint:
            return f"{text} (hint: {self.hint})"
        return text
