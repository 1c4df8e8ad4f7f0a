from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ChangeKind(Enum):
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    IGNORE = "ignore"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    ChangeKind.MAJOR: "Major Change",
    ChangeKind.MINOR: "Minor Change",
    ChangeKind.PATCH: "Patch",
    ChangeKind.IGNORE: "Ignore",
}


@dataclass(frozen=True, slots=True)
class Commit:
    sha: str
    message: str

    @property
    def short_sha(self) -> str:
        return self.sha[:8]

    @property
    def subject(self) -> str:
        lines = self.message.strip().splitlines()
        return lines[0].strip() if lines else ""


@dataclass(slots=True)
class ChangeSet:
    """Commits grouped by the kind of change the user picked for them."""

    majors: list[Commit] = field(default_factory=list)
    minors: list[Commit] = field(default_factory=list)
    patches: list[Commit] = field(default_factory=list)
    ignored: list[Commit] = field(default_factory=list)

    def add(self, kind: ChangeKind, commit: Commit) -> None:
        match kind:
            case ChangeKind.MAJOR:
                self.majors.append(commit)
            case ChangeKind.MINOR:
                self.minors.append(commit)
            case ChangeKind.PATCH:
                self.patches.append(commit)
            case ChangeKind.IGNORE:
                self.ignored.append(commit)

    @property
    def is_empty(self) -> bool:
        return not (self.majors or self.minors or self.patches)
