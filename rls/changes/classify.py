"""Ask the user what kind of change each commit is."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from rls.changes.model import ChangeKind, ChangeSet, Commit
from rls.core.cancel import CancelToken

# Returns the kind for a commit, or None to stop classifying.
Chooser = Callable[[Commit, int, int], ChangeKind | None]


def classify_commits(
    commits: Iterable[Commit],
    choose: Chooser,
    *,
    cancel: CancelToken | None = None,
) -> ChangeSet:
    """Walk commits newest first until the chooser returns None or `cancel` fires."""
    items = list(commits)
    changes = ChangeSet()
    for index, commit in enumerate(items):
        if cancel is not None and cancel.cancelled:
            break
        kind = choose(commit, index, len(items))
        if kind is None:
            break
        changes.add(kind, commit)
    return changes


def interactive_chooser() -> Chooser:
    from rls.cli.selector import SelectorOption, select_one

    options: list[SelectorOption[ChangeKind | None]] = [
        SelectorOption(value=kind, label=kind.label) for kind in ChangeKind
    ]
    options.append(SelectorOption(value=None, label="End"))

    def _choose(commit: Commit, index: int, total: int) -> ChangeKind | None:
        picked = select_one(
            title=(
                f"[{index + 1}/{total}] Commit '{commit.subject}' ({commit.short_sha}) "
                "is a change of:"
            ),
            options=options,
        )
        if picked.action == "cancel":
            return None
        return picked.value

    return _choose
