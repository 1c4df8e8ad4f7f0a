"""Local git repository access.

All operations shell out to `git` and return Result types.

Usage:
    repo = Repository(Path("."))
    match repo.log(limit=50):
        case Ok(commits):
            for c in commits:
                print(c.short_sha, c.subject)
        case Err(e):
            print(f"git log failed: {e.message}")
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from rls.changes.model import Commit
from rls.core.result import Err, Ok, Result
from rls.core.timeouts import GIT_TIMEOUT_SECONDS
from rls.platform.process import ProcessError
from rls.platform.process import run as run_process

__all__ = ["GitError", "Repository", "parse_repo_name"]

# Unit/record separators never appear in commit messages.
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"

_SCP_URL = re.compile(r"^[\w.-]+@[\w.-]+:(?P<path>.+)$")


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


def parse_repo_name(url: str) -> str | None:
    """Extract the repository name from a remote URL.

    Handles `git@host:owner/name.git`, `https://host/owner/name(.git)` and
    `ssh://git@host/owner/name.git`.
    """
    url = url.strip()
    if not url:
        return None

    m = _SCP_URL.match(url)
    path = m.group("path") if m else url.split("://", 1)[-1]
    name = path.rstrip("/").rsplit("/", 1)[-1]
    if name.endswith(".git"):
        name = name[: -len(".git")]
    return name or None


class Repository:
    """A git working tree on disk.

    Attributes:
        path: Path to the repository (or any directory inside it)
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def log(self, limit: int | None = None) -> Result[list[Commit], GitError]:
        """List commits reachable from HEAD, newest first."""
        args = ["log", "--format=%H%x1f%B%x1e"]
        if limit is not None:
            args.append(f"--max-count={limit}")

        result = self._run(args)
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command="log",
                        message=e.stderr.strip() or "git log failed",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                return Ok(_parse_log(stdout))

    def config_value(self, key: str) -> str | None:
        """Read a git config value; None when unset or git is unavailable."""
        result = self._run(["config", "--get", key])
        if isinstance(result, Err):
            return None
        value = result.value.strip()
        return value or None

    def origin_repo_name(self) -> str | None:
        url = self.config_value("remote.origin.url")
        if url is None:
            return None
        return parse_repo_name(url)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        return run_process(["git", *args], cwd=self.path, timeout=GIT_TIMEOUT_SECONDS)


def _parse_log(stdout: str) -> list[Commit]:
    commits: list[Commit] = []
    for record in stdout.split(_RECORD_SEP):
        record = record.strip("\n")
        if not record:
            continue
        sha, _, message = record.partition(_FIELD_SEP)
        sha = sha.strip()
        if not sha:
            continue
        commits.append(Commit(sha=sha, message=message.strip()))
    return commits
