"""Local git access."""

from .repository import GitError, Repository, parse_repo_name

__all__ = ["GitError", "Repository", "parse_repo_name"]
