"""Gateway configuration and how it is resolved.

Owner, repository and token come from flags first, then from the environment
and git config, the same places a user of `ghr`-style tools expects them.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Literal
from urllib.parse import urlparse

from rls.git.repository import Repository

from .result import Err, Ok, Result

__all__ = [
    "DEFAULT_API_URL",
    "ENV_GITHUB_API",
    "ENV_GITHUB_TOKEN",
    "ConfigError",
    "GatewayConfig",
    "ResolveError",
    "resolve_config",
]

ENV_GITHUB_TOKEN = "GITHUB_TOKEN"
# Base endpoint override, mainly for GitHub Enterprise.
ENV_GITHUB_API = "GITHUB_API"
DEFAULT_API_URL = "https://api.github.com/"


class ConfigError(Exception):
    """Invalid or missing gateway construction parameter.

    Attributes:
        field: The offending config field (owner, repo, token, api_url)
        message: Human-readable explanation
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


@dataclass(frozen=True, slots=True)
class GatewayConfig:
    """Scope and credentials for one remote repository."""

    owner: str
    repo: str
    token: str
    api_url: str = DEFAULT_API_URL

    def validate(self) -> Result[GatewayConfig, ConfigError]:
        if not self.owner.strip():
            return Err(ConfigError("owner", "missing GitHub repository owner"))
        if not self.repo.strip():
            return Err(ConfigError("repo", "missing GitHub repository name"))
        if not self.token.strip():
            return Err(ConfigError("token", "missing GitHub API token"))
        if not self.api_url.strip():
            return Err(ConfigError("api_url", "missing GitHub API URL"))

        parsed = urlparse(self.api_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            return Err(
                ConfigError("api_url", f"GitHub API URL is not an absolute URL: {self.api_url}")
            )
        return Ok(self)


@dataclass(frozen=True, slots=True)
class ResolveError:
    kind: Literal["owner_missing", "repo_missing", "token_missing"]
    message: str
    hint: str | None = None


def resolve_config(
    *,
    owner: str | None,
    repo: str | None,
    token: str | None,
    cwd: Path,
    env: Mapping[str, str],
) -> Result[GatewayConfig, ResolveError]:
    """Fill in missing values from git config and the environment.

    Args:
        owner: --owner flag value
        repo: --repository flag value
        token: --token flag value
        cwd: Directory whose .git/config names the repository
        env: Environment mapping (os.environ in production)

    Returns:
        Ok(GatewayConfig), not yet validated, or Err(ResolveError)
    """
    git = Repository(cwd)

    owner = owner or git.config_value("github.user") or git.config_value("user.name")
    if not owner:
        return Err(
            ResolveError(
                kind="owner_missing",
                message="repository owner name not found",
                hint="set it via -u, or `github.user` / `user.name` in ~/.gitconfig",
            )
        )

    repo = repo or git.origin_repo_name()
    if not repo:
        return Err(
            ResolveError(
                kind="repo_missing",
                message="repository name not found",
                hint="run from the repository root (reads .git/config) or set it via -r",
            )
        )

    token = token or env.get(ENV_GITHUB_TOKEN) or git.config_value("github.token")
    if not token:
        return Err(
            ResolveError(
                kind="token_missing",
                message="GitHub API token not found",
                hint=f"set it via the {ENV_GITHUB_TOKEN} env var or -t",
            )
        )

    api_url = env.get(ENV_GITHUB_API) or DEFAULT_API_URL
    return Ok(GatewayConfig(owner=owner, repo=repo, token=token, api_url=api_url))
