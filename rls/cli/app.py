from __future__ import annotations

import os
from pathlib import Path
from typing import NoReturn

import typer

from rls import NAME, __version__
from rls.changes.classify import Chooser, classify_commits, interactive_chooser
from rls.changes.model import Commit
from rls.changes.notes import render_notes
from rls.cli.selector import is_interactive_terminal
from rls.core.cancel import CancelToken
from rls.core.config import ConfigError, GatewayConfig, ResolveError, resolve_config
from rls.core.errors import ErrorCode
from rls.core.result import Err, Ok, Result
from rls.git.repository import Repository
from rls.output.console import ConsoleProtocol, RichConsole, Style
from rls.release.model import ReleaseRequest
from rls.release.reconcile import ReleaseReconciler
from rls.remote.gateway import ReleaseGateway
from rls.remote.github import GitHubGateway
from rls.remote.tracing import TracingGateway

HELP = """
Create a Release on GitHub from interactively classified commits.

You must give a TAG (e.g. v1.0.0). PATH is a local git working tree to read
commits from; without it, commits are listed from the GitHub repository.

A GitHub API token needs the `repo` scope for private repositories and
`public_repo` for public ones. Set GITHUB_API to use GitHub Enterprise.
"""

app = typer.Typer(
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_string() -> str:
    return f"{NAME} version v{__version__}"


def exit_with(
    console: ConsoleProtocol, message: str, *, code: ErrorCode, hint: str | None = None
) -> NoReturn:
    console.error(message)
    if hint:
        console.print(f"hint: {hint}", Style.DIM)
    raise typer.Exit(code=int(code))


def build_console() -> ConsoleProtocol:
    return RichConsole()


def make_gateway(config: GatewayConfig) -> GitHubGateway:
    return GitHubGateway(config)


def make_chooser() -> Chooser | None:
    if not is_interactive_terminal():
        return None
    return interactive_chooser()


def collect_commits(
    *, path: Path | None, github: GitHubGateway, commitish: str, cancel: CancelToken
) -> Result[list[Commit], str]:
    if path is not None:
        log = Repository(path).log()
        if isinstance(log, Err):
            return Err(f"failed to read git log in {path}: {log.error.message}")
        return Ok(log.value)

    listed = github.list_commits(sha=commitish or None, cancel=cancel)
    if isinstance(listed, Err):
        return Err(str(listed.error))
    return Ok(listed.value)


def _resolve_error_code(error: ResolveError) -> ErrorCode:
    if error.kind == "token_missing":
        return ErrorCode.TOKEN_NOT_FOUND
    return ErrorCode.OWNER_NOT_FOUND


@app.command(help=HELP)
def release(
    args: list[str] | None = typer.Argument(None, metavar="TAG [PATH]", show_default=False),
    owner: str | None = typer.Option(
        None, "--owner", "--username", "-u", help="Repository owner (default: git config)."
    ),
    repository: str | None = typer.Option(
        None, "--repository", "-r", help="Repository name (default: .git/config origin)."
    ),
    token: str | None = typer.Option(
        None, "--token", "-t", help="GitHub API token (default: GITHUB_TOKEN)."
    ),
    commitish: str = typer.Option(
        "", "--commitish", "-c", help="Branch or commit the tag points at."
    ),
    draft: bool = typer.Option(False, "--draft", help="Create an unpublished draft release."),
    prerelease: bool = typer.Option(
        False, "--prerelease", help="Mark the release as a prerelease."
    ),
    recreate: bool = typer.Option(
        False,
        "--recreate",
        "--delete",
        "--update",
        help="Delete and recreate the release (and its tag) if it already exists.",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Trace every GitHub API call."),
    version: bool = typer.Option(False, "--version", "-v", help="Show version and exit."),
) -> None:
    if version:
        typer.echo(version_string())
        raise typer.Exit(code=int(ErrorCode.OK))

    console = build_console()

    positional = args or []
    if len(positional) not in (1, 2) or not positional[0].strip():
        exit_with(
            console,
            "invalid argument: you must set TAG (and optionally PATH)",
            code=ErrorCode.BAD_ARGS,
        )
    tag = positional[0].strip()
    path = Path(positional[1]).expanduser() if len(positional) == 2 else None

    resolved = resolve_config(
        owner=owner,
        repo=repository,
        token=token,
        cwd=path or Path.cwd(),
        env=os.environ,
    )
    if isinstance(resolved, Err):
        exit_with(
            console,
            f"failed to set up {NAME}: {resolved.error.message}",
            code=_resolve_error_code(resolved.error),
            hint=resolved.error.hint,
        )
    config = resolved.value

    try:
        github = make_gateway(config)
    except ConfigError as e:
        exit_with(console, f"failed to construct GitHub client: {e.message}", code=ErrorCode.ERROR)

    chooser = make_chooser()
    if chooser is None:
        exit_with(
            console,
            "classifying commits needs an interactive terminal",
            code=ErrorCode.ERROR,
        )

    cancel = CancelToken()
    with cancel.install_sigint():
        commits = collect_commits(path=path, github=github, commitish=commitish, cancel=cancel)
        if isinstance(commits, Err):
            exit_with(console, commits.error, code=ErrorCode.ERROR)

        changes = classify_commits(commits.value, chooser, cancel=cancel)
        if cancel.cancelled:
            exit_with(console, "interrupted while classifying commits", code=ErrorCode.ERROR)
        if changes.is_empty:
            console.warning("no commit was classified; the release notes will be empty")

        request = ReleaseRequest.for_tag(
            tag,
            target_commitish=commitish,
            draft=draft,
            prerelease=prerelease,
            body=render_notes(changes),
        )

        gateway: ReleaseGateway = TracingGateway(github, console) if verbose else github
        reconciler = ReleaseReconciler(gateway, console=console)
        outcome = reconciler.reconcile(request, recreate=recreate, cancel=cancel)

    if isinstance(outcome, Err):
        error = outcome.error
        exit_with(
            console,
            f"failed to create GitHub release page: {error.step}: {error.message}",
            code=ErrorCode.ERROR,
            hint=error.hint,
        )

    console.success(f"\nRelease success! {outcome.value.html_url}")


def main() -> None:
    # Standalone mode lets the framework print usage errors; its exit statuses are
    # then mapped onto ours (usage error 2 -> PARSE_FLAGS_ERROR).
    try:
        app()
    except SystemExit as e:
        raise SystemExit(int(ErrorCode.from_exit_status(e.code))) from None
