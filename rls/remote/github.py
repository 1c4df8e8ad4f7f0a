"""GitHub REST implementation of ReleaseGateway.

Status codes are checked strictly: a create must answer 201, a delete 204,
and only a 404 on lookup means "no release for this tag".
"""

from __future__ import annotations

from urllib.parse import quote

from rls import __version__
from rls.changes.model import Commit
from rls.core.cancel import CancelToken
from rls.core.config import GatewayConfig
from rls.core.result import Err, Ok, Result
from rls.core.structured import as_obj_list, as_str_dict, get_str, get_table
from rls.release.model import ReleaseRequest, RemoteRelease
from rls.remote.gateway import (
    NOT_FOUND,
    Found,
    Lookup,
    RemoteError,
    RemoteOperation,
    TransportError,
)
from rls.remote.http import HttpClient, HttpError, HttpResponse, RealHttpClient

__all__ = ["GitHubGateway"]

_API_VERSION = "2022-11-28"
_MAX_PAGE_SIZE = 100


class GitHubGateway:
    """Release operations for one GitHub repository.

    Raises:
        ConfigError: If owner, repo or token is empty, or the API URL is not absolute.
    """

    def __init__(self, config: GatewayConfig, http: HttpClient | None = None) -> None:
        validated = config.validate()
        if isinstance(validated, Err):
            raise validated.error

        self.config = config
        self._http = http or RealHttpClient()
        self._base = config.api_url.rstrip("/") + "/"
        self._repo_path = f"repos/{quote(config.owner, safe='')}/{quote(config.repo, safe='')}"
        self._headers = {
            "Authorization": f"Bearer {config.token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": _API_VERSION,
            "User-Agent": f"rls/{__version__}",
        }

    def create_release(
        self, req: ReleaseRequest, *, cancel: CancelToken | None = None
    ) -> Result[RemoteRelease, RemoteError]:
        result = self._request("POST", "releases", json_body=req.to_json(), cancel=cancel)
        if isinstance(result, Err):
            return Err(_remote_error("create", req.tag, result.error))

        response = result.value
        if response.status != 201:
            return Err(_status_error("create", req.tag, response))

        release = RemoteRelease.from_json(response.json())
        if release is None:
            return Err(
                RemoteError(
                    operation="create",
                    target=req.tag,
                    status=response.status,
                    message="unexpected release payload",
                )
            )
        return Ok(release)

    def get_release_by_tag(self, tag: str, *, cancel: CancelToken | None = None) -> Lookup:
        result = self._request("GET", f"releases/tags/{quote(tag, safe='')}", cancel=cancel)
        if isinstance(result, Err):
            return TransportError(
                tag=tag,
                status=0,
                message=result.error.message,
                cancelled=result.error.cancelled,
            )

        response = result.value
        if response.status == 404:
            return NOT_FOUND
        if response.status != 200:
            return TransportError(
                tag=tag, status=response.status, message=_error_message(response)
            )

        release = RemoteRelease.from_json(response.json())
        if release is None:
            return TransportError(
                tag=tag, status=response.status, message="unexpected release payload"
            )
        return Found(release)

    def delete_release(
        self, release_id: int, *, cancel: CancelToken | None = None
    ) -> Result[None, RemoteError]:
        result = self._request("DELETE", f"releases/{release_id}", cancel=cancel)
        return _expect_no_content("delete_release", str(release_id), result)

    def delete_tag_ref(
        self, tag: str, *, cancel: CancelToken | None = None
    ) -> Result[None, RemoteError]:
        ref = f"tags/{tag}"
        result = self._request("DELETE", f"git/refs/{quote(ref, safe='/')}", cancel=cancel)
        return _expect_no_content("delete_tag", ref, result)

    def list_commits(
        self,
        *,
        sha: str | None = None,
        limit: int = _MAX_PAGE_SIZE,
        cancel: CancelToken | None = None,
    ) -> Result[list[Commit], RemoteError]:
        """List recent commits, newest first, from `sha` or the default branch."""
        per_page = max(1, min(limit, _MAX_PAGE_SIZE))
        query = f"commits?per_page={per_page}"
        if sha:
            query += f"&sha={quote(sha, safe='')}"

        result = self._request("GET", query, cancel=cancel)
        target = sha or "default branch"
        if isinstance(result, Err):
            return Err(
                RemoteError(
                    operation="list_commits",
                    target=target,
                    status=0,
                    message=result.error.message,
                    cancelled=result.error.cancelled,
                )
            )

        response = result.value
        raw = as_obj_list(response.json()) if response.status == 200 else None
        if raw is None:
            return Err(
                RemoteError(
                    operation="list_commits",
                    target=target,
                    status=response.status,
                    message=_error_message(response),
                )
            )

        commits: list[Commit] = []
        for item in raw:
            d = as_str_dict(item)
            if d is None:
                continue
            commit_sha = get_str(d, "sha")
            commit_tbl = get_table(d, "commit")
            if commit_sha is None or commit_tbl is None:
                continue
            commits.append(Commit(sha=commit_sha, message=get_str(commit_tbl, "message") or ""))
        return Ok(commits)

    def _request(
        self,
        method: str,
        path: str,
        *,
        json_body: dict[str, object] | None = None,
        cancel: CancelToken | None,
    ) -> Result[HttpResponse, HttpError]:
        url = f"{self._base}{self._repo_path}/{path}"
        return self._http.request(
            method, url, headers=self._headers, json_body=json_body, cancel=cancel
        )


def _expect_no_content(
    operation: RemoteOperation,
    target: str,
    result: Result[HttpResponse, HttpError],
) -> Result[None, RemoteError]:
    if isinstance(result, Err):
        return Err(_remote_error(operation, target, result.error))
    if result.value.status != 204:
        return Err(_status_error(operation, target, result.value))
    return Ok(None)


def _remote_error(operation: RemoteOperation, target: str, error: HttpError) -> RemoteError:
    return RemoteError(
        operation=operation,
        target=target,
        status=0,
        message=error.message,
        cancelled=error.cancelled,
    )


def _status_error(operation: RemoteOperation, target: str, response: HttpResponse) -> RemoteError:
    return RemoteError(
        operation=operation,
        target=target,
        status=response.status,
        message=_error_message(response),
    )


def _error_message(response: HttpResponse) -> str:
    """Prefer GitHub's own `message` field over the bare reason phrase."""
    data = as_str_dict(response.json())
    if data is not None:
        message = get_str(data, "message")
        if message is not None:
            return message
    return response.reason or f"HTTP {response.status}"
