"""Verbose tracing around any ReleaseGateway (`rls --verbose`)."""

from __future__ import annotations

from rls.core.cancel import CancelToken
from rls.core.result import Err, Result
from rls.output.console import ConsoleProtocol, Style
from rls.release.model import ReleaseRequest, RemoteRelease
from rls.remote.gateway import Found, Lookup, NotFound, ReleaseGateway, RemoteError


class TracingGateway:
    """Delegates every call and prints one dim line per request and outcome."""

    def __init__(self, inner: ReleaseGateway, console: ConsoleProtocol) -> None:
        self._inner = inner
        self._console = console

    def create_release(
        self, req: ReleaseRequest, *, cancel: CancelToken | None = None
    ) -> Result[RemoteRelease, RemoteError]:
        self._trace(f"create release {req.tag} (draft={req.draft}, prerelease={req.prerelease})")
        result = self._inner.create_release(req, cancel=cancel)
        if isinstance(result, Err):
            self._trace(f"  -> failed: {result.error}")
        else:
            self._trace(f"  -> created id={result.value.id}")
        return result

    def get_release_by_tag(self, tag: str, *, cancel: CancelToken | None = None) -> Lookup:
        self._trace(f"get release by tag {tag}")
        lookup = self._inner.get_release_by_tag(tag, cancel=cancel)
        match lookup:
            case Found(release=release):
                self._trace(f"  -> found id={release.id} draft={release.draft}")
            case NotFound():
                self._trace("  -> not found")
            case _:
                self._trace(f"  -> failed: {lookup}")
        return lookup

    def delete_release(
        self, release_id: int, *, cancel: CancelToken | None = None
    ) -> Result[None, RemoteError]:
        self._trace(f"delete release id={release_id}")
        return self._traced(self._inner.delete_release(release_id, cancel=cancel))

    def delete_tag_ref(
        self, tag: str, *, cancel: CancelToken | None = None
    ) -> Result[None, RemoteError]:
        self._trace(f"delete tag ref tags/{tag}")
        return self._traced(self._inner.delete_tag_ref(tag, cancel=cancel))

    def _traced(self, result: Result[None, RemoteError]) -> Result[None, RemoteError]:
        if isinstance(result, Err):
            self._trace(f"  -> failed: {result.error}")
        else:
            self._trace("  -> deleted")
        return result

    def _trace(self, message: str) -> None:
        self._console.print(message, Style.DIM)
