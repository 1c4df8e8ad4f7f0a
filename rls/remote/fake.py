"""In-memory ReleaseGateway for tests.

Usage:
    gateway = FakeReleaseGateway()
    gateway.add_existing(RemoteRelease(id=42, tag_name="v1.2.0", html_url="..."))
    gateway.fail_delete_tag = RemoteError("delete_tag", "tags/v1.2.0", 422, "boom")

    ...reconcile...

    assert gateway.operations == ["lookup", "delete_release", "delete_tag", "create"]
"""

from __future__ import annotations

from dataclasses import dataclass, field

from rls.core.cancel import CancelToken
from rls.core.result import Err, Ok, Result
from rls.release.model import ReleaseRequest, RemoteRelease
from rls.remote.gateway import NOT_FOUND, Found, Lookup, RemoteError, TransportError

__all__ = ["FakeReleaseGateway", "GatewayCall"]


@dataclass(frozen=True, slots=True)
class GatewayCall:
    operation: str
    argument: object


def _empty_calls() -> list[GatewayCall]:
    return []


def _empty_releases() -> dict[str, RemoteRelease]:
    return {}


@dataclass
class FakeReleaseGateway:
    """Keeps releases in a dict keyed by tag and records every call.

    Set one of the `fail_*` / `lookup_error` attributes to make the matching
    operation fail without touching state.
    """

    releases: dict[str, RemoteRelease] = field(default_factory=_empty_releases)
    tags: set[str] = field(default_factory=set)
    calls: list[GatewayCall] = field(default_factory=_empty_calls)
    lookup_error: TransportError | None = None
    fail_create: RemoteError | None = None
    fail_delete_release: RemoteError | None = None
    fail_delete_tag: RemoteError | None = None
    next_id: int = 1000
    drafts: list[RemoteRelease] = field(default_factory=list)

    def add_existing(self, release: RemoteRelease) -> None:
        self.releases[release.tag_name] = release
        self.tags.add(release.tag_name)

    @property
    def operations(self) -> list[str]:
        return [c.operation for c in self.calls]

    def record(self, operation: str, argument: object) -> None:
        self.calls.append(GatewayCall(operation, argument))

    def create_release(
        self, req: ReleaseRequest, *, cancel: CancelToken | None = None
    ) -> Result[RemoteRelease, RemoteError]:
        del cancel
        self.record("create", req)
        if self.fail_create is not None:
            return Err(self.fail_create)

        # Drafts are not keyed by tag on GitHub; only published releases collide.
        if not req.draft and req.tag in self.releases:
            return Err(
                RemoteError(
                    operation="create",
                    target=req.tag,
                    status=422,
                    message="Validation Failed: already_exists",
                )
            )

        release = RemoteRelease(
            id=self.next_id,
            tag_name=req.tag,
            html_url=f"https://github.com/example/project/releases/tag/{req.tag}",
            draft=req.draft,
        )
        self.next_id += 1
        if req.draft:
            self.drafts.append(release)
        else:
            self.releases[req.tag] = release
            self.tags.add(req.tag)
        return Ok(release)

    def get_release_by_tag(self, tag: str, *, cancel: CancelToken | None = None) -> Lookup:
        del cancel
        self.record("lookup", tag)
        if self.lookup_error is not None:
            return self.lookup_error
        release = self.releases.get(tag)
        if release is None:
            return NOT_FOUND
        return Found(release)

    def delete_release(
        self, release_id: int, *, cancel: CancelToken | None = None
    ) -> Result[None, RemoteError]:
        del cancel
        self.record("delete_release", release_id)
        if self.fail_delete_release is not None:
            return Err(self.fail_delete_release)

        for tag, release in list(self.releases.items()):
            if release.id == release_id:
                del self.releases[tag]
                return Ok(None)
        return Err(
            RemoteError(
                operation="delete_release",
                target=str(release_id),
                status=404,
                message="Not Found",
            )
        )

    def delete_tag_ref(
        self, tag: str, *, cancel: CancelToken | None = None
    ) -> Result[None, RemoteError]:
        del cancel
        self.record("delete_tag", tag)
        if self.fail_delete_tag is not None:
            return Err(self.fail_delete_tag)
        if tag not in self.tags:
            return Err(
                RemoteError(
                    operation="delete_tag",
                    target=f"tags/{tag}",
                    status=422,
                    message="Reference does not exist",
                )
            )
        self.tags.discard(tag)
        return Ok(None)
