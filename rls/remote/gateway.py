"""The remote release contract the reconciler is written against.

Four capabilities only: create, look up by tag, delete release, delete tag
ref. Any object implementing them (GitHubGateway, FakeReleaseGateway, the
tracing wrapper) can drive a reconcile.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol, runtime_checkable

from rls.core.cancel import CancelToken
from rls.core.result import Result
from rls.release.model import ReleaseRequest, RemoteRelease

__all__ = [
    "NOT_FOUND",
    "Found",
    "Lookup",
    "NotFound",
    "ReleaseGateway",
    "RemoteError",
    "RemoteOperation",
    "TransportError",
]

RemoteOperation = Literal["create", "delete_release", "delete_tag", "list_commits"]


@dataclass(frozen=True, slots=True)
class Found:
    release: RemoteRelease


@dataclass(frozen=True, slots=True)
class NotFound:
    """The remote confirmed there is no release for the tag."""


NOT_FOUND = NotFound()


@dataclass(frozen=True, slots=True)
class TransportError:
    """A lookup whose answer is unknown.

    Attributes:
        tag: The tag that was looked up
        status: Unexpected HTTP status, or 0 when no response was obtained
        message: Underlying cause
        cancelled: True if the caller's cancel token fired
    """

    tag: str
    status: int
    message: str
    cancelled: bool = False

    def __str__(self) -> str:
        if self.status:
            return f"get release {self.tag}: invalid status {self.status}: {self.message}"
        return f"get release {self.tag}: {self.message}"


@dataclass(frozen=True, slots=True)
class RemoteError:
    """A mutating call the remote did not confirm.

    Attributes:
        operation: Which call failed
        target: Tag name or release id the call was about
        status: HTTP status, or 0 when no response was obtained
        message: Underlying cause
        cancelled: True if the caller's cancel token fired
    """

    operation: RemoteOperation
    target: str
    status: int
    message: str
    cancelled: bool = False

    def __str__(self) -> str:
        what = self.operation.replace("_", " ")
        if self.status:
            return f"{what} {self.target}: invalid status {self.status}: {self.message}"
        return f"{what} {self.target}: {self.message}"


type Lookup = Found | NotFound | TransportError


@runtime_checkable
class ReleaseGateway(Protocol):
    """Release operations against one owner/repo scope."""

    def create_release(
        self, req: ReleaseRequest, *, cancel: CancelToken | None = None
    ) -> Result[RemoteRelease, RemoteError]:
        """Create a release. Succeeds only if the remote reports it as created."""
        ...

    def get_release_by_tag(self, tag: str, *, cancel: CancelToken | None = None) -> Lookup:
        """Fetch the release for a tag, telling "absent" apart from "unknown"."""
        ...

    def delete_release(
        self, release_id: int, *, cancel: CancelToken | None = None
    ) -> Result[None, RemoteError]: ...

    def delete_tag_ref(
        self, tag: str, *, cancel: CancelToken | None = None
    ) -> Result[None, RemoteError]: ...
