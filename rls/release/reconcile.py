"""Release reconciliation: create, reuse or recreate a release for a tag.

Decision order (first match wins):

1. draft request          -> create directly, no lookup
2. lookup fails           -> lookup_failed, nothing is created or deleted
3. no release for the tag -> create (warn if --recreate had nothing to replace)
4. release exists         -> reuse it, unless recreate was requested
5. recreate               -> delete release, delete tag ref, settle, create

Nothing is retried. Every failure is returned to the caller, including the
half-done state where the release is gone but its tag is not.
"""

from __future__ import annotations

from rls.core.cancel import CancelToken
from rls.core.result import Err, Ok, Result
from rls.core.timeouts import SETTLE_DELAY_SECONDS
from rls.output.console import ConsoleProtocol, Style
from rls.release.errors import ReconcileError, ReconcileErrorKind, ReconcileStep
from rls.release.model import ReleaseRequest, RemoteRelease
from rls.remote.gateway import Found, NotFound, ReleaseGateway, RemoteError, TransportError

__all__ = ["ReleaseReconciler"]


class ReleaseReconciler:
    """Converges one release request with what exists on the remote.

    Attributes:
        settle_seconds: Unconditional wait between tag deletion and recreation
    """

    def __init__(
        self,
        gateway: ReleaseGateway,
        *,
        console: ConsoleProtocol,
        settle_seconds: float = SETTLE_DELAY_SECONDS,
    ) -> None:
        self._gateway = gateway
        self._console = console
        self.settle_seconds = settle_seconds

    def reconcile(
        self,
        req: ReleaseRequest,
        *,
        recreate: bool,
        cancel: CancelToken | None = None,
    ) -> Result[RemoteRelease, ReconcileError]:
        """Create, reuse or recreate the release for `req.tag`.

        Args:
            req: The desired release
            recreate: Replace an existing release instead of reusing it
            cancel: Token checked before each remote call and during the settle wait

        Returns:
            Ok(release) as returned by the remote, or Err(ReconcileError)
        """
        token = cancel or CancelToken()

        # Drafts are not keyed by tag, so there is nothing to look up.
        if req.draft:
            self._console.step("Create a draft release")
            return self._create(req, token)

        if token.cancelled:
            return Err(_cancelled("lookup", "interrupted before looking up the release"))

        lookup = self._gateway.get_release_by_tag(req.tag, cancel=token)
        match lookup:
            case NotFound():
                if recreate:
                    self._console.warning(
                        f"--recreate is specified but release ({req.tag}) not found"
                    )
                self._console.step("Create a new release")
                return self._create(req, token)

            case Found(release=existing):
                if not recreate:
                    self._console.warning(f"found release ({req.tag}). Use existing one.")
                    return Ok(existing)
                self._console.step("Recreate a release")
                return self._recreate(req, existing, token)

            case TransportError():
                if lookup.cancelled:
                    return Err(_cancelled("lookup", "interrupted while looking up the release"))
                return Err(
                    ReconcileError(
                        kind="lookup_failed",
                        step="lookup",
                        message=str(lookup),
                        hint="existence of the release is unknown; nothing was created",
                    )
                )

    def _create(
        self, req: ReleaseRequest, token: CancelToken
    ) -> Result[RemoteRelease, ReconcileError]:
        if token.cancelled:
            return Err(_cancelled("create", f"interrupted before creating release {req.tag}"))

        created = self._gateway.create_release(req, cancel=token)
        if isinstance(created, Err):
            return Err(_remote_failure("create_failed", "create", created.error))
        return created

    def _recreate(
        self,
        req: ReleaseRequest,
        existing: RemoteRelease,
        token: CancelToken,
    ) -> Result[RemoteRelease, ReconcileError]:
        if token.cancelled:
            return Err(_cancelled("delete-release", "interrupted before deleting the release"))

        deleted = self._gateway.delete_release(existing.id, cancel=token)
        if isinstance(deleted, Err):
            return Err(_remote_failure("delete_release_failed", "delete-release", deleted.error))

        partial_hint = (
            f"release {existing.id} is gone but tag {req.tag} remains; "
            f"delete it manually (git push --delete origin {req.tag}) and rerun"
        )
        if token.cancelled:
            return Err(
                _cancelled(
                    "delete-tag",
                    "interrupted after deleting the release",
                    hint=partial_hint,
                    partial=True,
                )
            )

        tag_deleted = self._gateway.delete_tag_ref(req.tag, cancel=token)
        if isinstance(tag_deleted, Err):
            return Err(
                _remote_failure(
                    "delete_tag_failed",
                    "delete-tag",
                    tag_deleted.error,
                    hint=partial_hint,
                    partial=True,
                )
            )

        self._console.print(
            f"waiting {self.settle_seconds:g}s for the tag deletion to settle", Style.DIM
        )
        if token.wait(self.settle_seconds):
            return Err(
                _cancelled(
                    "settle",
                    "interrupted after deleting the release and its tag",
                    hint=f"rerun without --recreate to create {req.tag}",
                )
            )

        return self._create(req, token)


def _remote_failure(
    kind: ReconcileErrorKind,
    step: ReconcileStep,
    error: RemoteError,
    *,
    hint: str | None = None,
    partial: bool = False,
) -> ReconcileError:
    if error.cancelled:
        return _cancelled(step, str(error), hint=hint, partial=partial)
    message = str(error)
    if partial:
        message = f"partial deletion: {message}"
    return ReconcileError(kind=kind, step=step, message=message, hint=hint, partial=partial)


def _cancelled(
    step: ReconcileStep,
    message: str,
    *,
    hint: str | None = None,
    partial: bool = False,
) -> ReconcileError:
    return ReconcileError(kind="cancelled", step=step, message=message, hint=hint, partial=partial)
