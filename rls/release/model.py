from __future__ import annotations

from dataclasses import dataclass

from rls.core.structured import as_str_dict, get_bool, get_int, get_str


@dataclass(frozen=True, slots=True)
class ReleaseRequest:
    """The release the user wants to exist."""

    tag: str
    name: str
    target_commitish: str = ""
    draft: bool = False
    prerelease: bool = False
    body: str = ""

    def __post_init__(self) -> None:
        if not self.tag.strip():
            raise ValueError("release tag must not be empty")

    @classmethod
    def for_tag(
        cls,
        tag: str,
        *,
        name: str = "",
        target_commitish: str = "",
        draft: bool = False,
        prerelease: bool = False,
        body: str = "",
    ) -> ReleaseRequest:
        return cls(
            tag=tag,
            name=name or tag,
            target_commitish=target_commitish,
            draft=draft,
            prerelease=prerelease,
            body=body,
        )

    def to_json(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "tag_name": self.tag,
            "name": self.name,
            "draft": self.draft,
            "prerelease": self.prerelease,
            "body": self.body,
        }
        # Omitted, GitHub defaults to the repository's default branch.
        if self.target_commitish:
            payload["target_commitish"] = self.target_commitish
        return payload


@dataclass(frozen=True, slots=True)
class RemoteRelease:
    """Read snapshot of a release owned by the remote service."""

    id: int
    tag_name: str
    html_url: str
    draft: bool = False

    @classmethod
    def from_json(cls, obj: object) -> RemoteRelease | None:
        data = as_str_dict(obj)
        if data is None:
            return None

        release_id = get_int(data, "id")
        tag_name = get_str(data, "tag_name")
        if release_id is None or tag_name is None:
            return None

        return cls(
            id=release_id,
            tag_name=tag_name,
            html_url=get_str(data, "html_url") or "",
            draft=get_bool(data, "draft") or False,
        )
