"""Tests for the GitHub REST gateway, driven through MockHttpClient."""

from __future__ import annotations

import pytest

from rls.core.cancel import CancelToken
from rls.core.config import ConfigError, GatewayConfig
from rls.core.result import Err, Ok
from rls.release.model import ReleaseRequest, RemoteRelease
from rls.remote.gateway import NOT_FOUND, Found, ReleaseGateway, TransportError
from rls.remote.github import GitHubGateway
from rls.remote.http import HttpError, HttpResponse, MockHttpClient

BASE = "https://api.github.com/repos/octo/project"

RELEASE_JSON = {
    "id": 42,
    "tag_name": "v1.2.0",
    "html_url": "https://github.com/octo/project/releases/tag/v1.2.0",
    "draft": False,
}


def _gateway(http: MockHttpClient, **overrides: str) -> GitHubGateway:
    fields = {"owner": "octo", "repo": "project", "token": "s3cret", **overrides}
    return GitHubGateway(GatewayConfig(**fields), http=http)


class TestConstruction:
    @pytest.mark.parametrize("field", ["owner", "repo", "token"])
    def test_empty_field_is_config_error(self, field: str) -> None:
        with pytest.raises(ConfigError) as excinfo:
            _gateway(MockHttpClient(), **{field: ""})
        assert excinfo.value.field == field

    def test_relative_api_url_is_config_error(self) -> None:
        with pytest.raises(ConfigError):
            _gateway(MockHttpClient(), api_url="not-a-url")

    def test_satisfies_protocol(self) -> None:
        assert isinstance(_gateway(MockHttpClient()), ReleaseGateway)

    def test_enterprise_base_url(self) -> None:
        http = MockHttpClient()
        gateway = _gateway(http, api_url="https://ghe.example.com/api/v3")
        gateway.get_release_by_tag("v1")
        assert http.calls[0].url == (
            "https://ghe.example.com/api/v3/repos/octo/project/releases/tags/v1"
        )

    def test_headers(self) -> None:
        http = MockHttpClient()
        _gateway(http).get_release_by_tag("v1")
        headers = http.calls[0].headers
        assert headers["Authorization"] == "Bearer s3cret"
        assert headers["Accept"] == "application/vnd.github+json"
        assert headers["User-Agent"].startswith("rls/")


class TestCreateRelease:
    def test_created(self) -> None:
        http = MockHttpClient()
        http.set_json("POST", f"{BASE}/releases", 201, RELEASE_JSON)
        req = ReleaseRequest.for_tag("v1.2.0", target_commitish="main", body="notes")

        result = _gateway(http).create_release(req)

        assert result == Ok(
            RemoteRelease(
                id=42,
                tag_name="v1.2.0",
                html_url="https://github.com/octo/project/releases/tag/v1.2.0",
            )
        )
        assert http.calls[0].json_body == {
            "tag_name": "v1.2.0",
            "name": "v1.2.0",
            "draft": False,
            "prerelease": False,
            "body": "notes",
            "target_commitish": "main",
        }

    def test_non_201_is_error(self) -> None:
        http = MockHttpClient()
        http.set_json("POST", f"{BASE}/releases", 422, {"message": "Validation Failed"})

        result = _gateway(http).create_release(ReleaseRequest.for_tag("v1.2.0"))

        assert isinstance(result, Err)
        assert result.error.operation == "create"
        assert result.error.status == 422
        assert str(result.error) == "create v1.2.0: invalid status 422: Validation Failed"

    def test_200_is_not_created(self) -> None:
        http = MockHttpClient()
        http.set_json("POST", f"{BASE}/releases", 200, RELEASE_JSON)
        result = _gateway(http).create_release(ReleaseRequest.for_tag("v1.2.0"))
        assert isinstance(result, Err)
        assert result.error.status == 200

    def test_bad_payload(self) -> None:
        http = MockHttpClient()
        http.set_json("POST", f"{BASE}/releases", 201, {"id": "nope"})
        result = _gateway(http).create_release(ReleaseRequest.for_tag("v1.2.0"))
        assert isinstance(result, Err)
        assert result.error.message == "unexpected release payload"

    def test_transport_failure(self) -> None:
        http = MockHttpClient()
        url = f"{BASE}/releases"
        http.set_response("POST", url, HttpError(url=url, message="connection reset"))
        result = _gateway(http).create_release(ReleaseRequest.for_tag("v1.2.0"))
        assert isinstance(result, Err)
        assert result.error.status == 0
        assert str(result.error) == "create v1.2.0: connection reset"


class TestGetReleaseByTag:
    def test_found(self) -> None:
        http = MockHttpClient()
        http.set_json("GET", f"{BASE}/releases/tags/v1.2.0", 200, RELEASE_JSON)
        lookup = _gateway(http).get_release_by_tag("v1.2.0")
        assert isinstance(lookup, Found)
        assert lookup.release.id == 42

    def test_404_is_not_found(self) -> None:
        http = MockHttpClient()
        http.set_json("GET", f"{BASE}/releases/tags/v9", 404, {"message": "Not Found"})
        assert _gateway(http).get_release_by_tag("v9") == NOT_FOUND

    def test_server_error_is_transport_error(self) -> None:
        http = MockHttpClient()
        http.set_response(
            "GET", f"{BASE}/releases/tags/v1", HttpResponse(status=500, reason="Server Error")
        )
        lookup = _gateway(http).get_release_by_tag("v1")
        assert isinstance(lookup, TransportError)
        assert lookup.status == 500
        assert str(lookup) == "get release v1: invalid status 500: Server Error"

    def test_unauthorized_is_transport_error_not_absence(self) -> None:
        http = MockHttpClient()
        http.set_json("GET", f"{BASE}/releases/tags/v1", 401, {"message": "Bad credentials"})
        lookup = _gateway(http).get_release_by_tag("v1")
        assert isinstance(lookup, TransportError)
        assert lookup.message == "Bad credentials"

    def test_network_failure(self) -> None:
        http = MockHttpClient()
        url = f"{BASE}/releases/tags/v1"
        http.set_response("GET", url, HttpError(url=url, message="timed out"))
        lookup = _gateway(http).get_release_by_tag("v1")
        assert lookup == TransportError(tag="v1", status=0, message="timed out")

    def test_cancelled(self) -> None:
        token = CancelToken()
        token.cancel()
        lookup = _gateway(MockHttpClient()).get_release_by_tag("v1", cancel=token)
        assert isinstance(lookup, TransportError)
        assert lookup.cancelled is True

    def test_tag_is_quoted(self) -> None:
        http = MockHttpClient()
        _gateway(http).get_release_by_tag("release/1.0")
        assert http.calls[0].url == f"{BASE}/releases/tags/release%2F1.0"


class TestDeletes:
    def test_delete_release_204(self) -> None:
        http = MockHttpClient()
        http.set_response("DELETE", f"{BASE}/releases/42", HttpResponse(status=204))
        assert _gateway(http).delete_release(42) == Ok(None)

    def test_delete_release_200_is_error(self) -> None:
        http = MockHttpClient()
        http.set_response("DELETE", f"{BASE}/releases/42", HttpResponse(status=200))
        result = _gateway(http).delete_release(42)
        assert isinstance(result, Err)
        assert result.error.operation == "delete_release"
        assert result.error.target == "42"

    def test_delete_tag_ref_204(self) -> None:
        http = MockHttpClient()
        http.set_response("DELETE", f"{BASE}/git/refs/tags/v1.2.0", HttpResponse(status=204))
        assert _gateway(http).delete_tag_ref("v1.2.0") == Ok(None)

    def test_delete_tag_ref_failure(self) -> None:
        http = MockHttpClient()
        http.set_json(
            "DELETE", f"{BASE}/git/refs/tags/v1.2.0", 422, {"message": "Reference does not exist"}
        )
        result = _gateway(http).delete_tag_ref("v1.2.0")
        assert isinstance(result, Err)
        assert str(result.error) == (
            "delete tag tags/v1.2.0: invalid status 422: Reference does not exist"
        )


class TestListCommits:
    def test_parses_commits(self) -> None:
        http = MockHttpClient()
        http.set_json(
            "GET",
            f"{BASE}/commits?per_page=100&sha=main",
            200,
            [
                {"sha": "a" * 40, "commit": {"message": "add feature\n\ndetails"}},
                {"sha": "b" * 40, "commit": {"message": "fix bug"}},
                {"unexpected": True},
            ],
        )

        result = _gateway(http).list_commits(sha="main")

        assert isinstance(result, Ok)
        assert [c.sha for c in result.value] == ["a" * 40, "b" * 40]
        assert result.value[0].subject == "add feature"

    def test_default_branch_and_limit(self) -> None:
        http = MockHttpClient()
        http.set_json("GET", f"{BASE}/commits?per_page=10", 200, [])
        assert _gateway(http).list_commits(limit=10) == Ok([])

    def test_error_status(self) -> None:
        http = MockHttpClient()
        http.set_json(
            "GET", f"{BASE}/commits?per_page=100", 409, {"message": "Git Repository is empty."}
        )
        result = _gateway(http).list_commits()
        assert isinstance(result, Err)
        assert result.error.operation == "list_commits"
        assert result.error.message == "Git Repository is empty."
