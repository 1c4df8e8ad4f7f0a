"""HTTP transport for the GitHub REST API.

This module provides:
- HttpClient: Protocol for HTTP operations (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Mock implementation for testing

A response with any status code is a successful *transport* outcome; callers
decide what a 404 or 422 means. Only network failures and cancellation are
returned as HttpError.
"""

from __future__ import annotations

import http.client
import json
import ssl
import threading
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from rls import __version__
from rls.core.cancel import CancelToken
from rls.core.result import Err, Ok, Result
from rls.core.timeouts import CANCEL_POLL_SECONDS, HTTP_TIMEOUT_SECONDS

__all__ = [
    "HttpClient",
    "HttpError",
    "HttpResponse",
    "MockHttpClient",
    "RealHttpClient",
]

JsonBody = dict[str, object]


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """A response as received, whatever its status.

    Attributes:
        status: HTTP status code
        reason: Status reason phrase
        body: Raw response body
    """

    status: int
    reason: str = ""
    body: bytes = b""

    def json(self) -> object | None:
        """Decode the body as JSON; None if empty or malformed."""
        if not self.body:
            return None
        try:
            obj: object = json.loads(self.body.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError):
            return None
        return obj


@dataclass(frozen=True, slots=True)
class HttpError:
    """Transport-level failure: no HTTP response was obtained.

    Attributes:
        url: The URL that failed
        message: Human-readable error message
        cancelled: True if the caller's cancel token fired
    """

    url: str
    message: str
    cancelled: bool = False

    def __str__(self) -> str:
        return f"{self.message} ({self.url})"


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP requests."""

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        json_body: JsonBody | None = None,
        cancel: CancelToken | None = None,
    ) -> Result[HttpResponse, HttpError]:
        """Send one request.

        Args:
            method: HTTP method (GET, POST, DELETE, ...)
            url: Absolute URL
            headers: Request headers
            json_body: Optional body, sent as application/json
            cancel: Token that aborts the wait for a response

        Returns:
            Ok(HttpResponse) for any status, Err(HttpError) on transport failure
        """
        ...


class RealHttpClient:
    """HTTP client using urllib with system certificates."""

    def __init__(
        self,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        user_agent: str = f"rls/{__version__}",
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        json_body: JsonBody | None = None,
        cancel: CancelToken | None = None,
    ) -> Result[HttpResponse, HttpError]:
        if cancel is None:
            return self._send(method, url, headers, json_body)
        if cancel.cancelled:
            return Err(HttpError(url=url, message="request cancelled", cancelled=True))

        # urllib cannot abort an in-flight request, so the call runs on a
        # daemon thread and we stop waiting for it once the token fires. A
        # mutating request may still complete on the server.
        outcome: list[Result[HttpResponse, HttpError]] = []
        done = threading.Event()

        def _worker() -> None:
            try:
                outcome.append(self._send(method, url, headers, json_body))
            finally:
                done.set()

        threading.Thread(target=_worker, name=f"rls-http-{method.lower()}", daemon=True).start()
        while not done.wait(CANCEL_POLL_SECONDS):
            if cancel.cancelled:
                return Err(HttpError(url=url, message="request cancelled", cancelled=True))
        if not outcome:
            return Err(HttpError(url=url, message="request failed without a response"))
        return outcome[0]

    def _send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        json_body: JsonBody | None,
    ) -> Result[HttpResponse, HttpError]:
        data: bytes | None = None
        all_headers = {"User-Agent": self.user_agent, **headers}
        if json_body is not None:
            data = json.dumps(json_body).encode("utf-8")
            all_headers["Content-Type"] = "application/json"

        try:
            req = urllib.request.Request(url, data=data, headers=all_headers, method=method)
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                return Ok(
                    HttpResponse(
                        status=response.status,
                        reason=str(response.reason or ""),
                        body=response.read(),
                    )
                )
        except urllib.error.HTTPError as e:
            return Ok(HttpResponse(status=e.code, reason=str(e.reason), body=_read_error_body(e)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, message=str(e.reason)))
        except http.client.HTTPException as e:
            return Err(HttpError(url=url, message=str(e) or type(e).__name__))
        except TimeoutError:
            return Err(HttpError(url=url, message="Request timed out"))
        except ValueError as e:
            return Err(HttpError(url=url, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, message=str(e)))


def _read_error_body(error: urllib.error.HTTPError) -> bytes:
    try:
        return error.read()
    except (OSError, http.client.HTTPException):
        return b""


@dataclass(frozen=True, slots=True)
class RecordedRequest:
    method: str
    url: str
    headers: dict[str, str]
    json_body: JsonBody | None


class MockHttpClient:
    """Mock HTTP client for testing.

    Usage:
        client = MockHttpClient()
        client.set_response("GET", url, HttpResponse(status=404))
        result = client.request("GET", url, headers={})
    """

    def __init__(self) -> None:
        self._responses: dict[tuple[str, str], HttpResponse | HttpError] = {}
        self.calls: list[RecordedRequest] = []

    def set_response(self, method: str, url: str, response: HttpResponse | HttpError) -> None:
        self._responses[(method.upper(), url)] = response

    def set_json(self, method: str, url: str, status: int, payload: object) -> None:
        body = json.dumps(payload).encode("utf-8")
        self.set_response(method, url, HttpResponse(status=status, body=body))

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        json_body: JsonBody | None = None,
        cancel: CancelToken | None = None,
    ) -> Result[HttpResponse, HttpError]:
        self.calls.append(RecordedRequest(method.upper(), url, dict(headers), json_body))

        if cancel is not None and cancel.cancelled:
            return Err(HttpError(url=url, message="request cancelled", cancelled=True))

        response = self._responses.get((method.upper(), url))
        if response is None:
            return Ok(HttpResponse(status=404, reason="Not Found (mock)"))
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)
