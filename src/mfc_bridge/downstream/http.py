"""Explicit outcome types for outbound JSON calls.

Every remote call made by the bridge goes through `send_json`, which never
raises for network problems. Callers branch on the returned variant and decide
for themselves whether a failure is worth more than a log line.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from http.client import HTTPException
from typing import Any, Protocol
from urllib import error, request


@dataclass(frozen=True)
class RemoteSuccess:
    status: int
    body: Any


@dataclass(frozen=True)
class RemoteStatusError:
    status: int
    body_text: str


@dataclass(frozen=True)
class RemoteTransportError:
    reason: str


RemoteCallResult = RemoteSuccess | RemoteStatusError | RemoteTransportError


class JsonTransport(Protocol):
    """Callable used by clients to reach a remote JSON endpoint."""

    def __call__(
        self,
        method: str,
        url: str,
        *,
        payload: Any = None,
        headers: dict[str, str] | None = None,
        timeout_s: float | None = None,
    ) -> RemoteCallResult: ...


def send_json(
    method: str,
    url: str,
    *,
    payload: Any = None,
    headers: dict[str, str] | None = None,
    timeout_s: float | None = None,
) -> RemoteCallResult:
    """Issue one request and classify the outcome.

    An empty success body decodes to ``None``. A success body that is not
    UTF-8 JSON is reported as a transport error, since nothing usable arrived.
    """
    data = None if payload is None else json.dumps(payload).encode("utf-8")
    req_headers = {"Accept": "application/json"}
    if data is not None:
        req_headers["Content-Type"] = "application/json"
    req_headers.update(headers or {})

    req = request.Request(url=url, data=data, method=method.upper(), headers=req_headers)
    kwargs: dict[str, Any] = {}
    if timeout_s is not None:
        kwargs["timeout"] = timeout_s
    try:
        with request.urlopen(req, **kwargs) as response:
            status = response.status
            raw_bytes = response.read()
    except error.HTTPError as exc:
        body_text = exc.read().decode("utf-8", errors="replace")
        return RemoteStatusError(status=exc.code, body_text=body_text[:400])
    except error.URLError as exc:
        return RemoteTransportError(reason=str(exc.reason))
    except (TimeoutError, OSError, HTTPException) as exc:
        return RemoteTransportError(reason=str(exc) or type(exc).__name__)

    try:
        raw = raw_bytes.decode("utf-8")
    except UnicodeDecodeError as exc:
        return RemoteTransportError(
            reason=f"{method.upper()} {url} returned non-UTF-8 body: {exc}"
        )

    if not raw.strip():
        return RemoteSuccess(status=status, body=None)
    try:
        return RemoteSuccess(status=status, body=json.loads(raw))
    except json.JSONDecodeError:
        return RemoteTransportError(
            reason=f"{method.upper()} {url} returned non-JSON body: {raw[:200]}"
        )


def describe(result: RemoteCallResult) -> str:
    if isinstance(result, RemoteSuccess):
        return f"status={result.status}"
    if isinstance(result, RemoteStatusError):
        return f"status={result.status} body={result.body_text[:200]}"
    return f"transport_error={result.reason}"
