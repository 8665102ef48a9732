"""A minimal Azure Resource Manager REST client."""

from __future__ import annotations

import json
import urllib.error
import urllib.request
from collections.abc import Callable, Mapping
from typing import Any, Optional, Union
from urllib.parse import quote

Transport = Callable[[str, Mapping[str, str]], "tuple[int, bytes]"]
Credential = Union[str, Callable[[], str]]


class ArmError(Exception):
    """A failed request against the management API."""

    def __init__(self, message: str, *, status: Optional[int] = None, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.status = status
        self.code = code


def _error_from_response(target: str, status: int, body: bytes) -> ArmError:
    code = None
    detail = body.decode("utf-8", errors="replace").strip()
    try:
        payload = json.loads(body)
    except ValueError:
        payload = None
    if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
        code = payload["error"].get("code")
        detail = payload["error"].get("message") or detail
    text = f"status {status}"
    if code:
        text += f" ({code})"
    if detail:
        text += f": {detail}"
    return ArmError(f'retrieving "{target}": {text}', status=status, code=code)


class ArmClient:
    """Reads resources from a management endpoint with a bearer token.

    ``credential`` is a token string or a callable returning one. ``transport``
    performs the GET request and returns the status and body; it defaults to urllib.
    """

    def __init__(
        self,
        endpoint: str,
        credential: Credential,
        *,
        transport: Optional[Transport] = None,
        timeout: float = 60.0,
    ) -> None:
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout
        self._credential = credential
        self._transport = transport or self._urlopen

    def _urlopen(self, url: str, headers: Mapping[str, str]) -> tuple[int, bytes]:
        request = urllib.request.Request(url, headers=dict(headers), method="GET")
        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:
                return response.status, response.read()
        except urllib.error.HTTPError as exc:
            return exc.code, exc.read()

    def _token(self) -> str:
        return self._credential() if callable(self._credential) else self._credential

    def get(self, resource_id: Any, api_version: str) -> Any:
        """GET a resource by ID and return its decoded JSON body."""
        target = str(resource_id)
        url = f"{self.endpoint}{quote(target, safe='/')}?api-version={quote(api_version, safe='')}"
        headers = {"Authorization": f"Bearer {self._token()}", "Accept": "application/json"}
        try:
            status, body = self._transport(url, headers)
        except OSError as exc:
            raise ArmError(f'retrieving "{target}": {exc}') from exc
        if not 200 <= status < 300:
            raise _error_from_response(target, status, body)
        if not body:
            return None
        try:
            return json.loads(body)
        except ValueError as exc:
            raise ArmError(f'retrieving "{target}": invalid JSON in response', status=status) from exc