from __future__ import annotations

import httpx
import structlog

from ..errors import TransportError
from ..utils import retry_call

log = structlog.get_logger()

class FirebaseStore:
    """JSON document store over the Firebase Realtime Database REST API.

    ``read`` returns ``None`` for an absent path, ``write`` replaces the
    document at a path and ``append`` adds a child under a key generated
    by the server.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        retry_attempts: int = 3,
        retry_backoff_seconds: float = 1.0,
        client: httpx.Client | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_attempts = max(1, int(retry_attempts))
        self.retry_backoff_seconds = retry_backoff_seconds
        self.client = client or httpx.Client(timeout=timeout)

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.strip('/')}.json"

    def _request(self, method: str, path: str, payload=None):
        url = self._url(path)

        def _call():
            try:
                if payload is None:
                    resp = self.client.request(method, url)
                else:
                    resp = self.client.request(method, url, json=payload)
            except httpx.HTTPError as exc:
                raise TransportError(f"store {method} {path} failed: {exc}") from exc
            if resp.status_code != 200:
                raise TransportError(f"store {method} {path} failed: {resp.status_code}", status=resp.status_code)
            return resp.json()

        try:
            return retry_call(
                _call,
                attempts=self.retry_attempts,
                base_delay=self.retry_backoff_seconds,
            )
        except TransportError as exc:
            log.warning("store_request_failed", method=method, path=path, status=exc.status, err=str(exc))
            raise

    def read(self, path: str):
        return self._request("GET", path)

    def write(self, path: str, data: dict):
        return self._request("PUT", path, data)

    def append(self, path: str, data: dict) -> str | None:
        body = self._request("POST", path, data)
        if isinstance(body, dict):
            return body.get("name")
        return None

    def close(self):
        self.client.close()
