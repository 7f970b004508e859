"""HTTP remote authority over the attendance endpoints."""

import asyncio
import http.client
import socket
from typing import Any, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import urlparse
from urllib.request import Request, urlopen

import orjson

from ..config.defaults import RemoteParams
from ..errors import (
    AuthorityUnavailableError,
    MalformedSnapshotError,
    PermissionDeniedError,
    RemoteAuthorityError,
)
from ..logging.config import get_sync_logger
from ..models.status import StatusKey, StatusSnapshot
from .base import RemoteAuthority

logger = get_sync_logger(__name__)


def _server_message(body: bytes) -> Optional[str]:
    """Extract the `msg` field from an error body, if any."""
    if not body:
        return None
    try:
        payload = orjson.loads(body)
    except orjson.JSONDecodeError:
        return None
    if isinstance(payload, dict) and isinstance(payload.get("msg"), str):
        return payload["msg"]
    return None


class HttpRemoteAuthority(RemoteAuthority):
    """
    Remote authority reached over HTTP.

    GET {current_path} returns `{currentStatus, durations}`; POST
    {transition_path} with `{newStatus}` returns the same shape on success
    and an error body `{msg}` on failure. Blocking urllib calls run in a
    worker thread so the event loop keeps ticking.
    """

    def __init__(self, config: RemoteParams):
        if not config.base_url:
            raise ValueError("RemoteParams.base_url is required for HTTP authority")
        parsed = urlparse(config.base_url)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError(f"Invalid URL: {config.base_url}")

        self.config = config
        self.base_url = config.base_url.rstrip("/")

    async def fetch_current(self) -> StatusSnapshot:
        payload = await asyncio.to_thread(self._request, "GET", self.config.current_path)
        return StatusSnapshot.from_payload(payload)

    async def post_transition(self, new_status: StatusKey) -> StatusSnapshot:
        payload = await asyncio.to_thread(
            self._request,
            "POST",
            self.config.transition_path,
            {"newStatus": new_status.value},
        )
        return StatusSnapshot.from_payload(payload)

    def _headers(self, has_body: bool) -> dict[str, str]:
        headers = {
            'Accept': 'application/json',
            'User-Agent': 'presence-app/1.0',
        }
        if has_body:
            headers['Content-Type'] = 'application/json'
        if self.config.auth_token:
            headers['Authorization'] = f"Bearer {self.config.auth_token}"
        return headers

    def _request(self, method: str, path: str, body: Optional[dict[str, Any]] = None) -> Any:
        """Perform one blocking request and decode the JSON response."""
        url = f"{self.base_url}{path}"
        data = orjson.dumps(body) if body is not None else None

        req = Request(url, data=data, headers=self._headers(data is not None), method=method)

        try:
            with urlopen(req, timeout=self.config.timeout_seconds) as response:
                raw = response.read()
        except HTTPError as e:
            try:
                error_body = e.read() or b""
            except (OSError, http.client.HTTPException):
                error_body = b""
            server_message = _server_message(error_body)
            logger.warning(
                "Remote authority HTTP error",
                method=method,
                url=url,
                status_code=e.code,
                server_message=server_message,
            )
            if e.code == 403:
                raise PermissionDeniedError(
                    f"HTTP {e.code}: {e.reason}",
                    server_message=server_message,
                    status_code=e.code,
                    requested_status=body.get("newStatus") if body else None,
                )
            if e.code >= 500:
                raise AuthorityUnavailableError(
                    f"HTTP {e.code}: {e.reason}",
                    server_message=server_message,
                    status_code=e.code,
                )
            raise RemoteAuthorityError(
                f"HTTP {e.code}: {e.reason}",
                server_message=server_message,
                status_code=e.code,
            )
        except (OSError, URLError, socket.timeout, http.client.HTTPException) as e:
            logger.warning(
                "Remote authority network error",
                method=method,
                url=url,
                error=str(e),
            )
            raise AuthorityUnavailableError(f"Network error: {e}")

        try:
            return orjson.loads(raw)
        except orjson.JSONDecodeError as e:
            raise MalformedSnapshotError(f"Invalid JSON: {e}", raw_value=raw[:200])
