"""HTTP client for pushing browser-source URLs to OBS.

Talks to an obs-websocket-http bridge, which forwards ``/call/<RequestType>``
POSTs to obs-websocket and returns the request's response data.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import requests


class OBSClientError(RuntimeError):
    """Raised when the bridge or OBS rejects a request."""


class OBSClient:
    """Minimal client for the obs-websocket-http bridge."""

    def __init__(
        self,
        base_url: str,
        *,
        auth_token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: int = 10,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.auth_token = auth_token
        self.session = session or requests.Session()
        self.timeout = timeout

    def set_browser_source_url(self, source_name: str, url: str) -> None:
        """Point the named browser source at ``url``."""

        self.call(
            "SetInputSettings",
            {"inputName": source_name, "inputSettings": {"url": url}},
        )

    def call(self, request_type: str, request_data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        headers = {"Content-Type": "application/json"}
        if self.auth_token:
            headers["Authorization"] = self.auth_token
        try:
            response = self.session.post(
                f"{self.base_url}/call/{request_type}",
                json=request_data or {},
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            raise OBSClientError(f"{request_type} failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError:
            return {}
        if not isinstance(payload, dict):
            return {}
        if payload.get("result") is False:
            raise OBSClientError(f"{request_type} rejected by bridge: {payload.get('comment', 'no reason given')}")
        result = payload.get("requestResult") or payload
        status = result.get("requestStatus") or {}
        if status.get("result") is False:
            comment = status.get("comment") or f"code {status.get('code')}"
            raise OBSClientError(f"{request_type} rejected by OBS: {comment}")
        return result
