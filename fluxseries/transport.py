"""
HTTP transport for fluxseries.

Sends JSON requests to the server and authenticates every call with the
`u` and `p` query parameters. No retries: any failure is raised as a
TransportError.
"""
import logging
from typing import Any, Dict, Optional

import requests

from .errors import TransportError

logger = logging.getLogger(__name__)


class HTTPTransport:
    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.timeout = float(timeout)
        self.session = session or requests.Session()

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    def _params(self, params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        merged = {"u": self.username, "p": self.password}
        if params:
            merged.update({key: value for key, value in params.items() if value is not None})
        return merged

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        body: Any = None,
    ) -> requests.Response:
        """
        Send an authenticated request and return the response.

        Raises:
            TransportError: On network failure or a non-2xx status
        """
        url = f"{self.base_url}{path}"
        logger.debug("%s %s params=%s", method, path, sorted((params or {}).keys()))
        kwargs: Dict[str, Any] = {"params": self._params(params), "timeout": self.timeout}
        if body is not None:
            kwargs["json"] = body

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise TransportError(
                f"{method} {path} failed: {exc}", method=method, path=path
            ) from exc

        if not 200 <= response.status_code < 300:
            logger.warning("%s %s returned status %s", method, path, response.status_code)
            raise TransportError(
                f"{method} {path} returned status {response.status_code}: {response.text}",
                method=method,
                path=path,
                status_code=response.status_code,
                body=response.text,
            )
        return response

    def post_json(self, path: str, params: Optional[Dict[str, Any]] = None, body: Any = None) -> requests.Response:
        return self.request("POST", path, params=params, body=body)

    def get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET a path and return the parsed JSON body."""
        response = self.request("GET", path, params=params)
        try:
            return response.json()
        except ValueError:
            raise TransportError(
                f"GET {path} returned a non-JSON body",
                method="GET",
                path=path,
                status_code=response.status_code,
                body=response.text,
            ) from None

    def delete(self, path: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        return self.request("DELETE", path, params=params)

    def close(self) -> None:
        self.session.close()
