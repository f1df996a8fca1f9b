"""HTTP client for the CareerCloud REST API."""

from typing import Any, Dict, List, Optional

import requests

from .logger import get_logger
from .resources import API_PREFIX, RESOURCES


class ApiError(Exception):
    """Non-2xx response or transport failure (status 0)."""

    def __init__(self, message: str, status: int = 0, response: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.response = response


class ApiClient:
    """
    Thin JSON wrapper around a requests.Session.

    Args:
        base_url: Server root, e.g. "http://localhost:5000"
        token: Optional bearer token sent on every request
        timeout: Seconds per request
        session: Reuse an existing requests.Session
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 15,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers["Content-Type"] = "application/json"
        if token:
            self.set_token(token)

    def set_token(self, token: Optional[str]) -> None:
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"
        else:
            self.session.headers.pop("Authorization", None)

    def request(self, method: str, path: str, json: Any = None) -> Any:
        """
        Send one request and decode the JSON body.

        Returns:
            Decoded body, or None for 204 and empty bodies

        Raises:
            ApiError: On HTTP error status, timeout or connection failure
        """
        url = f"{self.base_url}{path}"
        logger = get_logger()
        try:
            resp = self.session.request(method, url, json=json, timeout=self.timeout)
        except requests.exceptions.Timeout:
            logger.warning("API request timed out", method=method, url=url)
            raise ApiError(f"Request timed out: {method} {url}")
        except requests.exceptions.RequestException as e:
            logger.error("API request error", method=method, url=url, error=str(e))
            raise ApiError(f"Request error: {e}")

        if not resp.ok:
            try:
                body = resp.json()
            except ValueError:
                body = None
            message = body.get("message") if isinstance(body, dict) and body.get("message") else resp.reason
            logger.warning("API request failed", method=method, url=url, status=resp.status_code)
            raise ApiError(message or f"HTTP {resp.status_code}", status=resp.status_code, response=body)

        if resp.status_code == 204 or not resp.content:
            return None
        return resp.json()

    def get(self, path: str) -> Any:
        return self.request("GET", path)

    def post(self, path: str, data: Any) -> Any:
        return self.request("POST", path, json=data)

    def put(self, path: str, data: Any) -> Any:
        return self.request("PUT", path, json=data)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)


class CrudService:
    """CRUD calls for one resource endpoint."""

    def __init__(self, client: ApiClient, endpoint: str):
        self.client = client
        self.path = f"{API_PREFIX}/{endpoint}"

    def get_all(self) -> List[Dict[str, Any]]:
        return self.client.get(self.path)

    def get_by_id(self, key: Any) -> Dict[str, Any]:
        return self.client.get(f"{self.path}/{key}")

    def create(self, data: Any) -> List[Dict[str, Any]]:
        return self.client.post(self.path, data)

    def update(self, key: Any, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.client.put(f"{self.path}/{key}", data)

    def delete(self, key: Any) -> None:
        self.client.delete(f"{self.path}/{key}")


def services(client: ApiClient) -> Dict[str, CrudService]:
    """One CrudService per registered resource, keyed by resource name."""
    return {r.name: CrudService(client, r.endpoint) for r in RESOURCES}
