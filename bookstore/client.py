"""HTTP client for the catalog API, as used by the browser UI.

Holds the bearer token returned by login and sends it on every request.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

AUTHORS = "authors"
BOOKS = "books"


class ApiError(Exception):
    """Raised when the API answers with an unexpected status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def _error_detail(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:500] if resp.text else "Unknown error"
    if isinstance(body, dict) and "detail" in body:
        return str(body["detail"])[:500]
    return str(body)[:500]


class BookstoreClient:
    """
    Thin wrapper over httpx.Client for the /users, /authors and /books endpoints.

    Pass either base_url (e.g. "https://host/api") or a ready httpx.Client
    whose base_url already points at the API prefix.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        http: httpx.Client | None = None,
        timeout: float = 30.0,
    ) -> None:
        if http is None:
            if not base_url:
                raise ValueError("base_url or http is required")
            http = httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout)
        self.http = http
        self.token: str | None = None

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> BookstoreClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _headers(self) -> dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        resp = self.http.request(method, url, headers=self._headers(), **kwargs)
        logger.debug("%s %s -> %s", method, url, resp.status_code)
        return resp

    def _expect(self, resp: httpx.Response, *statuses: int) -> httpx.Response:
        if resp.status_code not in statuses:
            raise ApiError(
                f"API returned {resp.status_code}: {_error_detail(resp)}",
                resp.status_code,
            )
        return resp

    # Users

    def register(self, username: str, password: str, email: str | None = None) -> bool:
        payload: dict[str, Any] = {"username": username, "password": password}
        if email:
            payload["email"] = email
        resp = self._request("POST", "/users/register", json=payload)
        return resp.status_code == 201

    def login(self, username: str, password: str) -> bool:
        """Log in and keep the token. Returns False on rejected credentials."""
        resp = self._request(
            "POST", "/users/login", json={"username": username, "password": password}
        )
        if resp.status_code == 401:
            self.token = None
            return False
        self._expect(resp, 200)
        self.token = resp.json()["token"]
        return True

    def logout(self) -> None:
        self.token = None

    # Catalog resources ("authors" or "books")

    def get_all(self, resource: str) -> list[dict[str, Any]]:
        return self._expect(self._request("GET", f"/{resource}"), 200).json()

    def get(self, resource: str, item_id: int) -> dict[str, Any] | None:
        resp = self._request("GET", f"/{resource}/{item_id}")
        if resp.status_code == 404:
            return None
        return self._expect(resp, 200).json()

    def create(self, resource: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._expect(self._request("POST", f"/{resource}", json=data), 201).json()

    def update(self, resource: str, item_id: int, data: dict[str, Any]) -> bool:
        payload = {**data, "id": item_id}
        self._expect(self._request("PUT", f"/{resource}/{item_id}", json=payload), 204)
        return True

    def delete(self, resource: str, item_id: int) -> bool:
        self._expect(self._request("DELETE", f"/{resource}/{item_id}"), 204)
        return True
