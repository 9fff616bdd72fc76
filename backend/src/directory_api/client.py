"""Async HTTP client for the employee directory API."""

import logging
from collections.abc import Generator
from typing import Any

import httpx

from directory_api.exceptions import DirectoryAPIError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
REFRESH_PATH = "/auth/refresh-token"


class DirectoryClientError(DirectoryAPIError):
    """Raised when the API answers with an error status."""

    def __init__(self, status_code: int, message: str, errors: list[str] | None = None) -> None:
        self.status_code = status_code
        self.errors = errors or []
        super().__init__(message, {"status_code": status_code, "errors": self.errors})


class RefreshingBearerAuth(httpx.Auth):
    """Bearer authentication that refreshes the access token once on a 401.

    The refreshed request is retried a single time; a second 401 is
    returned to the caller unchanged.
    """

    requires_response_body = True

    def __init__(
        self,
        refresh_url: str,
        token: str | None = None,
        refresh_token: str | None = None,
    ) -> None:
        self.refresh_url = refresh_url
        self.token = token
        self.refresh_token = refresh_token

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        if self.token:
            request.headers["Authorization"] = f"Bearer {self.token}"

        response = yield request

        if response.status_code != 401 or not self.refresh_token:
            return

        refresh_response = yield self._build_refresh_request()
        if refresh_response.status_code != 200:
            logger.info("Token refresh rejected with status %s", refresh_response.status_code)
            return

        self.token = refresh_response.json()["token"]
        request.headers["Authorization"] = f"Bearer {self.token}"
        yield request

    def _build_refresh_request(self) -> httpx.Request:
        return httpx.Request(
            "POST",
            self.refresh_url,
            json={"refreshToken": self.refresh_token},
        )


class DirectoryClient:
    """Client for the employee directory API.

    Token state lives on the instance. Use as an async context manager, or
    call ``aclose`` when done.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        refresh_token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API root including the prefix, e.g. ``http://host/api``
            token: Access token, if already signed in
            refresh_token: Refresh token, if already signed in
            timeout: Request timeout in seconds
            transport: Optional transport (for tests)
        """
        base_url = base_url.rstrip("/")
        self.auth = RefreshingBearerAuth(
            refresh_url=f"{base_url}{REFRESH_PATH}",
            token=token,
            refresh_token=refresh_token,
        )
        self._client = httpx.AsyncClient(
            base_url=base_url,
            auth=self.auth,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "DirectoryClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    @property
    def token(self) -> str | None:
        """Current access token."""
        return self.auth.token

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        response = await self._client.request(method, path, **kwargs)
        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = {}
            raise DirectoryClientError(
                response.status_code,
                body.get("message", response.reason_phrase),
                body.get("errors"),
            )
        return response.json()

    def _store_tokens(self, body: dict[str, Any]) -> dict[str, Any]:
        self.auth.token = body["token"]
        self.auth.refresh_token = body.get("refreshToken", self.auth.refresh_token)
        return body["user"]

    # Authentication

    async def register(self, name: str, email: str, password: str) -> dict[str, Any]:
        """Create an account and keep its tokens."""
        body = await self._request(
            "POST", "/auth/register", json={"name": name, "email": email, "password": password}
        )
        return self._store_tokens(body)

    async def login(self, email: str, password: str) -> dict[str, Any]:
        """Sign in and keep the tokens."""
        body = await self._request(
            "POST", "/auth/login", json={"email": email, "password": password}
        )
        return self._store_tokens(body)

    async def me(self) -> dict[str, Any]:
        """Get the signed-in user."""
        return (await self._request("GET", "/auth/me"))["data"]

    async def logout(self) -> None:
        """Sign out and forget the tokens."""
        await self._request("GET", "/auth/logout")
        self.auth.token = None
        self.auth.refresh_token = None

    # Employees

    async def list_employees(
        self,
        search: str | None = None,
        status: str | None = None,
        department: str | None = None,
        sort_by: str | None = None,
        sort_order: str | None = None,
    ) -> list[dict[str, Any]]:
        """List employees; omitted filters are not sent."""
        params = {
            "search": search,
            "status": status,
            "department": department,
            "sortBy": sort_by,
            "sortOrder": sort_order,
        }
        return await self._request(
            "GET", "/employees", params={k: v for k, v in params.items() if v is not None}
        )

    async def get_employee(self, employee_id: str) -> dict[str, Any]:
        return (await self._request("GET", f"/employees/{employee_id}"))["data"]

    async def create_employee(self, data: dict[str, Any]) -> dict[str, Any]:
        return (await self._request("POST", "/employees", json=data))["data"]

    async def update_employee(self, employee_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return (await self._request("PUT", f"/employees/{employee_id}", json=data))["data"]

    async def delete_employee(self, employee_id: str) -> None:
        await self._request("DELETE", f"/employees/{employee_id}")

    async def get_stats(self) -> dict[str, Any]:
        return await self._request("GET", "/employees/stats")

    async def get_departments(self) -> list[str]:
        return await self._request("GET", "/employees/departments")

    # Newsletter

    async def subscribe(self, email: str) -> dict[str, Any]:
        return await self._request("POST", "/subscribe", json={"email": email})
