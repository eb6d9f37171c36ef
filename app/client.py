"""
Client session manager for the Toolhub API.

Keeps the session token and role in a TokenStore (memory or a JSON file, the
equivalent of browser local storage), attaches "Authorization: Bearer <token>"
to every request, and forgets the session on logout or on any 401.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Protocol

import httpx

from app.core.security import InvalidTokenError, decode_unverified_claims

logger = logging.getLogger(__name__)

TOKEN_KEY = "user_token"
ROLE_KEY = "userRole"
DEFAULT_TIMEOUT_SEC = 30.0


class ApiRequestError(Exception):
    """Raised when the API answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class TokenStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryTokenStore:
    """Process-local store; the session ends with the process."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)


class FileTokenStore:
    """JSON file store so a session survives between CLI invocations."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            logger.warning("Ignoring unreadable token store at %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)


class ToolhubClient:
    """
    Synchronous API client holding one user's session.

    Pass http_client to reuse a configured httpx.Client (e.g. a test client);
    otherwise one is created for base_url.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        store: TokenStore | None = None,
        http_client: httpx.Client | None = None,
        timeout: float = DEFAULT_TIMEOUT_SEC,
    ) -> None:
        self.store = store if store is not None else MemoryTokenStore()
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(base_url=base_url, timeout=timeout)

    def __enter__(self) -> ToolhubClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    @property
    def token(self) -> str | None:
        return self.store.get(TOKEN_KEY)

    @property
    def role(self) -> str | None:
        """'user', 'admin', or None when logged out. A display hint, not an authorization."""
        return self.store.get(ROLE_KEY)

    def is_logged_in(self) -> bool:
        """True when a token is stored. Expiry is not checked; the server decides."""
        return bool(self.token)

    def logout(self) -> None:
        self.store.remove(TOKEN_KEY)
        self.store.remove(ROLE_KEY)

    def _request(self, method: str, path: str, payload: dict[str, Any] | None = None) -> Any:
        headers = {"Content-Type": "application/json"}
        token = self.token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        json_body = payload if payload is not None and method.upper() != "GET" else None
        resp = self._http.request(method, path, json=json_body, headers=headers)

        if resp.status_code == 204:
            return None
        try:
            data = resp.json()
        except ValueError:
            data = None
        if resp.status_code >= 400:
            if resp.status_code == 401:
                self.logout()
            message = None
            if isinstance(data, dict):
                message = data.get("message")
            raise ApiRequestError(
                message or f"API request failed for endpoint: {path}",
                resp.status_code,
            )
        return data

    def signup(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        company: str | None = None,
    ) -> dict[str, Any]:
        """Create an account. Does not log in; call login() afterwards."""
        payload: dict[str, Any] = {
            "email": email,
            "password": password,
            "firstName": first_name,
            "lastName": last_name,
        }
        if company:
            payload["company"] = company
        return self._request("POST", "/signup", payload)

    def login(self, email: str, password: str) -> str:
        """Log in, store the token and the role read from its payload; return the token."""
        data = self._request("POST", "/login", {"email": email, "password": password})
        token = data["token"]
        self.store.set(TOKEN_KEY, token)
        try:
            self.store.set(ROLE_KEY, decode_unverified_claims(token).role)
        except InvalidTokenError:
            self.store.remove(ROLE_KEY)
        return token

    def dashboard(self) -> dict[str, Any]:
        return self._request("GET", "/user/dashboard")

    def public_tools(self) -> list[dict[str, Any]]:
        return self._request("GET", "/public-tools")
