"""GitLab API client used to fetch checkstyle output from CI job logs.

Usage:
    client = GitLabClient(url="https://gitlab.example.com", token="glpat-xxx")
    output = client.get_job_log("group/project", 1234)
"""

from typing import Any
from urllib.parse import quote

import requests


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class GitLabClientError(Exception):
    """Base exception for all client errors."""


class AuthenticationError(GitLabClientError):
    """Raised on HTTP 401 — invalid or expired token."""


class NotFoundError(GitLabClientError):
    """Raised on HTTP 404 — project, job or log not found."""


class NetworkError(GitLabClientError):
    """Raised on connection timeout or unreachable server."""


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class GitLabClient:
    """Thin wrapper around the GitLab REST API."""

    def __init__(self, url: str, token: str, timeout: int = 30) -> None:
        self.base_url = url.rstrip("/")
        self._timeout = timeout
        self._session = requests.Session()
        self._session.headers["PRIVATE-TOKEN"] = token

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def get_job_log(self, project: str | int, job_id: str | int) -> str:
        """Return the raw log (trace) of a CI job.

        *project* is either a numeric id or a ``namespace/name`` path, which
        is URL-encoded as the API expects.
        """
        project_id = quote(str(project), safe="")
        return self.get_text(f"/api/v4/projects/{project_id}/jobs/{job_id}/trace")

    def get_text(self, endpoint: str, params: dict[str, Any] | None = None) -> str:
        """Perform a single GET request and return the response body as text.

        Raises:
            AuthenticationError: HTTP 401
            NotFoundError:       HTTP 404
            GitLabClientError:   Any other non-2xx response
            NetworkError:        Timeout or connection failure
        """
        return self._request(endpoint, params or {}).text

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _request(self, endpoint: str, params: dict[str, Any]) -> requests.Response:
        url = f"{self.base_url}{endpoint}"
        try:
            response = self._session.get(url, params=params, timeout=self._timeout)
        except requests.exceptions.Timeout as exc:
            raise NetworkError(
                f"Request timed out after {self._timeout}s while contacting '{url}'"
            ) from exc
        except requests.exceptions.ConnectionError as exc:
            raise NetworkError(
                f"Unable to reach GitLab server at '{self.base_url}'"
            ) from exc

        if response.status_code == 401:
            raise AuthenticationError(
                "Authentication failed — check that your token is valid and not expired."
            )
        if response.status_code == 404:
            raise NotFoundError(
                f"Resource not found: {url}"
            )
        if not response.ok:
            raise GitLabClientError(
                f"Unexpected response {response.status_code} from {url}: {response.text[:200]}"
            )

        return response
