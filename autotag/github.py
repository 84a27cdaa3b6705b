"""Minimal GitHub REST client for tag and reference management.

Only the endpoints the tagging run needs are wrapped. Every failure, whether
an HTTP error status or a transport problem, surfaces as
:class:`~autotag.errors.GitHubAPIError` so callers can decide which failures
are recoverable.
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ
from urllib.parse import quote

import httpx

from .config import DEFAULT_API_URL
from .errors import GitHubAPIError

if typ.TYPE_CHECKING:
    from types import TracebackType

__all__ = [
    "TAGS_PER_PAGE",
    "Commit",
    "GitHubClient",
    "Reference",
    "Tag",
    "TagObject",
]

logger = logging.getLogger(__name__)

# Type alias for JSON-compatible values (parsed from json.loads)
JsonValue = str | int | float | bool | None | list["JsonValue"] | dict[str, "JsonValue"]

TAGS_PER_PAGE = 100
_ERROR_DETAIL_LIMIT = 1024
_USER_AGENT = "package-autotag"


@dc.dataclass(frozen=True, slots=True)
class Tag:
    """Tag as returned by the tag-listing endpoint."""

    name: str
    commit_sha: str = ""
    commit_url: str = ""

    @classmethod
    def from_api(cls, payload: dict[str, typ.Any]) -> Tag:
        commit = payload.get("commit") or {}
        return cls(
            name=str(payload["name"]),
            commit_sha=str(commit.get("sha", "")),
            commit_url=str(commit.get("url", "")),
        )


@dc.dataclass(frozen=True, slots=True)
class Commit:
    """Commit entry from a compare response.

    ``author_login`` is None when GitHub could not link the commit to an
    account.
    """

    sha: str
    message: str
    author_login: str | None = None

    @property
    def headline(self) -> str:
        return self.message.split("\n")[0]

    @classmethod
    def from_api(cls, payload: dict[str, typ.Any]) -> Commit:
        author = payload.get("author")
        login = author.get("login") if isinstance(author, dict) else None
        return cls(
            sha=str(payload["sha"]),
            message=str(payload["commit"]["message"]),
            author_login=login if isinstance(login, str) else None,
        )


@dc.dataclass(frozen=True, slots=True)
class TagObject:
    """Annotated tag object created through the git database API."""

    tag: str
    sha: str
    message: str = ""

    @classmethod
    def from_api(cls, payload: dict[str, typ.Any]) -> TagObject:
        return cls(
            tag=str(payload["tag"]),
            sha=str(payload["sha"]),
            message=str(payload.get("message", "")),
        )


@dc.dataclass(frozen=True, slots=True)
class Reference:
    """Git reference such as ``refs/tags/v1.2.3``."""

    ref: str
    url: str
    sha: str = ""

    @classmethod
    def from_api(cls, payload: dict[str, typ.Any]) -> Reference:
        obj = payload.get("object") or {}
        return cls(
            ref=str(payload["ref"]),
            url=str(payload["url"]),
            sha=str(obj.get("sha", "")),
        )


def _truncate_text(value: str, limit: int, *, suffix: str = "…") -> str:
    """Return ``value`` truncated to ``limit`` characters with ``suffix``."""
    if limit <= 0:
        return ""
    if len(value) <= limit:
        return value
    return value[:limit] + suffix


def _extract_error_detail(response: httpx.Response) -> str:
    """Return the API's error message, falling back to the raw body."""
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and isinstance(payload.get("message"), str):
        return payload["message"]
    detail = response.text.strip() or response.reason_phrase or "Unknown error"
    return _truncate_text(detail, _ERROR_DETAIL_LIMIT)


class GitHubClient:
    """Repository-scoped wrapper around the GitHub REST API.

    Parameters
    ----------
    token
        Token sent as a bearer credential.
    owner, repo
        Repository the client operates on.
    api_url
        API root; differs from the default on GitHub Enterprise Server.
    http_client
        Preconfigured ``httpx.Client``. Tests pass one backed by
        ``httpx.MockTransport``.
    """

    def __init__(
        self,
        token: str,
        owner: str,
        repo: str,
        *,
        api_url: str = DEFAULT_API_URL,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.owner = owner
        self.repo = repo
        headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": _USER_AGENT,
        }
        if http_client is None:
            http_client = httpx.Client(
                base_url=api_url.rstrip("/"),
                headers=headers,
                timeout=httpx.Timeout(30.0),
            )
        else:
            http_client.headers.update(headers)
        self._client = http_client

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    @property
    def _repo_path(self) -> str:
        return f"/repos/{quote(self.owner, safe='')}/{quote(self.repo, safe='')}"

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, JsonValue] | None = None,
        payload: dict[str, JsonValue] | None = None,
    ) -> typ.Any:  # noqa: ANN401
        url = f"{self._repo_path}{path}"
        logger.debug("%s %s", method, url)
        try:
            response = self._client.request(method, url, params=params, json=payload)
        except httpx.RequestError as exc:
            message = f"Failed to reach GitHub API: {exc!s}"
            raise GitHubAPIError(message) from exc

        if response.is_error:
            raise GitHubAPIError(
                _extract_error_detail(response), status=response.status_code
            )
        try:
            return response.json()
        except ValueError as exc:
            preview = _truncate_text(response.text, 500, suffix="...")
            message = f"GitHub API returned invalid JSON: {preview}"
            raise GitHubAPIError(message, status=response.status_code) from exc

    def list_tags(self, page: int, *, per_page: int = TAGS_PER_PAGE) -> list[Tag]:
        """Return one page of repository tags, most recent first."""
        params: dict[str, JsonValue] = {"per_page": per_page, "page": page}
        data = self._request("GET", "/tags", params=params)
        return [Tag.from_api(item) for item in data]

    def compare_commits(self, base: str, head: str) -> list[Commit]:
        """Return the commits reachable from ``head`` but not from ``base``."""
        basehead = f"{quote(base, safe='')}...{quote(head, safe='')}"
        data = self._request("GET", f"/compare/{basehead}")
        return [Commit.from_api(item) for item in data["commits"]]

    def create_tag(
        self, tag: str, message: str, object_sha: str, *, object_type: str = "commit"
    ) -> TagObject:
        """Create an annotated tag object pointing at ``object_sha``."""
        data = self._request(
            "POST",
            "/git/tags",
            payload={
                "tag": tag,
                "message": message,
                "object": object_sha,
                "type": object_type,
            },
        )
        return TagObject.from_api(data)

    def create_ref(self, ref: str, sha: str) -> Reference:
        """Create ``ref`` (a fully qualified ``refs/...`` name) at ``sha``."""
        data = self._request("POST", "/git/refs", payload={"ref": ref, "sha": sha})
        return Reference.from_api(data)

    def update_ref(self, ref: str, sha: str, *, force: bool = False) -> Reference:
        """Move ``ref`` (without the ``refs/`` prefix) to ``sha``."""
        data = self._request(
            "PATCH",
            f"/git/refs/{quote(ref, safe='/')}",
            payload={"sha": sha, "force": force},
        )
        return Reference.from_api(data)
