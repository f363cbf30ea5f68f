"""GitHub releases: repository references, API responses and asset selection."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence

import regex

API_SERVER = "api.github.com"
USER_AGENT = "packwiz"
ACCEPT = "application/vnd.github+json"

# Matches any .jar asset whose name does not end in -api, -dev, -dev-preshadow or -sources
DEFAULT_ASSET_PATTERN = r"^.+(?<!-api|-dev|-dev-preshadow|-sources)\.jar$"

_REPO_URL = re.compile(r"^https?://(?:www\.)?github\.com/([^/]+/[^/]+)", re.ASCII)
_INTEGER = re.compile(r"[+-]?[0-9]+\Z", re.ASCII)

_DEFAULT_RATELIMIT = 999
_RATELIMIT_WARNING_BELOW = 10


class GitHubError(Exception):
    """Raised when GitHub data cannot be fetched, parsed or used."""


def _string(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise GitHubError(f"cannot unmarshal {type(value).__name__} into field {key} of type string")
    return value


def _int(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise GitHubError(f"cannot unmarshal {type(value).__name__} into field {key} of type int")
    if isinstance(value, float) and not value.is_integer():
        raise GitHubError(f"cannot unmarshal number {value} into field {key} of type int")
    return int(value)


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise GitHubError(f"cannot unmarshal {type(data).__name__} into {what}")
    return data


@dataclass(frozen=True)
class Asset:
    """A file attached to a release."""

    url: str = ""
    browser_download_url: str = ""
    name: str = ""

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Asset":
        data = _mapping(data, "Asset")
        return cls(
            url=_string(data, "url"),
            browser_download_url=_string(data, "browser_download_url"),
            name=_string(data, "name"),
        )


@dataclass(frozen=True)
class Release:
    """A release of a repository; ``target_commitish`` is its branch."""

    url: str = ""
    tag_name: str = ""
    target_commitish: str = ""
    name: str = ""
    created_at: str = ""
    assets: tuple[Asset, ...] = field(default_factory=tuple)

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Release":
        data = _mapping(data, "Release")
        raw_assets = data.get("assets")
        if raw_assets is None:
            raw_assets = []
        if not isinstance(raw_assets, list):
            raise GitHubError(f"cannot unmarshal {type(raw_assets).__name__} into field assets")
        return cls(
            url=_string(data, "url"),
            tag_name=_string(data, "tag_name"),
            target_commitish=_string(data, "target_commitish"),
            name=_string(data, "name"),
            created_at=_string(data, "created_at"),
            assets=tuple(Asset.from_json(item or {}) for item in raw_assets),
        )


@dataclass(frozen=True)
class Repo:
    """A repository; ``full_name`` is its owner/name slug."""

    id: int = 0
    name: str = ""
    full_name: str = ""

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "Repo":
        data = _mapping(data, "Repo")
        repo = cls(
            id=_int(data, "id"),
            name=_string(data, "name"),
            full_name=_string(data, "full_name"),
        )
        if not repo.full_name:
            raise GitHubError("invalid json while fetching project")
        return repo


@dataclass
class GhUpdateData:
    """GitHub update metadata stored in a mod file."""

    slug: str = ""
    tag: str = ""
    branch: str = ""
    regex: str = ""

    def to_map(self) -> dict[str, Any]:
        return {"slug": self.slug, "tag": self.tag, "branch": self.branch, "regex": self.regex}

    @classmethod
    def from_map(cls, data: Mapping[str, Any]) -> "GhUpdateData":
        return cls(
            slug=_string(data, "slug"),
            tag=_string(data, "tag"),
            branch=_string(data, "branch"),
            regex=_string(data, "regex"),
        )


def parse_repo_slug(text: str) -> str:
    """Return the owner/name slug from a repository URL, or the text itself if it is not one."""
    match = _REPO_URL.search(text)
    if match is not None:
        return match.group(1)
    return text


def repo_url(slug: str) -> str:
    """Return the API URL of a repository."""
    return "https://" + API_SERVER + "/repos/" + slug


def releases_url(slug: str) -> str:
    """Return the API URL listing a repository's releases."""
    return repo_url(slug + "/releases")


def build_headers(token: str = "") -> dict[str, str]:
    """Return the request headers for the GitHub API, authorised if a token is given."""
    headers = {"User-Agent": USER_AGENT, "Accept": ACCEPT}
    if token:
        headers["Authorization"] = "Bearer " + token
    return headers


def _header(headers: Mapping[str, str], name: str) -> str:
    folded = name.lower()
    for key, value in headers.items():
        if key.lower() == folded:
            return value
    return ""


def check_response(status_code: int, status: str, headers: Mapping[str, str]) -> int:
    """Check an API response and return the number of requests left before ratelimiting."""
    remaining = _DEFAULT_RATELIMIT
    raw = _header(headers, "x-ratelimit-remaining")
    if raw:
        if not _INTEGER.match(raw):
            raise GitHubError(f'strconv.Atoi: parsing "{raw}": invalid syntax')
        remaining = int(raw)

    if status_code == 403 and remaining == 0:
        reset = _header(headers, "x-ratelimit-reset")
        raise GitHubError(f"GitHub API ratelimit exceeded; time of reset: {reset}")
    if status_code != 200:
        raise GitHubError(f"invalid response status: {status}")

    if remaining < _RATELIMIT_WARNING_BELOW:
        print(f"Warning: GitHub API allows {remaining} more requests before ratelimiting")
        print("Specifying a token is recommended; see documentation")
    return remaining


def select_latest_release(releases: Sequence[Release], branch: str = "") -> Release:
    """Return the newest release, or the newest one for ``branch`` if given."""
    if branch:
        for release in releases:
            if release.target_commitish == branch:
                return release
        raise GitHubError(f"failed to find release for branch {branch}")
    if not releases:
        raise GitHubError("no releases found")
    return releases[0]


def select_asset(release: Release, pattern: str = DEFAULT_ASSET_PATTERN) -> Asset:
    """Return the single asset of the release whose name matches ``pattern``."""
    try:
        expression = regex.compile(pattern)
    except regex.error as exc:
        raise GitHubError(f"invalid asset pattern {pattern!r}: {exc}") from exc
    if not release.assets:
        raise GitHubError("release doesn't have any assets attached")
    matching = [asset for asset in release.assets if expression.search(asset.name)]
    if not matching:
        raise GitHubError("release doesn't have any assets matching regex")
    if len(matching) > 1:
        raise GitHubError("release has more than one asset matching regex")
    return matching[0]


def update_file_for_release(release: Release) -> Asset:
    """Return the asset an update installs: the last .jar asset, else the first asset."""
    if not release.assets:
        raise GitHubError("new release doesn't have any assets")
    chosen = release.assets[0]
    for asset in release.assets:
        if asset.name.endswith(".jar"):
            chosen = asset
    return chosen