"""Checks for adding external files from direct download links."""

from __future__ import annotations

from urllib.parse import SplitResult, unquote, urlsplit


class UrlAddError(ValueError):
    """Raised when a download link cannot be added."""


def _host(parsed: SplitResult) -> str:
    return parsed.netloc.rpartition("@")[2]


def check_download_url(url: str, force: bool) -> SplitResult:
    """Validate a direct download link and return it parsed.

    Links to sites with dedicated support are refused unless ``force`` is set.
    """
    try:
        parsed = urlsplit(url)
    except ValueError as exc:
        raise UrlAddError(f"Failed to parse URL: {exc}") from exc
    if parsed.scheme not in ("https", "http"):
        raise UrlAddError(f"Unsupported URL scheme: {parsed.scheme}")
    if not force:
        host = _host(parsed)
        suggestion = ""
        if host.endswith("modrinth.com"):
            suggestion = "modrinth add " + url
        if host.endswith("curseforge.com") or host.endswith("forgecdn.net"):
            suggestion = "curseforge add " + url
        if suggestion:
            raise UrlAddError(
                f"Consider using packwiz {suggestion} instead; if you know what you are doing "
                "use --force to add this file without update metadata."
            )
    return parsed


def file_name_from_url(url: str) -> str:
    """Return the last element of the URL's decoded path."""
    path = unquote(urlsplit(url).path)
    if not path:
        return "."
    trimmed = path.rstrip("/")
    if not trimmed:
        return "/"
    return trimmed.rpartition("/")[2]