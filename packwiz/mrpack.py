"""Modrinth update metadata and .mrpack export decisions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Sequence
from urllib.parse import urlsplit

from packwiz.modrinth import (
    CLIENT_SIDE,
    SERVER_SIDE,
    UNIVERSAL_SIDE,
    ModrinthFile,
    ModrinthVersion,
    PackFile,
)

MODE_URL = "url"
EMPTY_SIDE = ""

_WHITELISTED_HOSTS = (
    "cdn.modrinth.com",
    "github.com",
    "raw.githubusercontent.com",
    "gitlab.com",
)

# Pack loader name and the dependency key it is exported under, in order of precedence
_LOADER_DEPENDENCIES = (
    ("quilt", "quilt-loader"),
    ("fabric", "fabric-loader"),
    ("forge", "forge"),
    ("neoforge", "neoforge"),
)


def _decode_string(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"'{key}' expected type 'string', got {type(value).__name__}")
    return value


@dataclass
class MrUpdateData:
    """Modrinth update metadata stored in a mod file."""

    project_id: str = ""
    installed_version: str = ""

    def to_map(self) -> dict[str, Any]:
        return {"mod-id": self.project_id, "version": self.installed_version}

    @classmethod
    def from_map(cls, data: Mapping[str, Any]) -> "MrUpdateData":
        return cls(
            project_id=_decode_string(data, "mod-id"),
            installed_version=_decode_string(data, "version"),
        )


def primary_file(files: Sequence[ModrinthFile], version_filename: str = "") -> ModrinthFile:
    """Pick the file to install: the last primary file (or one named ``version_filename``), else the first."""
    if not files:
        raise ValueError("version doesn't have any files attached")
    chosen = files[0]
    for candidate in files:
        if candidate.primary or (version_filename and version_filename == candidate.filename):
            chosen = candidate
    return chosen


def update_string(current_file_name: str, version: ModrinthVersion) -> str:
    """Describe an update from the installed file to the version's primary file."""
    if not version.files:
        raise ValueError("new version doesn't have any files")
    return current_file_name + " -> " + primary_file(version.files).filename


def _host(url: str) -> Optional[str]:
    try:
        parsed = urlsplit(url)
    except ValueError:
        return None
    return parsed.netloc.rpartition("@")[2]


def can_be_included_directly(download_mode: str, download_url: str, restrict_domains: bool) -> bool:
    """Return True if a file may be referenced by URL in the pack index rather than bundled."""
    if download_mode not in (MODE_URL, ""):
        return False
    if not restrict_domains:
        return True
    return _host(download_url) in _WHITELISTED_HOSTS


def export_env(side: str, optional: bool) -> dict[str, str]:
    """Return the client/server environment entry for a file on the given side."""
    installed = "optional" if optional else "required"
    if side in (UNIVERSAL_SIDE, EMPTY_SIDE):
        return {"client": installed, "server": installed}
    if side == CLIENT_SIDE:
        return {"client": installed, "server": "unsupported"}
    if side == SERVER_SIDE:
        return {"client": "unsupported", "server": installed}
    return {"client": "", "server": ""}


def loader_dependencies(versions: Mapping[str, str], mc_version: str) -> dict[str, str]:
    """Return the pack index dependencies: Minecraft plus the first configured loader."""
    dependencies = {"minecraft": mc_version}
    for loader, key in _LOADER_DEPENDENCIES:
        if loader in versions:
            dependencies[key] = versions[loader]
            break
    return dependencies


def sort_pack_files(files: Iterable[PackFile]) -> list[PackFile]:
    """Return the files ordered by path, for reproducible output."""
    return sorted(files, key=lambda entry: entry.path)