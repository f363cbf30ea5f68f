"""Modrinth version selection, loader preferences, URL parsing and .mrpack manifests."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass, field
from datetime import datetime
from string import hexdigits
from typing import Any, Mapping, Optional, Sequence

from packwiz.versioning import compare as flexver_compare
from packwiz.versioning import less

UNIVERSAL_SIDE = "both"
SERVER_SIDE = "server"
CLIENT_SIDE = "client"

_NO_INDEX = sys.maxsize

_LOADER_FOLDERS = {
    "quilt": "mods",
    "fabric": "mods",
    "forge": "mods",
    "neoforge": "mods",
    "liteloader": "mods",
    "modloader": "mods",
    "rift": "mods",
    "bukkit": "plugins",
    "spigot": "plugins",
    "paper": "plugins",
    "purpur": "plugins",
    "sponge": "plugins",
    "bungeecord": "plugins",
    "waterfall": "plugins",
    "velocity": "plugins",
    "canvas": "resourcepacks",
    "iris": "shaderpacks",
    "optifine": "shaderpacks",
    "vanilla": "resourcepacks",
}

# More preferred loaders come first
_LOADER_PREFERENCE = (
    "quilt",
    "fabric",
    "neoforge",
    "forge",
    "liteloader",
    "modloader",
    "rift",
    "sponge",
    "purpur",
    "paper",
    "spigot",
    "bukkit",
    "velocity",
    "waterfall",
    "bungeecord",
    "canvas",
    "iris",
    "optifine",
    "vanilla",
    "datapack",
    "minecraft",
)

# Support for the key loader in both lists implies support for the whole group
_LOADER_COMPAT_GROUPS = {
    "fabric": ("quilt",),
    "forge": ("neoforge",),
    "bukkit": ("purpur", "paper", "spigot"),
    "bungeecord": ("waterfall",),
}

_SLUG_CHARS = r"[a-zA-Z0-9!@$()`.+,_\"-]"
_URL_PATTERNS = (
    re.compile(
        r"^https?://(www.)?modrinth\.com/(?P<urlCategory>[^/]+)/(?P<slug>" + _SLUG_CHARS + r"{3,64})"
        r"(?:/version/(?P<version>" + _SLUG_CHARS + r"{1,32}))?"
    ),
    re.compile(
        r"^https?://cdn\.modrinth\.com/data/(?P<slug>[a-zA-Z0-9]+)/versions/"
        r"(?P<versionID>[a-zA-Z0-9]+)/(?P<filename>[^/]+)\Z"
    ),
    re.compile(r"^(?P<slug>" + _SLUG_CHARS + r"{3,64})\Z"),
)
_SLUG_PATTERN_INDEX = 2

_URL_CATEGORIES = ("mod", "plugin", "datapack", "shader", "resourcepack", "modpack")


@dataclass
class ModrinthFile:
    """A file attached to a Modrinth version."""

    filename: str = ""
    url: str = ""
    hashes: dict[str, str] = field(default_factory=dict)
    primary: bool = False


@dataclass
class ModrinthVersion:
    """A version of a Modrinth project."""

    id: Optional[str] = None
    project_id: Optional[str] = None
    version_number: Optional[str] = None
    version_type: Optional[str] = None
    game_versions: list[str] = field(default_factory=list)
    loaders: list[str] = field(default_factory=list)
    date_published: Optional[datetime] = None
    files: list[ModrinthFile] = field(default_factory=list)


@dataclass(frozen=True)
class UrlParseResult:
    """What was found in a Modrinth URL or slug.

    A field is None when the matching pattern has no such part.
    """

    slug: Optional[str] = None
    version: Optional[str] = None
    version_id: Optional[str] = None
    filename: Optional[str] = None
    parsed_slug: bool = False


@dataclass
class PackFile:
    """A file entry of a Modrinth pack index."""

    path: str
    hashes: dict[str, str] = field(default_factory=dict)
    env: Optional[dict[str, str]] = None
    downloads: list[str] = field(default_factory=list)
    file_size: int = 0

    def to_json(self) -> dict[str, Any]:
        env = None
        if self.env is not None:
            env = {"client": self.env.get("client", ""), "server": self.env.get("server", "")}
        return {
            "path": self.path,
            "hashes": dict(sorted(self.hashes.items())),
            "env": env,
            "downloads": list(self.downloads),
            "fileSize": self.file_size,
        }


@dataclass
class Pack:
    """A Modrinth pack index (modrinth.index.json)."""

    version_id: str = ""
    name: str = ""
    summary: str = ""
    files: list[PackFile] = field(default_factory=list)
    dependencies: dict[str, str] = field(default_factory=dict)
    format_version: int = 1
    game: str = "minecraft"

    def to_json(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "formatVersion": self.format_version,
            "game": self.game,
            "versionId": self.version_id,
            "name": self.name,
        }
        if self.summary:
            result["summary"] = self.summary
        result["files"] = [entry.to_json() for entry in self.files]
        result["dependencies"] = dict(sorted(self.dependencies.items()))
        return result


def _preference_index(loader: str) -> int:
    try:
        return _LOADER_PREFERENCE.index(loader)
    except ValueError:
        return -1


def _best_loader_folder(loaders: Sequence[str]) -> Optional[str]:
    indexes = [index for index in map(_preference_index, loaders) if index != -1]
    if not indexes:
        return None
    return _LOADER_FOLDERS.get(_LOADER_PREFERENCE[min(indexes)], "")


def get_project_type_folder(
    project_type: str,
    file_loaders: Sequence[str],
    pack_loaders: Sequence[str],
    datapack_folder: str = "",
) -> str:
    """Return the folder that a project's metadata file belongs in."""
    if project_type == "modpack":
        raise ValueError(
            "this command should not be used to add Modrinth modpacks, "
            "and importing of Modrinth modpacks is not yet supported"
        )
    if project_type == "resourcepack":
        return "resourcepacks"
    if project_type == "shader":
        folder = _best_loader_folder(file_loaders)
        return folder if folder is not None else "shaderpacks"
    if project_type == "mod":
        folder = _best_loader_folder([loader for loader in file_loaders if loader in pack_loaders])
        if folder is not None:
            return folder
        if "datapack" in file_loaders:
            if datapack_folder:
                return datapack_folder
            raise ValueError("set the datapack-folder option to use datapacks")
        return "mods"
    raise ValueError(f"unknown project type {project_type}")


def _path_unescape(text: str) -> str:
    out = bytearray()
    position = 0
    while position < len(text):
        char = text[position]
        if char == "%":
            digits = text[position + 1:position + 3]
            if len(digits) < 2 or not all(digit in hexdigits for digit in digits):
                raise ValueError(f'invalid URL escape "{text[position:position + 3]}"')
            out.append(int(digits, 16))
            position += 3
        else:
            out.extend(char.encode("utf-8"))
            position += 1
    return out.decode("utf-8", errors="surrogateescape")


def parse_slug_or_url(text: str) -> UrlParseResult:
    """Parse a Modrinth project/version/CDN URL or a bare slug or project ID."""
    for pattern_index, pattern in enumerate(_URL_PATTERNS):
        match = pattern.search(text)
        if match is None:
            continue
        groups = match.groupdict()
        if "urlCategory" in groups and groups["urlCategory"] not in _URL_CATEGORIES:
            raise ValueError("unknown project type: " + (groups["urlCategory"] or ""))

        def part(name: str) -> Optional[str]:
            if name not in groups:
                return None
            return groups[name] or ""

        filename = part("filename")
        if filename is not None:
            filename = _path_unescape(filename)
        return UrlParseResult(
            slug=part("slug"),
            version=part("version"),
            version_id=part("versionID"),
            filename=filename,
            parsed_slug=pattern_index == _SLUG_PATTERN_INDEX,
        )
    return UrlParseResult()


def compare_loader_lists(a: Sequence[str], b: Sequence[str]) -> int:
    """Compare two loader lists: 1 if ``b`` has preferable loaders, -1 if ``a`` does, else 0."""
    compat = [
        loader
        for key, group in _LOADER_COMPAT_GROUPS.items()
        if key in a and key in b
        for loader in group
    ]
    min_a = _NO_INDEX
    for loader in a:
        if loader in compat:
            continue
        index = _preference_index(loader)
        if index != -1 and index < min_a:
            min_a = index
    min_b = _NO_INDEX
    for loader in b:
        if loader in compat:
            continue
        index = _preference_index(loader)
        if index < min_a:
            return 1
        if index != -1 and index < min_b:
            min_b = index
    if min_a < min_b:
        return -1
    return 0


def _highest_index(slice_: Sequence[str], values: Sequence[str]) -> int:
    return max((index for index, item in enumerate(slice_) if item in values), default=-1)


def _published_after(a: Optional[datetime], b: Optional[datetime]) -> bool:
    if a is None or b is None:
        return False
    return a > b


def find_latest_version(
    versions: Sequence[ModrinthVersion], game_versions: Sequence[str], use_flexver: bool
) -> ModrinthVersion:
    """Choose the latest version by version number (optionally), game version, loader and date."""
    if not versions:
        raise ValueError("no versions to choose from")
    latest = versions[0]
    best_game_version = _highest_index(game_versions, latest.game_versions)
    for candidate in versions[1:]:
        game_version_index = _highest_index(game_versions, candidate.game_versions)
        result = 0
        if use_flexver:
            result = flexver_compare(candidate.version_number or "", latest.version_number or "")
        if result == 0:
            result = game_version_index - best_game_version
        if result == 0:
            result = compare_loader_lists(latest.loaders, candidate.loaders)
        if result == 0 and _published_after(candidate.date_published, latest.date_published):
            result = 1
        if result > 0:
            latest = candidate
            best_game_version = game_version_index
    return latest


def filter_versions_by_release_type(
    versions: Sequence[ModrinthVersion], release_type: str
) -> list[ModrinthVersion]:
    """Keep only the versions of the given release type."""
    return [version for version in versions if version.version_type == release_type]


def should_download_on_side(side: str) -> bool:
    """Return True if a project's support for a side means it should be installed there."""
    return side in ("required", "optional")


def get_side(server_side: str, client_side: str) -> str:
    """Return the pack side for a project, or an empty string if it supports neither."""
    server = should_download_on_side(server_side)
    client = should_download_on_side(client_side)
    if server and client:
        return UNIVERSAL_SIDE
    if server:
        return SERVER_SIDE
    if client:
        return CLIENT_SIDE
    return ""


def get_best_hash(hashes: Mapping[str, str]) -> tuple[str, str]:
    """Return the preferred (algorithm, hash) pair, or empty strings if there is none."""
    for algorithm in ("sha512", "sha256", "sha1", "murmur2"):
        if algorithm in hashes:
            return algorithm, hashes[algorithm]
    for algorithm, value in hashes.items():
        return algorithm, value
    return "", ""


def map_dep_override(dep_id: str, is_quilt: bool, mc_version: str) -> str:
    """Swap Fabric dependencies for their Quilt equivalents when the pack uses Quilt."""
    if is_quilt and dep_id in ("P7dR8mSH", "fabric-api"):
        return "qvIfYCYJ"
    if is_quilt and dep_id in ("Ha28R6CL", "fabric-language-kotlin"):
        if less("1.19.1", mc_version) and less(mc_version, "2.0.0"):
            return "lwVhp9o5"
    return dep_id