"""CurseForge version names, project references and metadata paths."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass

from packwiz.versioning import less

META_EXTENSION = ".pw.toml"

_SNAPSHOT_VERSION = re.compile(r"(?:Snapshot )?(\d+)w0?(0|[1-9]\d*)([a-z])", re.ASCII)
_SNAPSHOT_NAMES = ("-pre", " Pre-Release ", " Pre-release ", "-rc")

_URL_PATTERNS = (
    re.compile(
        r"^https?://(?P<game>minecraft)\.curseforge\.com/projects/(?P<slug>[^/]+)"
        r"(?:/(?:files|download)/(?P<fileID>\d+))?",
        re.ASCII,
    ),
    re.compile(
        r"^https?://(?:www\.|beta\.|legacy\.)?curseforge\.com/(?P<game>[^/]+)/(?P<category>[^/]+)/"
        r"(?P<slug>[^/]+)(?:/(?:files|download)/(?P<fileID>\d+))?",
        re.ASCII,
    ),
    re.compile(r"^(?P<slug>[a-z][\da-z\-_]{0,127})\Z", re.ASCII),
)

_DEFAULT_FOLDERS = {
    432: {  # Minecraft
        5: "plugins",  # Bukkit plugins
        12: "resourcepacks",
        6: "mods",
        17: "saves",
    },
}

_UINT32_MAX = 0xFFFFFFFF


def _snapshot_name(year: int, week: int) -> str | None:
    if year >= 22 and week >= 11:
        return "1.19-Snapshot"
    if (year == 21 and week >= 37) or year >= 22:
        return "1.18-Snapshot"
    if (year == 20 and week >= 45) or (year == 21 and week <= 20):
        return "1.17-Snapshot"
    if year == 20 and week >= 6:
        return "1.16-Snapshot"
    if year == 19 and week >= 34:
        return "1.15-Snapshot"
    if (year == 18 and week >= 43) or (year == 19 and week <= 14):
        return "1.14-Snapshot"
    if year == 18 and 30 <= week <= 33:
        return "1.13.1-Snapshot"
    if (year == 17 and week >= 43) or (year == 18 and week <= 22):
        return "1.13-Snapshot"
    if year == 17 and week == 31:
        return "1.12.1-Snapshot"
    if year == 17 and 6 <= week <= 18:
        return "1.12-Snapshot"
    if year == 16 and week == 50:
        return "1.11.1-Snapshot"
    if year == 16 and 32 <= week <= 44:
        return "1.11-Snapshot"
    if year == 16 and 20 <= week <= 21:
        return "1.10-Snapshot"
    if year == 16 and 14 <= week <= 15:
        return "1.9.3-Snapshot"
    if (year == 15 and week >= 31) or (year == 16 and week <= 7):
        return "1.9-Snapshot"
    if year == 14 and 2 <= week <= 34:
        return "1.8-Snapshot"
    if year == 13 and 47 <= week <= 49:
        return "1.7.4-Snapshot"
    if year == 13 and 36 <= week <= 43:
        return "1.7.2-Snapshot"
    if year == 13 and 16 <= week <= 26:
        return "1.6-Snapshot"
    if year == 13 and 11 <= week <= 12:
        return "1.5.1-Snapshot"
    if year == 13 and 1 <= week <= 10:
        return "1.5-Snapshot"
    if year == 12 and 49 <= week <= 50:
        return "1.4.6-Snapshot"
    if year == 12 and 32 <= week <= 42:
        return "1.4.2-Snapshot"
    if year == 12 and 15 <= week <= 30:
        return "1.3.1-Snapshot"
    if year == 12 and 3 <= week <= 8:
        return "1.2.1-Snapshot"
    if (year == 11 and week >= 47) or (year == 12 and week <= 1):
        return "1.1-Snapshot"
    return None


def get_curseforge_version(mc_version: str) -> str:
    """Map a Minecraft version to the name CurseForge files it under."""
    for name in _SNAPSHOT_NAMES:
        index = mc_version.find(name)
        if index > -1:
            return mc_version[:index] + "-Snapshot"
    match = _SNAPSHOT_VERSION.search(mc_version)
    if match is None:
        return mc_version
    name = _snapshot_name(int(match.group(1)), int(match.group(2)))
    return name if name is not None else mc_version


def get_curseforge_versions(mc_versions: list[str]) -> list[str]:
    """Map each Minecraft version to its CurseForge name."""
    return [get_curseforge_version(version) for version in mc_versions]


@dataclass(frozen=True)
class ParsedProject:
    """Project reference taken from a CurseForge URL or slug."""

    game: str = ""
    category: str = ""
    slug: str = ""
    file_id: int = 0


def parse_slug_or_url(url: str) -> ParsedProject:
    """Parse a CurseForge project URL or slug; empty fields where nothing matched."""
    for pattern in _URL_PATTERNS:
        match = pattern.search(url)
        if match is None:
            continue
        groups = match.groupdict()
        file_id = 0
        raw_file_id = groups.get("fileID") or ""
        if raw_file_id:
            file_id = int(raw_file_id)
            if file_id > _UINT32_MAX:
                raise ValueError(f"file ID {raw_file_id} is out of range")
        return ParsedProject(
            game=groups.get("game") or "",
            category=groups.get("category") or "",
            slug=groups.get("slug") or "",
            file_id=file_id,
        )
    return ParsedProject()


def _join(*parts: str) -> str:
    kept = [part for part in parts if part]
    if not kept:
        return ""
    return os.path.normpath(os.sep.join(kept))


def get_path_for_file(
    game_id: int,
    class_id: int,
    category_id: int,
    slug: str,
    meta_folder: str,
    meta_folder_base: str,
) -> str:
    """Return the metadata file path for a CurseForge project."""
    file_name = slug + META_EXTENSION
    if not meta_folder:
        folders = _DEFAULT_FOLDERS.get(game_id)
        if folders is not None:
            if class_id in folders:
                return _join(meta_folder_base, folders[class_id], file_name)
            if category_id in folders:
                return _join(meta_folder_base, folders[category_id], file_name)
        meta_folder = "."
    return _join(meta_folder_base, meta_folder, file_name)


def map_dep_override(dep_id: int, is_quilt: bool, mc_version: str) -> int:
    """Swap Fabric dependencies for their Quilt equivalents when the pack uses Quilt."""
    if is_quilt and dep_id == 306612:
        return 634179
    if is_quilt and dep_id == 308769:
        if less("1.19.1", mc_version) and less(mc_version, "2.0.0"):
            return 720410
    return dep_id