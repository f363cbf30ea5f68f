"""Pieces of a CurseForge pack export: side filtering and the mod list page."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

UNIVERSAL_SIDE = "both"
SERVER_SIDE = "server"
CLIENT_SIDE = "client"
EMPTY_SIDE = ""

_PROJECT_URL_BASE = "https://www.curseforge.com/projects/"


class ExportError(ValueError):
    """Raised when an export cannot be carried out as asked."""


@dataclass(frozen=True)
class ModlistEntry:
    """A mod listed in modlist.html; ``project_id`` is None for files without CurseForge metadata."""

    name: str
    project_id: Optional[int] = None


def validate_side(side: str) -> str:
    """Return the side if it is one that can be exported."""
    if side not in (UNIVERSAL_SIDE, SERVER_SIDE, CLIENT_SIDE):
        raise ExportError(f'Invalid side "{side}", must be one of client, server, or both (default)')
    return side


def side_included(mod_side: str, export_side: str) -> bool:
    """Return True if a mod on ``mod_side`` belongs in an export for ``export_side``."""
    return (
        mod_side == export_side
        or mod_side in (EMPTY_SIDE, UNIVERSAL_SIDE)
        or export_side == UNIVERSAL_SIDE
    )


def project_url(project_id: int) -> str:
    """Return the CurseForge page for a project ID."""
    return _PROJECT_URL_BASE + str(project_id)


def create_modlist(entries: Iterable[ModlistEntry]) -> str:
    """Render the HTML mod list included in the exported zip."""
    lines = ["<ul>\r\n"]
    for entry in entries:
        if entry.project_id is None:
            lines.append("<li>" + entry.name + "</li>\r\n")
        else:
            lines.append(
                '<li><a href="' + project_url(entry.project_id) + '">' + entry.name + "</a></li>\r\n"
            )
    lines.append("</ul>\r\n")
    return "".join(lines)