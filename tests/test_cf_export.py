import pytest

from packwiz.cf_export import (
    ExportError,
    ModlistEntry,
    create_modlist,
    project_url,
    side_included,
    validate_side,
)


@pytest.mark.parametrize("side", ["client", "server", "both"])
def test_validate_side_accepts(side):
    assert validate_side(side) == side


@pytest.mark.parametrize("side", ["", "everything", "Client"])
def test_validate_side_rejects(side):
    with pytest.raises(ExportError):
        validate_side(side)


@pytest.mark.parametrize(
    "mod_side,export_side,expected",
    [
        ("client", "client", True),
        ("server", "client", False),
        ("client", "server", False),
        ("", "server", True),
        ("both", "client", True),
        ("server", "both", True),
    ],
)
def test_side_included(mod_side, export_side, expected):
    assert side_included(mod_side, export_side) is expected


def test_project_url():
    assert project_url(238222) == "https://www.curseforge.com/projects/238222"


def test_modlist_empty():
    assert create_modlist([]) == "<ul>\r\n</ul>\r\n"


def test_modlist_entries():
    html = create_modlist([ModlistEntry("JEI", 238222), ModlistEntry("Local Mod")])
    lines = html.split("\r\n")
    assert lines[0] == "<ul>"
    assert lines[1] == '<li><a href="' + project_url(238222) + '">JEI</a></li>'
    assert lines[2] == "<li>Local Mod</li>"
    assert lines[3] == "</ul>"
    assert html.endswith("\r\n")


def test_modlist_line_count_matches_entries():
    entries = [ModlistEntry(f"mod{n}", n) for n in range(5)]
    assert create_modlist(entries).count("<li>") == len(entries)