import json
from datetime import datetime, timezone

import pytest

from packwiz.modrinth import (
    ModrinthVersion,
    Pack,
    PackFile,
    compare_loader_lists,
    filter_versions_by_release_type,
    find_latest_version,
    get_best_hash,
    get_project_type_folder,
    get_side,
    map_dep_override,
    parse_slug_or_url,
    should_download_on_side,
)


def _date(day):
    return datetime(2023, 1, day, tzinfo=timezone.utc)


class TestProjectTypeFolder:
    def test_resourcepack(self):
        assert get_project_type_folder("resourcepack", [], []) == "resourcepacks"

    def test_shader_by_loader(self):
        assert get_project_type_folder("shader", ["optifine", "iris"], []) == "shaderpacks"
        assert get_project_type_folder("shader", ["canvas"], []) == "resourcepacks"

    def test_shader_default(self):
        assert get_project_type_folder("shader", ["unknown"], []) == "shaderpacks"

    def test_mod_uses_pack_loader(self):
        assert get_project_type_folder("mod", ["fabric", "quilt"], ["quilt"]) == "mods"
        assert get_project_type_folder("mod", ["paper"], ["paper"]) == "plugins"

    def test_mod_default(self):
        assert get_project_type_folder("mod", ["forge"], ["fabric"]) == "mods"

    def test_datapack(self):
        assert get_project_type_folder("mod", ["datapack"], ["fabric"], "datapacks") == "datapacks"
        with pytest.raises(ValueError, match="datapack-folder"):
            get_project_type_folder("mod", ["datapack"], ["fabric"])

    def test_modpack_rejected(self):
        with pytest.raises(ValueError, match="modpacks"):
            get_project_type_folder("modpack", [], [])

    def test_unknown_type(self):
        with pytest.raises(ValueError, match="unknown project type weird"):
            get_project_type_folder("weird", [], [])


class TestParseSlugOrUrl:
    def test_project_url(self):
        result = parse_slug_or_url("https://modrinth.com/mod/sodium")
        assert result.slug == "sodium"
        assert result.version == ""
        assert result.version_id is None
        assert result.parsed_slug is False

    def test_version_url(self):
        result = parse_slug_or_url("https://modrinth.com/mod/sodium/version/mc1.20.1-0.5.0")
        assert result.slug == "sodium"
        assert result.version == "mc1.20.1-0.5.0"

    def test_unknown_category(self):
        with pytest.raises(ValueError, match="unknown project type: foo"):
            parse_slug_or_url("https://modrinth.com/foo/sodium")

    def test_cdn_url(self):
        result = parse_slug_or_url(
            "https://cdn.modrinth.com/data/AANobbMI/versions/abc123/sodium%20fabric.jar"
        )
        assert result.slug == "AANobbMI"
        assert result.version_id == "abc123"
        assert result.filename == "sodium fabric.jar"
        assert result.parsed_slug is False

    def test_cdn_bad_escape(self):
        with pytest.raises(ValueError, match="invalid URL escape"):
            parse_slug_or_url("https://cdn.modrinth.com/data/abc/versions/def/bad%zz.jar")

    def test_slug(self):
        result = parse_slug_or_url("sodium")
        assert result.slug == "sodium"
        assert result.parsed_slug is True
        assert result.version is None

    @pytest.mark.parametrize("text", ["ab", "two words"])
    def test_no_match(self, text):
        result = parse_slug_or_url(text)
        assert result.slug is None
        assert result.parsed_slug is False


class TestCompareLoaderLists:
    def test_quilt_preferred(self):
        assert compare_loader_lists(["fabric"], ["quilt"]) == 1
        assert compare_loader_lists(["quilt"], ["fabric"]) == -1

    def test_compat_group_equal(self):
        assert compare_loader_lists(["quilt", "fabric"], ["fabric"]) == 0

    def test_same_lists(self):
        assert compare_loader_lists(["forge"], ["forge"]) == 0

    def test_unknown_loader_in_b(self):
        assert compare_loader_lists(["fabric"], ["weird"]) == 1


class TestFindLatestVersion:
    def test_flexver_number_wins(self):
        old = ModrinthVersion(id="a", version_number="1.10.0", game_versions=["1.20"], date_published=_date(5))
        new = ModrinthVersion(id="b", version_number="1.9.0", game_versions=["1.20"], date_published=_date(9))
        assert find_latest_version([old, new], ["1.20"], True) is old
        assert find_latest_version([old, new], ["1.20"], False) is new

    def test_game_version_preferred(self):
        later_mc = ModrinthVersion(id="a", version_number="1.0", game_versions=["1.20"], date_published=_date(1))
        earlier_mc = ModrinthVersion(id="b", version_number="1.0", game_versions=["1.19"], date_published=_date(9))
        assert find_latest_version([earlier_mc, later_mc], ["1.19", "1.20"], False) is later_mc
        assert find_latest_version([later_mc, earlier_mc], ["1.19", "1.20"], False) is later_mc

    def test_loader_tiebreak(self):
        fabric = ModrinthVersion(id="a", version_number="1.0", loaders=["fabric"], date_published=_date(3))
        quilt = ModrinthVersion(id="b", version_number="1.0", loaders=["quilt"], date_published=_date(3))
        assert find_latest_version([fabric, quilt], [], False) is quilt
        assert find_latest_version([quilt, fabric], [], False) is quilt

    def test_empty(self):
        with pytest.raises(ValueError):
            find_latest_version([], ["1.20"], False)


def test_filter_versions_by_release_type():
    release = ModrinthVersion(id="a", version_type="release")
    beta = ModrinthVersion(id="b", version_type="beta")
    unknown = ModrinthVersion(id="c")
    assert filter_versions_by_release_type([release, beta, unknown], "beta") == [beta]
    assert filter_versions_by_release_type([release, unknown], "alpha") == []


def test_should_download_on_side():
    assert should_download_on_side("required")
    assert should_download_on_side("optional")
    assert not should_download_on_side("unsupported")


@pytest.mark.parametrize(
    "server, client, expected",
    [
        ("required", "optional", "both"),
        ("required", "unsupported", "server"),
        ("unsupported", "optional", "client"),
        ("unsupported", "unsupported", ""),
    ],
)
def test_get_side(server, client, expected):
    assert get_side(server, client) == expected


class TestGetBestHash:
    def test_preference_order(self):
        hashes = {"sha1": "one", "sha512": "five", "sha256": "two"}
        assert get_best_hash(hashes) == ("sha512", "five")
        assert get_best_hash({"sha1": "one", "murmur2": "m"}) == ("sha1", "one")

    def test_fallback(self):
        assert get_best_hash({"md5": "x"}) == ("md5", "x")

    def test_none(self):
        assert get_best_hash({}) == ("", "")


class TestMapDepOverride:
    def test_fabric_api(self):
        assert map_dep_override("P7dR8mSH", True, "1.18.2") == "qvIfYCYJ"
        assert map_dep_override("fabric-api", True, "1.18.2") == "qvIfYCYJ"
        assert map_dep_override("fabric-api", False, "1.18.2") == "fabric-api"

    def test_kotlin(self):
        assert map_dep_override("Ha28R6CL", True, "1.19.2") == "lwVhp9o5"
        assert map_dep_override("fabric-language-kotlin", True, "1.18.2") == "fabric-language-kotlin"
        assert map_dep_override("Ha28R6CL", False, "1.19.2") == "Ha28R6CL"


class TestPackJson:
    def test_pack_file(self):
        entry = PackFile(
            path="mods/a.jar",
            hashes={"sha512": "b", "sha1": "a"},
            env={"client": "required", "server": "unsupported"},
            downloads=["https://cdn.modrinth.com/a.jar"],
            file_size=10,
        )
        data = entry.to_json()
        assert data["env"] == {"client": "required", "server": "unsupported"}
        assert data["fileSize"] == 10
        assert list(data["hashes"]) == ["sha1", "sha512"]

    def test_pack_file_without_env(self):
        assert PackFile(path="x").to_json()["env"] is None

    def test_pack_omits_empty_summary(self):
        pack = Pack(version_id="1.0", name="Pack", dependencies={"minecraft": "1.20.1"})
        data = pack.to_json()
        assert "summary" not in data
        assert data["formatVersion"] == 1
        assert data["game"] == "minecraft"
        assert data["dependencies"] == {"minecraft": "1.20.1"}

    def test_pack_round_trip_through_json(self):
        pack = Pack(
            version_id="1.0",
            name="Pack",
            summary="desc",
            files=[PackFile(path="mods/a.jar")],
        )
        decoded = json.loads(json.dumps(pack.to_json()))
        assert decoded["summary"] == "desc"
        assert decoded["versionId"] == "1.0"
        assert decoded["files"][0]["path"] == "mods/a.jar"