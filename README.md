# packwiz

A library of building blocks for Minecraft modpack tooling. It holds the
decision logic for working with CurseForge, Modrinth and GitHub-hosted
projects: ordering versions, parsing project URLs, choosing the right file or
version, and deciding how files go into a `.mrpack` or CurseForge export. It
does no network access and no file writing of its own; callers fetch data and
pass it in.

## Installation

```
pip install .
```

The tests need the `test` extra (`pip install ".[test]"`) and are run with
`python -m pytest`.

## Modules

- `packwiz.versioning`: version comparison and ordering (`compare`, `less`,
  `sort_versions`) and handling of a pack's acceptable Minecraft versions
  (`add_acceptable_version`, `remove_acceptable_version`, `dedupe_versions`,
  `is_sorted`, `format_version_list`). Adding a version already present, or
  removing one that is absent, raises `VersionListError`.
- `packwiz.murmur2`: the whitespace-stripping MurmurHash2 used for CurseForge
  fingerprints. `murmurhash2(data, seed)` is the plain hash,
  `strip_whitespace` removes tab, newline, carriage return and space bytes,
  `fingerprint(data)` combines the two with seed 1, and `Murmur2CF` is a
  hash object with `update`, `digest`, `hexdigest`, `intdigest` and `reset`.
- `packwiz.urls`: checks for adding files from direct download links.
  `check_download_url(url, force)` accepts only http and https, and unless
  `force` is set refuses Modrinth and CurseForge hosts, raising
  `UrlAddError`. `file_name_from_url` returns the last path element.
- `packwiz.cf_versions`: CurseForge game-version names for releases,
  pre-releases and snapshots (`get_curseforge_version`,
  `get_curseforge_versions`), parsing of CurseForge URLs and slugs into a
  `ParsedProject` (`parse_slug_or_url`), metadata file paths
  (`get_path_for_file`) and Quilt dependency substitution
  (`map_dep_override`).
- `packwiz.modrinth`: Modrinth models (`ModrinthFile`, `ModrinthVersion`),
  URL and slug parsing into an `UrlParseResult` (`parse_slug_or_url`),
  folder choice by project type and loader (`get_project_type_folder`),
  loader preference (`compare_loader_lists`), choosing the latest version
  (`find_latest_version`, `filter_versions_by_release_type`), side and hash
  selection (`get_side`, `should_download_on_side`, `get_best_hash`),
  Quilt dependency substitution (`map_dep_override`) and the pack index
  (`Pack`, `PackFile`, each with `to_json`).
- `packwiz.mrpack`: Modrinth update metadata (`MrUpdateData` with `to_map`
  and `from_map`) and `.mrpack` export decisions: `primary_file`,
  `update_string`, `can_be_included_directly`, `export_env`,
  `loader_dependencies` and `sort_pack_files`.
- `packwiz.cf_export`: pieces of a CurseForge export: `validate_side`
  (raises `ExportError`), `side_included`, `project_url` and
  `create_modlist`, which renders `modlist.html` from `ModlistEntry` items.
- `packwiz.github`: GitHub data (`Repo`, `Release`, `Asset`, each with
  `from_json`; `GhUpdateData` with `to_map` and `from_map`), repository
  slugs and API URLs (`parse_repo_slug`, `repo_url`, `releases_url`),
  request headers and response checks including ratelimits
  (`build_headers`, `check_response`), and release and asset selection
  (`select_latest_release`, `select_asset`, `update_file_for_release`).
  Failures raise `GitHubError`.

## Example

```python
from packwiz.cf_versions import get_curseforge_version
from packwiz.versioning import sort_versions

print(get_curseforge_version("1.19-pre1"))              # 1.19-Snapshot
print(sort_versions(["1.16.5", "1.16.10", "1.16.4"]))   # ['1.16.4', '1.16.5', '1.16.10']
```

## What it does not do

- There is no command-line tool; every piece is a function or class to call
  from your own code.
- It does not talk to the CurseForge, Modrinth or GitHub APIs, download files
  or compute their hashes from the network.
- It does not read or write `pack.toml`, the index or `.pw.toml` metadata
  files, and does not write export zips.
- It has no models for CurseForge projects and files, does not choose the
  latest CurseForge file, and does not read CurseForge `manifest.json` or
  `minecraftinstance.json` packs for import.