[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "packwiz"
version = "0.1.0"
description = "Building blocks for Minecraft modpack tooling: version ordering, CurseForge, Modrinth and GitHub metadata, and export decisions"
requires-python = ">=3.10"
keywords = ["minecraft", "modpack", "curseforge", "modrinth", "mrpack", "flexver"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment",
]
dependencies = [
    "regex",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["packwiz"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
