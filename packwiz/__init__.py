"""Building blocks for Minecraft modpack tooling: version ordering, CurseForge, Modrinth and GitHub metadata, and export decisions."""

__version__ = "0.1.0"