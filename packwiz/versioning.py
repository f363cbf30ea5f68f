"""Minecraft version ordering (FlexVer) and acceptable-version list handling."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Iterable, Optional


class VersionListError(ValueError):
    """Raised when an acceptable-versions list cannot be changed as asked."""


class _Kind(enum.Enum):
    LEXICAL = "lexical"
    NUMERIC = "numeric"
    PRERELEASE = "prerelease"


@dataclass(frozen=True)
class _Component:
    kind: _Kind
    text: str


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _make_component(is_number: bool, text: str) -> _Component:
    if is_number:
        return _Component(_Kind.NUMERIC, text)
    if len(text) > 1 and text[0] == "-":
        return _Component(_Kind.PRERELEASE, text)
    return _Component(_Kind.LEXICAL, text)


def _decompose(version: str) -> list[_Component]:
    if not version:
        return []
    components: list[_Component] = []
    last_was_number = _is_digit(version[0])
    accum: list[str] = []
    for char in version:
        if char == "+":
            # Build metadata is ignored
            break
        is_number = _is_digit(char)
        if is_number != last_was_number or (char == "-" and accum and accum[0] != "-"):
            components.append(_make_component(last_was_number, "".join(accum)))
            accum = []
            last_was_number = is_number
        accum.append(char)
    components.append(_make_component(last_was_number, "".join(accum)))
    return components


def _strip_leading_zeroes(text: str) -> str:
    if len(text) == 1:
        return text
    index = 0
    while index < len(text) - 1 and text[index] == "0":
        index += 1
    return text[index:]


def _compare_lexical(a: str, b: str) -> int:
    for char_a, char_b in zip(a, b):
        if char_a != char_b:
            return ord(char_a) - ord(char_b)
    return len(a) - len(b)


def _compare_components(a: Optional[_Component], b: Optional[_Component]) -> int:
    if a is None:
        return 0 if b is None else -_compare_components(b, a)
    if b is None:
        return -1 if a.kind is _Kind.PRERELEASE else 1
    if a.kind is _Kind.NUMERIC and b.kind is _Kind.NUMERIC:
        digits_a = _strip_leading_zeroes(a.text)
        digits_b = _strip_leading_zeroes(b.text)
        if len(digits_a) != len(digits_b):
            return len(digits_a) - len(digits_b)
        return _compare_lexical(digits_a, digits_b)
    return _compare_lexical(a.text, b.text)


def compare(a: str, b: str) -> int:
    """Compare two version strings; negative, zero or positive like a comparator."""
    parts_a = _decompose(a)
    parts_b = _decompose(b)
    for index in range(max(len(parts_a), len(parts_b))):
        comp_a = parts_a[index] if index < len(parts_a) else None
        comp_b = parts_b[index] if index < len(parts_b) else None
        result = _compare_components(comp_a, comp_b)
        if result != 0:
            return result
    return 0


def less(a: str, b: str) -> bool:
    """Return True if version ``a`` orders before version ``b``."""
    return compare(a, b) < 0


def sort_versions(versions: Iterable[str]) -> list[str]:
    """Return the versions sorted from lowest to highest."""
    return sorted(versions, key=cmp_to_key(compare))


def dedupe_versions(versions: Iterable[str]) -> list[str]:
    """Remove duplicates, keeping the last occurrence of each version."""
    items = list(versions)
    return [value for position, value in enumerate(items) if value not in items[position + 1:]]


def is_sorted(versions: Iterable[str]) -> bool:
    """Return True if no version is followed by a lower one."""
    items = list(versions)
    return not any(less(following, current) for current, following in zip(items, items[1:]))


def add_acceptable_version(versions: Iterable[str], version: str) -> list[str]:
    """Return a sorted copy of the list with ``version`` added."""
    items = list(versions)
    if version in items:
        raise VersionListError(f"Version {version} is already in your acceptable versions list!")
    items.append(version)
    return sort_versions(items)


def remove_acceptable_version(versions: Iterable[str], version: str) -> list[str]:
    """Return a sorted copy of the list with ``version`` removed."""
    items = list(versions)
    if version not in items:
        raise VersionListError(f"Version {version} is not in your acceptable versions list!")
    items.remove(version)
    return sort_versions(items)


def format_version_list(versions: Iterable[str], mc_version: str) -> str:
    """Format the acceptable versions followed by the pack's Minecraft version."""
    return ", ".join(versions) + ", " + mc_version