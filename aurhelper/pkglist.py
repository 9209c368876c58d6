"""Parsing makepkg package lists and dependency strings."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path

_VER_CHARS = frozenset("<=>")


def is_ver_char(char: str) -> bool:
    """Whether a character starts a version constraint."""
    return char in _VER_CHARS


def trim_dep_ver(dep: str, trim: bool) -> str:
    """Strip the version constraint from a dependency when asked to."""
    if not trim:
        return dep
    for index, char in enumerate(dep):
        if is_ver_char(char):
            return dep[:index]
    return dep


def parse_package_list(output: str) -> tuple[dict[str, str], str]:
    """Parse ``makepkg --packagelist`` output.

    Returns a mapping of package name to package file path and the
    ``pkgver-pkgrel`` of the last package listed. File names are taken to
    be ``pkgname-pkgver-pkgrel-arch.pkgext``.
    """
    pkgdests: dict[str, str] = {}
    version = ""
    for line in output.strip().splitlines():
        file = line.rsplit("/", 1)[-1]
        parts = file.split("-")
        if len(parts) < 4:
            raise ValueError(f"can't find package name in packagelist: {line}")
        pkgname = "-".join(parts[:-3])
        version = "-".join(parts[-3:-1])
        pkgdests[pkgname] = line
    return pkgdests, version


def is_debug(name: str, base: str | None) -> bool:
    """Whether a package is the debug package split off its base."""
    if base is None or not name.endswith("-debug"):
        return False
    stripped = name
    while stripped.endswith("-debug"):
        stripped = stripped[: -len("-debug")]
    return stripped == base


def debug_packages(
    pkgdest: Mapping[str, str], pkgnames: Iterable[str]
) -> dict[str, str]:
    """Find built debug packages for the given package names.

    Returns a mapping of debug package name to file path, for files that exist.
    """
    names = list(pkgnames)
    found: dict[str, str] = {}
    for dest in pkgdest.values():
        file = dest.rsplit("/", 1)[-1]
        for name in names:
            if file.startswith(f"{name}-debug-"):
                found[f"{name}-debug"] = dest
    return {name: path for name, path in found.items() if Path(path).exists()}


def all_built(pkgnames: Iterable[str], pkgdest: Mapping[str, str]) -> bool:
    """Whether every package's file already exists; KeyError if one is unlisted."""
    return all(Path(pkgdest[name]).exists() for name in pkgnames)