"""Formatting of package information in the style of ``pacman -Si``."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from urllib.parse import urljoin

from wcwidth import wcswidth

from aurhelper.fmt import NO, NONE, Colors, Style, date, format_indent, opt

LABELS = (
    "Repository",
    "Name",
    "Version",
    "Description",
    "Groups",
    "Licenses",
    "Provides",
    "Depends On",
    "Make Deps",
    "Check Deps",
    "Optional Deps",
    "Conflicts With",
    "Maintainer",
    "Votes",
    "Popularity",
    "First Submitted",
    "Last Modified",
    "Out Of Date",
    "ID",
    "Package Base ID",
    "Keywords",
    "Snapshot URL",
    "Path",
    "URL",
    "AUR URL",
)


@dataclass(frozen=True)
class ArchVec:
    """A list of values that applies to one architecture, or to all."""

    arch: str | None = None
    values: tuple[str, ...] = ()


@dataclass
class AurPackage:
    """The fields the AUR reports about one package."""

    name: str
    version: str
    id: int = 0
    package_base_id: int = 0
    package_base: str = ""
    description: str | None = None
    url: str | None = None
    url_path: str = ""
    num_votes: int = 0
    popularity: float = 0.0
    out_of_date: int | None = None
    maintainer: str | None = None
    first_submitted: int = 0
    last_modified: int = 0
    groups: list[str] = field(default_factory=list)
    license: list[str] = field(default_factory=list)
    provides: list[str] = field(default_factory=list)
    depends: list[str] = field(default_factory=list)
    make_depends: list[str] = field(default_factory=list)
    check_depends: list[str] = field(default_factory=list)
    opt_depends: list[str] = field(default_factory=list)
    conflicts: list[str] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)


def _width(text: str) -> int:
    width = wcswidth(text)
    return width if width >= 0 else len(text)


def _number(value: float) -> str:
    if value == int(value) and abs(value) < 1e16:
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def arch_len(vecs: Iterable[ArchVec]) -> int:
    """Extra width an architecture suffix adds to a field name."""
    return max((len(vec.arch) + 1 for vec in vecs if vec.arch is not None), default=0)


def longest(arch_vecs: Iterable[Iterable[ArchVec]] = ()) -> int:
    """Width of the widest field name, including architecture suffixes."""
    label = max(_width(label) for label in LABELS)
    suffix = max((arch_len(vecs) for vecs in arch_vecs), default=0)
    return label + suffix


def _format_info(
    colors: Colors,
    is_list: bool,
    indent: int,
    cols: int | None,
    key: str,
    values: Iterable[str],
) -> str:
    padding = indent - _width(key) - 2
    if padding < 0:
        raise ValueError(f"field name {key!r} does not fit in an indent of {indent}")
    prefix = f"{key}{' ' * padding}: "
    sep = "  " if is_list else " "
    body = format_indent(Style(), indent, indent, cols, sep, values)
    return f"{colors.field.paint(prefix)}{body}\n"


def format_field(
    colors: Colors, indent: int, cols: int | None, key: str, value: str
) -> str:
    """One ``key : value`` line, the value wrapped word by word."""
    return _format_info(colors, False, indent, cols, key, value.split())


def format_list(
    colors: Colors, indent: int, cols: int | None, key: str, values: Sequence[str]
) -> str:
    """A field holding a list, or "None" when the list is empty."""
    if not values:
        return format_field(colors, indent, cols, key, NONE)
    return _format_info(colors, True, indent, cols, key, values)


def format_arch_list(
    colors: Colors, indent: int, cols: int | None, key: str, vecs: Sequence[ArchVec]
) -> str:
    """One list field per architecture, the architecture appended to the key."""
    if not vecs:
        return format_list(colors, indent, cols, key, [])
    return "".join(
        format_list(
            colors,
            indent,
            cols,
            key if vec.arch is None else f"{key} {vec.arch}",
            list(vec.values),
        )
        for vec in vecs
    )


def format_aur_info(
    colors: Colors,
    pkg: AurPackage,
    aur_url: str,
    indent: int,
    cols: int | None = None,
    verbose: bool = False,
) -> str:
    """The information block for one AUR package, ending with a blank line."""
    base_url = aur_url if aur_url.endswith("/") else f"{aur_url}/"

    def field_(key: str, value: str) -> str:
        return format_field(colors, indent, cols, key, value)

    def list_(key: str, values: Sequence[str]) -> str:
        return format_list(colors, indent, cols, key, values)

    parts = [
        field_("Repository", "aur"),
        field_("Name", pkg.name),
        field_("Version", pkg.version),
        field_("Description", opt(pkg.description)),
        field_("URL", opt(pkg.url)),
        field_("AUR URL", urljoin(base_url, f"packages/{pkg.name}")),
        list_("Groups", pkg.groups),
        list_("Licenses", pkg.license),
        list_("Provides", pkg.provides),
        list_("Depends On", pkg.depends),
        list_("Make Deps", pkg.make_depends),
        list_("Check Deps", pkg.check_depends),
        list_("Optional Deps", pkg.opt_depends),
        list_("Conflicts With", pkg.conflicts),
        field_("Maintainer", opt(pkg.maintainer)),
        field_("Votes", str(pkg.num_votes)),
        field_("Popularity", _number(pkg.popularity)),
        field_("First Submitted", date(pkg.first_submitted)),
        field_("Last Modified", date(pkg.last_modified)),
        field_("Out Of Date", NO if pkg.out_of_date is None else date(pkg.out_of_date)),
    ]
    if verbose:
        parts += [
            field_("ID", str(pkg.id)),
            field_("Package Base ID", str(pkg.package_base_id)),
            list_("Keywords", pkg.keywords),
            field_("Snapshot URL", urljoin(base_url, pkg.url_path)),
        ]
    parts.append("\n")
    return "".join(parts)


def print_aur_info(
    colors: Colors,
    pkgs: Iterable[AurPackage],
    aur_url: str,
    indent: int,
    verbose: bool = False,
) -> None:
    """Print the information block of each package, wrapped to the terminal."""
    cols = get_terminal_width()
    for pkg in pkgs:
        sys.stdout.write(format_aur_info(colors, pkg, aur_url, indent, cols, verbose))


def get_terminal_width() -> int | None:
    """Columns of the terminal on stdout, or None if stdout is not a terminal."""
    try:
        return os.get_terminal_size(sys.stdout.fileno()).columns
    except (OSError, ValueError, AttributeError):
        return None