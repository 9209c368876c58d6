"""Formatting helpers: styles, word wrapping and install summaries."""

from __future__ import annotations

import re
import sys
from collections.abc import Collection, Iterable, Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime

from wcwidth import wcswidth

RESET = "\x1b[0m"
LATEST_COMMIT = "latest-commit"
NONE = "None"
OLD_VERSION = "Old Version"
NEW_VERSION = "New Version"
MAKE_ONLY = "Make Only"
YES = "Yes"
NO = "No"

_ESCAPE = re.compile(r"\x1b\[[^m]*m?")


@dataclass(frozen=True)
class Style:
    """A terminal text style; the default style paints nothing."""

    bold: bool = False
    foreground: str | None = None

    @classmethod
    def fixed(cls, color: int, bold: bool = False) -> Style:
        """A style using one of the 256 fixed terminal colours."""
        return cls(bold=bold, foreground=f"38;5;{color}")

    def prefix(self) -> str:
        codes = []
        if self.bold:
            codes.append("1")
        if self.foreground:
            codes.append(self.foreground)
        return f"\x1b[{';'.join(codes)}m" if codes else ""

    def paint(self, text: str) -> str:
        """Wrap text in this style's escape codes."""
        prefix = self.prefix()
        if not prefix:
            return text
        return f"{prefix}{text}{RESET}"


@dataclass(frozen=True)
class Colors:
    """The styles used for each kind of output."""

    enabled: bool = False
    field: Style = field(default_factory=Style)
    error: Style = field(default_factory=Style)
    warning: Style = field(default_factory=Style)
    action: Style = field(default_factory=Style)
    bold: Style = field(default_factory=Style)
    install_version: Style = field(default_factory=Style)


@dataclass(frozen=True)
class RepoInstall:
    """A package to be installed from a sync repository."""

    name: str
    version: str
    db: str
    make: bool = False
    target: bool = False


@dataclass(frozen=True)
class BuildPackage:
    """One package produced by a build base."""

    name: str
    version: str | None = None
    make: bool = False
    target: bool = False


@dataclass
class BuildBase:
    """A package base to be built, from the AUR or a PKGBUILD repository."""

    package_base: str
    version: str
    packages: list[BuildPackage] = field(default_factory=list)
    repo: str = "aur"
    pkgbuild: bool = False

    @property
    def names(self) -> list[str]:
        return [pkg.name for pkg in self.packages]

    def base_is_pkg(self) -> bool:
        """Whether the base builds a single package of the same name."""
        return len(self.packages) == 1 and self.packages[0].name == self.package_base

    def package_version(self, pkg: BuildPackage) -> str:
        if self.pkgbuild or pkg.version is None:
            return self.version
        return pkg.version


@dataclass
class InstallPlan:
    """What is about to be installed and built."""

    install: list[RepoInstall] = field(default_factory=list)
    build: list[BuildBase] = field(default_factory=list)

    @property
    def aur_packages(self) -> list[BuildPackage]:
        return [pkg for base in self.build if not base.pkgbuild for pkg in base.packages]

    @property
    def pkgbuild_packages(self) -> list[BuildPackage]:
        return [pkg for base in self.build if base.pkgbuild for pkg in base.packages]


def _width(text: str) -> int:
    width = wcswidth(text)
    return width if width >= 0 else len(text)


def opt(value: str | None) -> str:
    """The value, or "None" when missing."""
    return NONE if value is None else value


def date(timestamp: int) -> str:
    """A Unix timestamp as a long local date."""
    when = datetime.fromtimestamp(timestamp)
    return f"{when:%a}, {when.day:>2} {when:%b %Y %H:%M:%S}"


def ymd(timestamp: int) -> str:
    """A Unix timestamp as a local year-month-day date."""
    return f"{datetime.fromtimestamp(timestamp):%Y-%m-%d}"


def word_len(text: str) -> int:
    """Length of text in characters, not counting ANSI escape sequences."""
    return len(_ESCAPE.sub("", text))


def format_indent(
    style: Style,
    start: int,
    indent: int,
    cols: int | None,
    sep: str,
    words: Iterable[str],
) -> str:
    """Join words with sep, wrapping at cols and indenting continued lines."""
    words = list(words)
    if not words:
        return ""
    if cols is None or cols <= indent + 2:
        return sep.join(style.paint(word) for word in words)

    first, *rest = words
    parts = [style.paint(first)]
    pos = start + word_len(first)
    if rest and pos + len(sep) < cols:
        parts.append(sep)
        pos += len(sep)

    last = len(rest) - 1
    for number, word in enumerate(rest):
        length = word_len(word)
        if pos + length > cols:
            parts.append("\n" + " " * indent)
            pos = indent
        parts.append(style.paint(word))
        pos += length
        if number < last and pos + len(sep) < cols:
            parts.append(sep)
            pos += len(sep)
    return "".join(parts)


def print_indent(
    style: Style,
    start: int,
    indent: int,
    cols: int | None,
    sep: str,
    words: Iterable[str],
) -> None:
    """Print words wrapped as format_indent does, then a newline."""
    print(format_indent(style, start, indent, cols, sep, words))


def color_repo(enabled: bool, name: str) -> str:
    """Paint a repository name in a colour derived from the name."""
    if not enabled:
        return name
    col = 5
    for byte in name.encode():
        col = (byte + (col << 4) + col) & 0xFFFFFFFF
    return Style.fixed(col % 6 + 9, bold=True).paint(name)


def print_target(targ: str, quiet: bool) -> None:
    """Print a repo/name target, or only the name when quiet."""
    if quiet:
        _, slash, name = targ.partition("/")
        if not slash:
            raise ValueError(f"target has no repository: {targ}")
        print(name)
    else:
        print(targ)


def base_string(colors: Colors, base: BuildBase, devel: Collection[str] = frozenset()) -> str:
    """Describe a build base as base-version, listing split packages."""
    if not base.packages:
        raise ValueError(f"package base has no packages: {base.package_base}")
    paint = colors.install_version.paint
    if any(name in devel for name in base.names):
        version = paint(LATEST_COMMIT)
    else:
        version = paint(base.version)
    text = f"{base.package_base}{paint('-')}{version}"
    if not base.base_is_pkg():
        text += f" ({' '.join(base.names)})"
    return text


def _section(colors: Colors, label: str, items: list[str], offset: int, cols: int | None) -> str:
    heading = f"{label} ({len(items)}) "
    start = offset + len(str(len(items)))
    return colors.bold.paint(heading) + format_indent(Style(), start, 8, cols, "  ", items)


def _bases_with(plan: InstallPlan, make: bool) -> list[BuildBase]:
    bases = (
        replace(base, packages=[pkg for pkg in base.packages if pkg.make == make])
        for base in plan.build
    )
    return [base for base in bases if base.packages]


def format_install(
    plan: InstallPlan,
    devel: Collection[str] = frozenset(),
    cols: int | None = None,
    colors: Colors | None = None,
) -> str:
    """The short install summary: wrapped lists of packages per section."""
    colors = colors or Colors()
    paint = colors.install_version.paint
    dash = paint("-")

    install = [f"{p.name}{dash}{paint(p.version)}" for p in plan.install if not p.make]
    make_install = [f"{p.name}{dash}{paint(p.version)}" for p in plan.install if p.make]
    aur = [base_string(colors, base, devel) for base in _bases_with(plan, False)]
    make_aur = [base_string(colors, base, devel) for base in _bases_with(plan, True)]
    has_pkgbuilds = bool(plan.pkgbuild_packages)

    lines = [""]
    if install:
        lines.append(_section(colors, "Repo", install, 17, cols))
    if make_install:
        lines.append(_section(colors, "Repo Make", make_install, 22, cols))
    if aur:
        label = "Pkgbuilds" if has_pkgbuilds else "Aur"
        lines.append(_section(colors, label, aur, 16, cols))
    if make_aur:
        label = "Pkgbuilds Make" if has_pkgbuilds else "Aur Make"
        lines.append(_section(colors, label, make_aur, 16, cols))
    lines.append("")
    return "".join(f"{line}\n" for line in lines)


def print_install(
    plan: InstallPlan,
    devel: Collection[str] = frozenset(),
    cols: int | None = None,
    colors: Colors | None = None,
) -> None:
    """Print the short install summary."""
    sys.stdout.write(format_install(plan, devel, cols, colors))


@dataclass(frozen=True)
class _Layout:
    repo_label: str
    aur_label: str
    package_len: int
    old_len: int
    new_len: int
    make_len: int

    def fits(self, cols: int | None) -> bool:
        total = self.package_len + 2 + self.old_len + 2 + self.new_len + 2 + self.make_len
        return cols is None or total <= cols


def _layout(plan: InstallPlan, old_versions: Mapping[str, str]) -> _Layout:
    repo_label = f"Repo ({len(plan.install)})"
    aur_count = len(plan.aur_packages)
    pkgbuild_count = len(plan.pkgbuild_packages)
    if pkgbuild_count == 0:
        aur_label = f"Aur ({aur_count})"
    else:
        aur_label = f"Pkgbuilds ({aur_count + pkgbuild_count})"

    package_len = max(
        [len(p.db) + 1 + len(p.name) for p in plan.install] + [_width(repo_label)]
    )
    old_len = max(
        [len(old_versions[p.name]) for p in plan.install if p.name in old_versions]
        + [_width(OLD_VERSION)]
    )
    new_len = max(
        [len(p.version) for p in plan.install] + [_width(NEW_VERSION), len(LATEST_COMMIT)]
    )
    make_len = max(_width(YES), _width(NO), _width(MAKE_ONLY))

    aur_len = max(
        [
            max(len(base.repo) + 1 + len(pkg.name) for pkg in base.packages)
            for base in plan.build
            if base.packages
        ]
        + [_width(aur_label)]
    )
    aur_old = []
    for base in plan.build:
        olds = [old_versions[name] for name in base.names if name in old_versions]
        if olds:
            aur_old.append(len(max(olds)))
    aur_old_len = max(aur_old + [_width(OLD_VERSION)])
    aur_new_len = max([len(base.version) for base in plan.build] + [_width(NEW_VERSION)])

    return _Layout(
        repo_label=repo_label,
        aur_label=aur_label,
        package_len=max(package_len, aur_len),
        old_len=max(old_len, aur_old_len),
        new_len=max(new_len, aur_new_len),
        make_len=make_len,
    )


def _header(colors: Colors, layout: _Layout, label: str) -> str:
    bold = colors.bold.paint
    return (
        f"{bold(label)}{' ' * (layout.package_len - _width(label))}  "
        f"{bold(OLD_VERSION)}{' ' * (layout.old_len - _width(OLD_VERSION))}  "
        f"{bold(NEW_VERSION)}{' ' * (layout.new_len - _width(NEW_VERSION))}  "
        f"{bold(MAKE_ONLY)}"
    )


def _row(layout: _Layout, package: str, old: str, new: str, make: bool) -> str:
    return (
        f"{package.ljust(layout.package_len)}  {old.ljust(layout.old_len)}  "
        f"{new.ljust(layout.new_len)}  {YES if make else NO}"
    )


def format_install_verbose(
    plan: InstallPlan,
    devel: Collection[str] = frozenset(),
    cols: int | None = None,
    colors: Colors | None = None,
    old_versions: Mapping[str, str] | None = None,
) -> str:
    """The install summary as a table; the short form if it does not fit cols.

    ``old_versions`` maps package names to their currently installed versions.
    """
    colors = colors or Colors()
    old_versions = old_versions or {}
    layout = _layout(plan, old_versions)
    if not layout.fits(cols):
        return format_install(plan, devel, cols, colors)

    lines = []
    if plan.install:
        lines += ["", _header(colors, layout, layout.repo_label)]
        for pkg in sorted(plan.install, key=lambda p: (p.db, p.name)):
            lines.append(
                _row(
                    layout,
                    f"{pkg.db}/{pkg.name}",
                    old_versions.get(pkg.name, ""),
                    pkg.version,
                    pkg.make,
                )
            )

    if plan.build:
        lines += ["", _header(colors, layout, layout.aur_label)]
        for base in plan.build:
            for pkg in base.packages:
                version = LATEST_COMMIT if pkg.name in devel else base.package_version(pkg)
                lines.append(
                    _row(
                        layout,
                        f"{base.repo}/{pkg.name}",
                        old_versions.get(pkg.name, ""),
                        version,
                        pkg.make,
                    )
                )

    lines.append("")
    return "".join(f"{line}\n" for line in lines)


def print_install_verbose(
    plan: InstallPlan,
    devel: Collection[str] = frozenset(),
    cols: int | None = None,
    colors: Colors | None = None,
    old_versions: Mapping[str, str] | None = None,
) -> None:
    """Print the install table, warning and falling back when it does not fit."""
    colors = colors or Colors()
    if not _layout(plan, old_versions or {}).fits(cols):
        print(
            f"{colors.warning.paint('::')} insufficient columns available for table display",
            file=sys.stderr,
        )
    sys.stdout.write(format_install_verbose(plan, devel, cols, colors, old_versions))