"""Reporting missing dependencies and package conflicts."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import dataclass, field

from aurhelper.fmt import Colors


class ResolveError(Exception):
    """The requested packages cannot be installed as they stand."""


@dataclass(frozen=True)
class DepMissing:
    """One link in the chain of packages that wanted a missing dependency."""

    pkg: str
    dep: str | None = None


@dataclass
class Missing:
    """A dependency that could not be found, and who wanted it."""

    dep: str
    stack: list[DepMissing] = field(default_factory=list)


@dataclass(frozen=True)
class Conflicting:
    """A package in conflict, with the conflict string that caused it."""

    pkg: str
    conflict: str | None = None


@dataclass
class Conflict:
    """A package and the packages it conflicts with."""

    pkg: str
    conflicting: list[Conflicting] = field(default_factory=list)


def fmt_stack(want: DepMissing) -> str:
    """A package in a dependency chain, with the dependency it wanted."""
    if want.dep is None:
        return want.pkg
    return f"{want.pkg} ({want.dep})"


def format_missing(missing: Sequence[Missing], colors: Colors | None = None) -> str:
    """The error message for missing packages; empty if nothing is missing."""
    if not missing:
        return ""
    colors = colors or Colors()
    message = "could not find all required packages:"
    for item in missing:
        dep = colors.error.paint(item.dep)
        if not item.stack:
            message += f"\n    {dep} (target)"
        else:
            stack = " -> ".join(fmt_stack(want) for want in item.stack)
            message += f"\n    {dep} (wanted by: {stack})"
    return message


def check_duplicates(dups: Sequence[str]) -> None:
    """Raise ResolveError if any package was requested twice."""
    if dups:
        raise ResolveError(f"duplicate packages: {' '.join(dups)}")


def format_conflicts(
    title: str, conflicts: Sequence[Conflict], colors: Colors | None = None
) -> str:
    """A titled block listing each conflict, followed by a blank line."""
    colors = colors or Colors()
    lines = [f"{colors.error.paint('::')} {colors.bold.paint(title)}"]
    for conflict in conflicts:
        entries = "".join(
            f"{other.pkg}{'' if other.conflict is None else f' ({other.conflict})'}  "
            for other in conflict.conflicting
        )
        lines.append(f"    {conflict.pkg}: {entries}")
    lines.append("")
    return "".join(f"{line}\n" for line in lines)


def check_conflicts(
    conflicts: Sequence[Conflict],
    inner_conflicts: Sequence[Conflict],
    use_ask: bool = False,
    no_confirm: bool = False,
    colors: Colors | None = None,
) -> set[str]:
    """Report conflicts on stderr and return the names of conflicting packages.

    Raises ResolveError when conflicts would need manual confirmation but
    confirmation is turned off.
    """
    colors = colors or Colors()
    found = bool(conflicts) or bool(inner_conflicts)
    out = []
    if found:
        out.append("\n")
    if inner_conflicts:
        out.append(format_conflicts("Inner conflicts found:", inner_conflicts, colors))
    if conflicts:
        out.append(format_conflicts("Conflicts found:", conflicts, colors))
    if found and not use_ask:
        out.append(
            f"{colors.warning.paint('::')} "
            f"{colors.bold.paint('Conflicting packages will have to be confirmed manually')}\n"
        )
    sys.stderr.write("".join(out))

    if found and not use_ask and no_confirm:
        raise ResolveError("can not install conflicting packages with --noconfirm")

    return {conflict.pkg for conflict in conflicts} | {
        conflict.pkg for conflict in inner_conflicts
    }