"""Showing PKGBUILDs and their changes for review before a build."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path

from aurhelper.exec import CommandError, command_error_message
from aurhelper.fmt import Colors

PAGER_ENV = "AURHELPER_PAGER"
LESS_DEFAULT = "SRXF"
LESS_NOTICE = "Paging with less. Press 'q' to quit or 'h' for help."


def choose_pager(
    configured: str | None,
    environ: Mapping[str, str],
    less_available: bool,
) -> str:
    """Pick the pager: configured, then the environment, then less or cat."""
    if configured is not None:
        return configured
    for name in (PAGER_ENV, "PAGER"):
        if name in environ:
            return environ[name]
    return "less" if less_available else "cat"


def format_diff(pkg: str, diff: str, colors: Colors | None = None) -> str:
    """A package's diff, headed by its name and indented by four spaces."""
    colors = colors or Colors()
    body = diff.replace("\n", "\n    ").rstrip()
    return f"{colors.action.paint('::')} {colors.bold.paint(pkg)}:\n    {body}\n\n"


def _lines(data: bytes) -> list[bytes]:
    """Split into lines, dropping the newline and a carriage return before it."""
    if not data:
        return []
    parts = data.split(b"\n")
    if parts[-1] == b"":
        parts.pop()
    return [part[:-1] if part.endswith(b"\r") else part for part in parts]


def _indented(data: bytes) -> str:
    return "".join(
        f"    {line.decode('utf-8', errors='replace')}\n" for line in _lines(data)
    )


def _run_bat(bat_command: Sequence[str], file: Path) -> bytes:
    program, *flags = bat_command
    cmd = [program, "-pp", "--color=always", str(file), *flags]
    try:
        completed = subprocess.run(cmd, capture_output=True)
    except OSError as err:
        raise CommandError(command_error_message([program, str(file)])) from err
    return completed.stdout


def render_dir(
    pkgdir: str | os.PathLike[str],
    path: str | os.PathLike[str],
    colors: Colors | None = None,
    bat_command: Sequence[str] | None = None,
    recurse: int = 1,
) -> str:
    """Render the files of a package directory for reading in a pager.

    Files are shown only in directories that hold a PKGBUILD; ``.git`` and
    ``.SRCINFO`` are skipped, and subdirectories are entered ``recurse``
    levels deep. ``bat_command`` is the highlighter and its extra flags;
    without it files are shown as they are.
    """
    colors = colors or Colors()
    bold = colors.bold.paint
    pkgdir = Path(pkgdir)
    path = Path(path)
    has_pkgbuild = (path / "PKGBUILD").exists()

    out: list[str] = []
    with os.scandir(path) as scan:
        entries = sorted(scan, key=lambda entry: entry.name)

    for entry in entries:
        is_dir = entry.is_dir(follow_symlinks=False)
        is_file = entry.is_file(follow_symlinks=False)
        if is_dir and entry.name == ".git":
            continue
        if is_file and entry.name == ".SRCINFO":
            continue
        if is_dir:
            if recurse == 0:
                continue
            out.append(render_dir(pkgdir, entry.path, colors, bat_command, recurse - 1))
        if not has_pkgbuild:
            continue

        file = Path(entry.path)
        relative = file.relative_to(pkgdir)
        if entry.is_symlink():
            out.append(f"  {bold(f'  {relative} -> {os.readlink(file)}' + chr(10) * 2)}")
            continue
        if is_dir:
            continue

        out.append(f"  {bold(str(relative))}:\n")
        if bat_command:
            out.append(_indented(_run_bat(bat_command, file)))
        else:
            data = file.read_bytes()
            try:
                data.decode("utf-8")
            except UnicodeDecodeError:
                out.append(f"  {bold(f'binary file: {relative}')}")
            else:
                out.append(_indented(data))
        out.append("\n")
    return "".join(out)


def run_pager(pager: str, text: str) -> int:
    """Pipe text through a pager run by the shell and return its exit code.

    ``LESS`` is set to sensible defaults unless already set.
    """
    env = dict(os.environ)
    env.setdefault("LESS", LESS_DEFAULT)
    try:
        process = subprocess.Popen(["sh", "-c", pager], stdin=subprocess.PIPE, env=env)
    except OSError as err:
        raise CommandError(f"failed to run: {pager}") from err

    assert process.stdin is not None
    try:
        process.stdin.write(text.encode("utf-8"))
    except BrokenPipeError:
        pass
    try:
        process.stdin.close()
    except BrokenPipeError:
        pass
    return process.wait()


def run_file_manager(
    fm: str, fm_flags: Sequence[str], directory: str | os.PathLike[str]
) -> None:
    """Open a directory in a file manager; raise CommandError if it fails."""
    try:
        completed = subprocess.run(
            [fm, *fm_flags, os.fspath(directory)], cwd=directory
        )
    except OSError as err:
        raise CommandError(f"failed to execute file manager: {fm}") from err
    if completed.returncode != 0:
        raise CommandError("file manager did not execute successfully")