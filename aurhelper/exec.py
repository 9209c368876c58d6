"""Running external programs: pacman, makepkg, sudo and friends."""

from __future__ import annotations

import logging
import os
import signal
import subprocess
import sys
import threading
import time
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

SUDO_REFRESH_SECONDS = 250

_TERMINATING_SIGNALS = tuple(
    getattr(signal, name)
    for name in ("SIGTERM", "SIGINT", "SIGQUIT")
    if hasattr(signal, name)
)


class Status(Exception):
    """Exit status of a finished program; raised when it is not zero."""

    def __init__(self, code: int) -> None:
        super().__init__(code)
        self.code = code

    def __str__(self) -> str:
        return f"Status: {self.code}"

    def __repr__(self) -> str:
        return f"Status({self.code})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Status) and other.code == self.code

    def __hash__(self) -> int:
        return hash(self.code)

    def success(self) -> int:
        """Return 0 if the program succeeded, otherwise raise this status."""
        if self.code == 0:
            return 0
        raise self


class CommandError(Exception):
    """A program could not be started or did not finish successfully."""


@dataclass
class ExecSettings:
    """How pacman and makepkg are invoked."""

    need_root: bool = False
    sudo_bin: str = "sudo"
    sudo_flags: list[str] = field(default_factory=list)
    pacman_conf: str | None = None
    makepkg_bin: str = "makepkg"
    makepkg_conf: str | None = None
    mflags: list[str] = field(default_factory=list)
    dbpath: str = "/var/lib/pacman/"


def command_error_message(cmd: Sequence[str]) -> str:
    """Describe a command that failed to run."""
    program, *args = [os.fsdecode(part) for part in cmd]
    return f"failed to run: {program} {' '.join(args)}"


@contextmanager
def _deferred_signals() -> Iterator[None]:
    """Hold back terminating signals while a child runs, then exit 128+n."""
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    caught: list[int] = []

    def record(signum: int, _frame: object) -> None:
        caught.append(signum)

    previous = {sig: signal.signal(sig, record) for sig in _TERMINATING_SIGNALS}
    try:
        yield
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler if handler is not None else signal.SIG_DFL)
        if caught:
            sys.exit(128 + int(caught[-1]))


def _environment(env: Mapping[str, str] | None) -> dict[str, str] | None:
    if not env:
        return None
    merged = dict(os.environ)
    merged.update(env)
    return merged


def command_status(
    cmd: Sequence[str],
    cwd: str | os.PathLike[str] | None = None,
    env: Mapping[str, str] | None = None,
) -> Status:
    """Run a command and return its exit status.

    ``env`` holds variables added to the current environment.
    A child killed by a signal reports status 1.
    """
    logger.debug("running command: %s", list(cmd))
    with _deferred_signals():
        try:
            completed = subprocess.run(list(cmd), cwd=cwd, env=_environment(env))
        except OSError as err:
            raise CommandError(command_error_message(cmd)) from err
    code = completed.returncode
    return Status(code if code >= 0 else 1)


def command(
    cmd: Sequence[str],
    cwd: str | os.PathLike[str] | None = None,
    env: Mapping[str, str] | None = None,
) -> None:
    """Run a command, raising CommandError unless it succeeds."""
    status = command_status(cmd, cwd, env)
    try:
        status.success()
    except Status as err:
        raise CommandError(command_error_message(cmd)) from err


def command_output(
    cmd: Sequence[str],
    cwd: str | os.PathLike[str] | None = None,
    env: Mapping[str, str] | None = None,
) -> subprocess.CompletedProcess[bytes]:
    """Run a command capturing stdout and stderr; raise on failure."""
    logger.debug("running command: %s", list(cmd))
    with _deferred_signals():
        try:
            completed = subprocess.run(
                list(cmd), cwd=cwd, env=_environment(env), capture_output=True
            )
        except OSError as err:
            raise CommandError(command_error_message(cmd)) from err

    if completed.returncode != 0:
        stderr = completed.stderr.decode("utf-8", errors="replace").strip()
        raise CommandError(f"{command_error_message(cmd)}: {stderr}")
    return completed


def update_sudo(sudo: str, flags: Sequence[str]) -> None:
    """Refresh the sudo timestamp; raise Status if sudo fails."""
    command_status([sudo, *flags]).success()


def _sudo_loop(sudo: str, flags: Sequence[str]) -> None:
    while True:
        time.sleep(SUDO_REFRESH_SECONDS)
        try:
            update_sudo(sudo, flags)
        except (Status, CommandError) as err:
            logger.debug("sudo loop stopped: %s", err)
            return


def spawn_sudo(sudo: str, flags: Sequence[str]) -> threading.Thread:
    """Refresh sudo now, then keep refreshing it in a background thread."""
    flags = list(flags)
    update_sudo(sudo, flags)
    thread = threading.Thread(target=_sudo_loop, args=(sudo, flags), daemon=True)
    thread.start()
    return thread


def wait_for_lock(dbpath: str | os.PathLike[str], interval: float = 3.0) -> bool:
    """Block while the pacman database lock exists; return whether we waited."""
    lock = Path(dbpath) / "db.lck"
    if not lock.exists():
        return False
    print(":: Pacman is currently in use, please wait...")
    while lock.exists():
        time.sleep(interval)
    return True


def pacman_command(settings: ExecSettings, bin: str, args: Sequence[str]) -> list[str]:
    """Build the argument list that runs pacman."""
    if settings.need_root:
        cmd = [settings.sudo_bin, *settings.sudo_flags, bin]
    else:
        cmd = [bin]
    if settings.pacman_conf is not None:
        cmd += ["--config", settings.pacman_conf]
    cmd += args
    return cmd


def pacman(settings: ExecSettings, bin: str, args: Sequence[str]) -> Status:
    """Run pacman and return its exit status."""
    if settings.need_root:
        wait_for_lock(settings.dbpath)
    return command_status(pacman_command(settings, bin, args))


def pacman_output(
    settings: ExecSettings, bin: str, args: Sequence[str]
) -> subprocess.CompletedProcess[bytes]:
    """Run pacman capturing its output; raise CommandError on failure."""
    if settings.need_root:
        wait_for_lock(settings.dbpath)
    return command_output(pacman_command(settings, bin, args))


def makepkg_command(settings: ExecSettings, args: Sequence[str]) -> list[str]:
    """Build the argument list that runs makepkg."""
    cmd = [settings.makepkg_bin]
    if settings.makepkg_conf is not None:
        cmd += ["--config", settings.makepkg_conf]
    cmd += settings.mflags
    cmd += args
    return cmd


def _pkgdest_env(pkgdest: str | None) -> dict[str, str] | None:
    return {"PKGDEST": pkgdest} if pkgdest is not None else None


def makepkg(
    settings: ExecSettings,
    directory: str | os.PathLike[str],
    args: Sequence[str],
    pkgdest: str | None = None,
) -> Status:
    """Run makepkg in a directory and return its exit status."""
    return command_status(
        makepkg_command(settings, args), cwd=directory, env=_pkgdest_env(pkgdest)
    )


def makepkg_output(
    settings: ExecSettings,
    directory: str | os.PathLike[str],
    args: Sequence[str],
    pkgdest: str | None = None,
) -> subprocess.CompletedProcess[bytes]:
    """Run makepkg in a directory capturing its output."""
    return command_output(
        makepkg_command(settings, args), cwd=directory, env=_pkgdest_env(pkgdest)
    )