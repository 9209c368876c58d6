import os
import sys
import threading
import time

import pytest

from aurhelper.exec import (
    CommandError,
    ExecSettings,
    Status,
    command,
    command_error_message,
    command_output,
    command_status,
    makepkg,
    makepkg_command,
    makepkg_output,
    pacman,
    pacman_command,
    pacman_output,
    spawn_sudo,
    update_sudo,
    wait_for_lock,
)

PY = sys.executable


def script(code):
    return [PY, "-c", code]


def test_status_success_zero():
    assert Status(0).success() == 0


def test_status_success_nonzero_raises_itself():
    with pytest.raises(Status) as info:
        Status(4).success()
    assert info.value.code == 4


def test_command_error_message():
    assert command_error_message(["pacman", "-S", "foo"]) == "failed to run: pacman -S foo"


def test_command_status_returns_exit_code():
    assert command_status(script("import sys; sys.exit(3)")).code == 3


def test_command_status_missing_program():
    with pytest.raises(CommandError, match="failed to run:"):
        command_status(["/nonexistent/program-xyz"])


def test_command_raises_on_failure():
    with pytest.raises(CommandError) as info:
        command(script("import sys; sys.exit(2)"))
    assert str(info.value).startswith("failed to run: ")
    assert isinstance(info.value.__cause__, Status)


def test_command_env_and_cwd(tmp_path):
    out = tmp_path / "out.txt"
    command(
        script("import os; open('out.txt','w').write(os.environ['AURH_X'])"),
        cwd=tmp_path,
        env={"AURH_X": "value"},
    )
    assert out.read_text() == "value"


def test_command_output_captures_stdout():
    result = command_output(script("print('hello')"))
    assert result.stdout.decode().strip() == "hello"


def test_command_output_failure_includes_stderr():
    with pytest.raises(CommandError) as info:
        command_output(script("import sys; sys.stderr.write(' boom \\n'); sys.exit(1)"))
    assert str(info.value).endswith(": boom")


def test_update_sudo_success_and_failure():
    assert update_sudo(PY, ["-c", "pass"]) is None
    with pytest.raises(Status):
        update_sudo(PY, ["-c", "import sys; sys.exit(1)"])


def test_spawn_sudo_failing_first_call_raises():
    with pytest.raises(Status):
        spawn_sudo(PY, ["-c", "import sys; sys.exit(5)"])


def test_spawn_sudo_starts_daemon_thread():
    thread = spawn_sudo(PY, ["-c", "pass"])
    assert thread.daemon and thread.is_alive()


def test_wait_for_lock_no_lock(tmp_path):
    assert wait_for_lock(tmp_path) is False


def test_wait_for_lock_waits_until_removed(tmp_path, capsys):
    lock = tmp_path / "db.lck"
    lock.write_text("")

    def remove():
        time.sleep(0.1)
        lock.unlink()

    threading.Thread(target=remove).start()
    assert wait_for_lock(tmp_path, interval=0.02) is True
    assert not lock.exists()
    assert "Pacman is currently in use" in capsys.readouterr().out


def test_pacman_command_plain():
    settings = ExecSettings()
    assert pacman_command(settings, "pacman", ["-S", "foo"]) == ["pacman", "-S", "foo"]


def test_pacman_command_root_and_config():
    settings = ExecSettings(need_root=True, sudo_bin="doas", sudo_flags=["-n"], pacman_conf="/etc/p.conf")
    assert pacman_command(settings, "pacman", ["-Syu"]) == [
        "doas", "-n", "pacman", "--config", "/etc/p.conf", "-Syu",
    ]


def test_pacman_runs_binary():
    settings = ExecSettings()
    assert pacman(settings, PY, ["-c", "import sys; sys.exit(7)"]).code == 7
    out = pacman_output(settings, PY, ["-c", "print('ok')"])
    assert out.stdout.decode().strip() == "ok"


def test_makepkg_command_order():
    settings = ExecSettings(makepkg_bin="mp", makepkg_conf="/m.conf", mflags=["--skippgpcheck"])
    assert makepkg_command(settings, ["-f"]) == ["mp", "--config", "/m.conf", "--skippgpcheck", "-f"]


def test_makepkg_sets_pkgdest_and_cwd(tmp_path):
    settings = ExecSettings(makepkg_bin=PY)
    out = makepkg_output(
        settings, tmp_path, ["-c", "import os; print(os.environ['PKGDEST']); print(os.getcwd())"], "/dest"
    )
    lines = out.stdout.decode().splitlines()
    assert lines[0] == "/dest"
    assert os.path.samefile(lines[1], tmp_path)


def test_makepkg_status(tmp_path):
    settings = ExecSettings(makepkg_bin=PY)
    assert makepkg(settings, tmp_path, ["-c", "pass"]).code == 0
    assert makepkg(settings, tmp_path, ["-c", "import sys; sys.exit(9)"]).code == 9