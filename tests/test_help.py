from aurhelper.help import PROG, help_text, print_help


def test_help_starts_with_usage():
    lines = help_text().splitlines()
    assert lines[0] == "Usage:"
    assert lines[1] == f"    {PROG}"


def test_help_ends_with_build_options():
    lines = help_text().splitlines()
    assert lines[-2] == "Build specific options:"
    assert lines[-1].strip().startswith("-i --install")
    assert help_text().endswith("\n")


def test_help_section_headings_follow_blank_lines():
    lines = help_text().splitlines()
    headings = [
        "Pacman operations:",
        "New operations:",
        "Options without operation:",
        "New options:",
        "show specific options:",
        "getpkgbuild specific options:",
        "Build specific options:",
    ]
    for heading in headings:
        assert lines[lines.index(heading) - 1] == ""


def test_help_lists_operations_in_order():
    text = help_text()
    positions = [text.index(f"{{-{flag} ") for flag in "hVDFQRSTUPGB"]
    assert positions == sorted(positions)


def test_help_toggle_options_present():
    text = help_text()
    for option in ("--[no]sudoloop", "--[no]chroot", "--[no]localrepo", "--[no]devel"):
        assert option in text


def test_print_help_matches_text(capsys):
    print_help()
    assert capsys.readouterr().out == help_text()