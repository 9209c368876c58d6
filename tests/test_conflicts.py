import pytest

from aurhelper.conflicts import (
    Conflict,
    Conflicting,
    DepMissing,
    Missing,
    ResolveError,
    check_conflicts,
    check_duplicates,
    fmt_stack,
    format_conflicts,
    format_missing,
)


def test_fmt_stack_with_dep():
    assert fmt_stack(DepMissing("foo", "bar>=1")) == "foo (bar>=1)"


def test_fmt_stack_without_dep():
    assert fmt_stack(DepMissing("foo")) == "foo"


def test_format_missing_target():
    text = format_missing([Missing("ghost")])
    assert text == "could not find all required packages:\n    ghost (target)"


def test_format_missing_stack():
    missing = Missing("libx", [DepMissing("app", "mid"), DepMissing("mid", "libx")])
    text = format_missing([missing])
    assert text.splitlines()[1] == "    libx (wanted by: app (mid) -> mid (libx))"


def test_format_missing_empty():
    assert format_missing([]) == ""


def test_check_duplicates_raises():
    with pytest.raises(ResolveError, match="duplicate packages: a b"):
        check_duplicates(["a", "b"])


def test_check_duplicates_empty_returns_none():
    assert check_duplicates([]) is None


def test_format_conflicts_lists_entries():
    conflicts = [Conflict("foo", [Conflicting("bar", "bar<2"), Conflicting("baz")])]
    text = format_conflicts("Conflicts found:", conflicts)
    lines = text.split("\n")
    assert lines[0] == ":: Conflicts found:"
    assert lines[1] == "    foo: bar (bar<2)  baz  "
    assert text.endswith("\n\n")


def test_check_conflicts_returns_names(capsys):
    names = check_conflicts(
        [Conflict("a", [Conflicting("b")])],
        [Conflict("c", [Conflicting("d")])],
        use_ask=True,
    )
    err = capsys.readouterr().err
    assert names == {"a", "c"}
    assert "Inner conflicts found:" in err
    assert "Conflicts found:" in err
    assert "confirmed manually" not in err


def test_check_conflicts_warns_without_ask(capsys):
    check_conflicts([Conflict("a", [Conflicting("b")])], [])
    assert "Conflicting packages will have to be confirmed manually" in capsys.readouterr().err


def test_check_conflicts_noconfirm_raises(capsys):
    with pytest.raises(ResolveError, match="--noconfirm"):
        check_conflicts([], [Conflict("a", [Conflicting("b")])], no_confirm=True)


def test_check_conflicts_noconfirm_with_ask_allowed(capsys):
    names = check_conflicts(
        [Conflict("a", [Conflicting("b")])], [], use_ask=True, no_confirm=True
    )
    assert names == {"a"}


def test_check_conflicts_none_prints_nothing(capsys):
    assert check_conflicts([], [], no_confirm=True) == set()
    assert capsys.readouterr().err == ""