import pytest

from aurhelper.pkglist import (
    all_built,
    debug_packages,
    is_debug,
    is_ver_char,
    parse_package_list,
    trim_dep_ver,
)


@pytest.mark.parametrize("char,expected", [("<", True), ("=", True), (">", True), ("a", False), ("-", False)])
def test_is_ver_char(char, expected):
    assert is_ver_char(char) is expected


def test_trim_dep_ver():
    assert trim_dep_ver("foo>=1.0", True) == "foo"
    assert trim_dep_ver("foo>=1.0", False) == "foo>=1.0"
    assert trim_dep_ver("bar", True) == "bar"


def test_parse_package_list():
    output = (
        "/build/foo-bar-1.2-3-x86_64.pkg.tar.zst\n"
        "/build/foo-bar-debug-1.2-3-x86_64.pkg.tar.zst\n"
    )
    pkgdests, version = parse_package_list(output)
    assert pkgdests == {
        "foo-bar": "/build/foo-bar-1.2-3-x86_64.pkg.tar.zst",
        "foo-bar-debug": "/build/foo-bar-debug-1.2-3-x86_64.pkg.tar.zst",
    }
    assert version == "1.2-3"


def test_parse_package_list_empty():
    assert parse_package_list("  \n") == ({}, "")


def test_parse_package_list_bad_line():
    with pytest.raises(ValueError, match="can't find package name in packagelist"):
        parse_package_list("/build/foo-1.0.pkg\n")


def test_is_debug():
    assert is_debug("foo-debug", "foo")
    assert not is_debug("foo-debug", "bar")
    assert not is_debug("foo", "foo")
    assert not is_debug("foo-debug", None)


def test_debug_packages_only_existing(tmp_path):
    present = tmp_path / "foo-debug-1-1-any.pkg.tar.zst"
    present.write_text("")
    missing = tmp_path / "bar-debug-1-1-any.pkg.tar.zst"
    pkgdest = {
        "foo": str(tmp_path / "foo-1-1-any.pkg.tar.zst"),
        "foo-debug": str(present),
        "bar-debug": str(missing),
    }
    assert debug_packages(pkgdest, ["foo", "bar"]) == {"foo-debug": str(present)}


def test_all_built(tmp_path):
    built = tmp_path / "a.pkg"
    built.write_text("")
    pkgdest = {"a": str(built), "b": str(tmp_path / "b.pkg")}
    assert all_built(["a"], pkgdest) is True
    assert all_built(["a", "b"], pkgdest) is False
    with pytest.raises(KeyError):
        all_built(["c"], pkgdest)