# aurhelper

Building blocks for an AUR helper on Arch Linux. The package runs the
external tools such a helper drives (`pacman`, `makepkg`, `sudo`, a pager,
a file manager, `bat`) and formats what it shows the user: install
summaries, `-Si` style package information and conflict reports.

## Installation

```
pip install aurhelper
```

To run the tests, install the `test` extra and run pytest:

```
pip install "aurhelper[test]"
pytest
```

## Modules

### `aurhelper.exec`

Runs commands given as argument lists.

- `command_status(cmd, cwd=None, env=None)` runs a command and returns a
  `Status`. If a child is killed by a signal, the status is 1. `env` adds
  variables to the current environment. If SIGTERM, SIGINT or SIGQUIT
  arrives while the child runs, the process exits with 128 plus the signal
  number once the child has finished.
- `command` raises `CommandError` unless the command succeeds.
  `command_output` captures stdout and stderr. If the command fails, it
  raises `CommandError` with the stderr text.
- `Status` is an exception that carries `code`. `Status.success()` returns
  0, or raises the status when the code is not zero.
- `ExecSettings` holds how pacman and makepkg are invoked: `need_root`,
  `sudo_bin`, `sudo_flags`, `pacman_conf`, `makepkg_bin`, `makepkg_conf`,
  `mflags` and `dbpath`.
- `pacman_command` and `makepkg_command` build the command lines.
  `pacman` and `pacman_output` run pacman through sudo when `need_root` is
  set. In that case they first call `wait_for_lock`, which blocks while
  `db.lck` exists under `dbpath`. `makepkg` and `makepkg_output` run in a
  directory and can set `PKGDEST`.
- `update_sudo` refreshes the sudo timestamp. `spawn_sudo` does the same,
  then starts a daemon thread that refreshes it every 250 seconds. It
  returns that thread.

### `aurhelper.pkglist`

- `parse_package_list(output)` parses `makepkg --packagelist` output. It
  returns a mapping of package name to file path, together with the
  `pkgver-pkgrel` of the last line. A line with fewer than four
  dash-separated parts raises `ValueError`.
- `debug_packages(pkgdest, pkgnames)` finds built `<name>-debug` packages
  whose files exist.
- `all_built(pkgnames, pkgdest)` checks whether every package file exists.
- `is_debug(name, base)` tells whether a package is the debug split of its
  base.
- `trim_dep_ver(dep, trim)` and `is_ver_char(char)` remove version
  constraints from dependency strings.

### `aurhelper.fmt`

- `Style` is a terminal style. `Style.paint(text)` wraps text in escape
  codes. `Style.fixed(color, bold=False)` uses one of the 256 fixed colours.
  `Colors` groups the styles for fields, errors, warnings, actions, bold
  text and versions.
- `format_indent` and `print_indent` wrap a list of words at a column
  width and indent the continuation lines. Escape sequences do not count
  towards the width (`word_len`).
- `color_repo` colours a repository name by a hash of the name.
  `print_target` prints `repo/name`, or only `name` when quiet.
- `opt`, `date` and `ymd` format optional values and Unix timestamps.
- An `InstallPlan` holds `RepoInstall` entries and `BuildBase` entries,
  each made of `BuildPackage`s. `format_install` and `print_install`
  give the short summary. `format_install_verbose` and
  `print_install_verbose` give a table of old and new versions, and fall
  back to the short form when the table does not fit in `cols`. Packages
  named in `devel` are shown as `latest-commit`.

### `aurhelper.help`

`help_text()` returns the usage text and `print_help()` prints it.

### `aurhelper.info`

- `AurPackage` holds the fields the AUR reports about a package.
  `ArchVec` is a list of values for one architecture.
- `format_aur_info` renders one package as aligned `key : value` lines.
  `print_aur_info` prints several packages, wrapped to the terminal width
  (`get_terminal_width`).
- `format_field`, `format_list` and `format_arch_list` render single
  fields.
- `longest` and `arch_len` compute the indent for the field names.

### `aurhelper.conflicts`

- `format_missing` builds the "could not find all required packages"
  message from `Missing` entries and their `DepMissing` chains
  (`fmt_stack`).
- `check_duplicates` raises `ResolveError` if any package appears twice.
- `format_conflicts` renders `Conflict`/`Conflicting` entries.
  `check_conflicts` writes the conflict report to stderr and returns the
  conflicting package names. It raises `ResolveError` when there are
  conflicts, `use_ask` is off and `no_confirm` is on.

### `aurhelper.review`

- `choose_pager` picks the pager in this order: the configured one,
  `$AURHELPER_PAGER`, `$PAGER`, then `less` or `cat`.
- `run_pager` pipes text through the pager via `sh -c`. It sets
  `LESS=SRXF` unless `LESS` is already set.
- `format_diff` indents a package's diff under its name.
- `render_dir` renders the files of a PKGBUILD directory, optionally
  through `bat`. It skips `.git` and `.SRCINFO`, and marks binary files as
  such.
- `run_file_manager` opens a directory in a file manager. It raises
  `CommandError` if the file manager fails.

## Example

```python
from aurhelper.fmt import BuildBase, BuildPackage, InstallPlan, RepoInstall, print_install

plan = InstallPlan(
    install=[RepoInstall(name="git", version="2.47.0-1", db="extra")],
    build=[
        BuildBase(
            package_base="yay-bin",
            version="12.4.2-1",
            packages=[BuildPackage(name="yay-bin")],
        )
    ],
)
print_install(plan, devel=set(), cols=80)
```

## What this package does not do

This is a library, not a finished AUR helper:

- It installs no command.
- It does not query the AUR or resolve dependencies. Callers supply the
  `InstallPlan`, `AurPackage`, `Missing` and `Conflict` data themselves.
- It does not drive a whole build-and-install run, check PGP keys, sign
  packages or keep a local repository.