"""Building blocks for an AUR helper: running pacman and makepkg, package lists, formatting, info, conflicts and review."""

__version__ = "2.0.4"