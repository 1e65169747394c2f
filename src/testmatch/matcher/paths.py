"""Path string helpers: separator normalization, absolute-path detection, POSIX join."""

from __future__ import annotations

import ntpath
import posixpath


def normalize(path: str) -> str:
    """
    Convert a path to forward-slash form. Drive letters, roots and all other
    characters are kept as-is, so `normalize(normalize(p)) == normalize(p)`.
    """
    return path.replace("\\", "/")


def is_absolute(path: str) -> bool:
    """
    True for POSIX absolute paths, drive-rooted Windows paths (`C:/x`) and UNC
    paths (`//server/share`). A drive-relative path like `C:x` is not absolute.

    Windows forms are recognized on every host, not just on Windows, so a
    Windows `cwd` resolves the same way wherever the matcher runs.
    """
    return posixpath.isabs(path) or ntpath.isabs(path)


def join(base: str, relative: str) -> str:
    """
    Join `relative` onto `base` with POSIX rules, resolving `.` and `..` against
    `base`. A trailing slash on `relative` survives the join.
    """
    joined = posixpath.normpath(posixpath.join(base, relative))
    if relative.endswith("/") and not joined.endswith("/"):
        joined += "/"
    return joined
