"""
Process-wide case-sensitivity policy.

The default comes from the host platform: case-insensitive on Windows-family
systems (including MSYS and Cygwin shells), case-sensitive elsewhere. Matchers
built without an explicit policy read this flag each time they are called.
"""

from __future__ import annotations

import os
import sys

_INSENSITIVE_PLATFORMS = frozenset({"win32", "cygwin"})
_INSENSITIVE_OSTYPES = frozenset({"msys", "cygwin"})


def platform_case_insensitive(platform: str | None = None, ostype: str | None = None) -> bool:
    """
    Whether paths on this platform should compare case-insensitively.

    `platform` defaults to `sys.platform` and `ostype` to the `OSTYPE`
    environment variable (set by MSYS and Cygwin shells).
    """
    if platform is None:
        platform = sys.platform
    if ostype is None:
        ostype = os.environ.get("OSTYPE", "")
    return platform in _INSENSITIVE_PLATFORMS or ostype in _INSENSITIVE_OSTYPES


_case_insensitive: bool = platform_case_insensitive()


def set_case_insensitive(flag: bool) -> None:
    """Override the platform default for every matcher that follows the global flag."""
    global _case_insensitive
    _case_insensitive = bool(flag)


def get_case_insensitive() -> bool:
    return _case_insensitive


def reset_case_insensitive() -> None:
    """Restore the platform default."""
    set_case_insensitive(platform_case_insensitive())
