"""Locate the conventional configuration, data and per-user directories."""

from __future__ import annotations

import os
import sys
from enum import IntFlag

try:
    import pwd
except ImportError:  # pragma: no cover - platforms without a password database
    pwd = None  # type: ignore[assignment]

DEFAULT_PACKAGE = "hackable-console"
SYSCONF_DIR = "/etc"
DIR_MODE = 0o775
_SEPARATOR = "/"


class FnkdatFlag(IntFlag):
    CONF = 0x01
    DATA = 0x02
    VAR = 0x04
    USER = 0x08
    INIT = 0x10
    UNINIT = 0x20
    CREAT = 0x80


def _pkgdata_dir(package: str) -> str:
    return "/usr/share/" + package


def _pkglib_dir(package: str) -> str:
    if sys.platform.startswith("freebsd"):
        return "/var/games/" + package
    return "/var/lib/games/" + package


def _home_directory() -> str:
    if pwd is not None:
        try:
            return pwd.getpwuid(os.getuid()).pw_dir
        except KeyError:
            raise OSError("no password database entry for the current user") from None
    return os.path.expanduser("~")


def make_dirs(path: str) -> str:
    """Create every directory leading to ``path``.

    Anything after the last separator is taken as a file name and is not
    created. Returns the directory part; existing directories are left alone.
    """
    directory, separator, _ = path.rpartition(_SEPARATOR)

    if not separator or not directory:
        return directory

    if not os.path.exists(directory):
        os.makedirs(directory, mode=DIR_MODE)

    return directory


def fnkdat(
    target: str | None = None,
    flags: int = FnkdatFlag.USER,
    package: str = DEFAULT_PACKAGE,
) -> str:
    """Return the path of ``target`` inside the directory chosen by ``flags``.

    An absolute ``target`` is returned unchanged. ``INIT`` and ``UNINIT`` do
    nothing and return an empty string. With ``CREAT`` the directories of the
    resulting path are created. Unknown flag combinations raise ValueError.
    """
    if target and target.startswith(_SEPARATOR):
        return target

    flags = int(flags)

    if flags in (FnkdatFlag.INIT, FnkdatFlag.UNINIT):
        return ""

    raw = flags & ~FnkdatFlag.CREAT

    if raw == FnkdatFlag.USER:
        path = _home_directory() + "/." + package
    elif raw == FnkdatFlag.CONF:
        path = SYSCONF_DIR + _SEPARATOR + package
    elif raw == FnkdatFlag.VAR | FnkdatFlag.DATA:
        path = _pkglib_dir(package)
    elif raw == FnkdatFlag.DATA:
        path = _pkgdata_dir(package)
    else:
        raise ValueError(f"invalid flags 0x{flags:02x}")

    path += _SEPARATOR

    if target:
        path += target

    if flags & FnkdatFlag.CREAT:
        make_dirs(path)

    return path