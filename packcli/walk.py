"""A directory walk that follows symbolic links to directories."""

from __future__ import annotations

import os
import stat
from typing import Callable, Optional

WalkFn = Callable[[str, Optional[os.stat_result], Optional[OSError]], None]


class SkipDir(Exception):
    """Raised by a walk function to skip the current directory.

    Raised for a file, it skips the remaining entries of that file's directory.
    """


def walk(root: str, walk_fn: WalkFn) -> None:
    """Walk ``root`` in lexical order, calling ``walk_fn(path, info, error)``.

    ``info`` is the lstat result (the target's for symlinks) or None, and
    ``error`` is the OSError met for that path, if any. Exceptions raised by
    ``walk_fn`` stop the walk, except SkipDir.
    """
    root = os.fspath(root)
    try:
        info = os.lstat(root)
    except OSError as exc:
        try:
            walk_fn(root, None, exc)
        except SkipDir:
            pass
        return
    try:
        _symwalk(root, info, walk_fn)
    except SkipDir:
        pass


def _symwalk(path: str, info: os.stat_result, walk_fn: WalkFn) -> None:
    if is_symlink(info):
        try:
            resolved = os.path.realpath(path, strict=True)
        except OSError as exc:
            raise OSError(f"error evaluating symlink: {exc}") from exc
        resolved_info = os.lstat(resolved)
        try:
            _symwalk(path, resolved_info, walk_fn)
        except SkipDir:
            pass
        return

    walk_fn(path, info, None)

    if not stat.S_ISDIR(info.st_mode):
        return

    try:
        names = read_dir_names(path)
    except OSError as exc:
        walk_fn(path, info, exc)
        return

    for name in names:
        filename = os.path.join(path, name)
        try:
            file_info = os.lstat(filename)
        except OSError as exc:
            try:
                walk_fn(filename, None, exc)
            except SkipDir:
                pass
            continue
        try:
            _symwalk(filename, file_info, walk_fn)
        except SkipDir:
            if not stat.S_ISDIR(file_info.st_mode) and not is_symlink(file_info):
                raise


def read_dir_names(dirname: str) -> list[str]:
    """Return the entry names of ``dirname`` in sorted order."""
    return sorted(os.listdir(dirname))


def is_symlink(info: os.stat_result) -> bool:
    """Report whether a stat result describes a symbolic link."""
    return stat.S_ISLNK(info.st_mode)