"""Copying files and directory trees, with failures reported to a logger."""

from __future__ import annotations

import errno
import os
import shutil
import stat
from contextlib import contextmanager
from typing import Iterator, Union

from .log import Logger

PathLike = Union[str, "os.PathLike[str]"]


@contextmanager
def _logged(logger: Logger, action: str) -> Iterator[None]:
    """Log any OSError raised in the block at debug level, then re-raise it."""
    try:
        yield
    except OSError as exc:
        logger.debug(f"error {action}: {exc}")
        raise


def copy_file(source_path: PathLike, destination_path: PathLike, logger: Logger) -> None:
    """Copy one file, syncing it to disk and copying its permission bits."""
    with _logged(logger, "opening source file"):
        source = open(source_path, "rb")
    with source:
        with _logged(logger, "opening destination file"):
            destination = open(destination_path, "wb")
        with destination:
            with _logged(logger, "copying file"):
                shutil.copyfileobj(source, destination)
            with _logged(logger, "syncing destination file"):
                destination.flush()
                os.fsync(destination.fileno())
    with _logged(logger, "getting source file info"):
        info = os.stat(source_path)
    with _logged(logger, "getting setting destination file permissions"):
        os.chmod(destination_path, stat.S_IMODE(info.st_mode))


def copy_dir(
    source_dir: PathLike,
    destination_dir: PathLike,
    overwrite: bool,
    logger: Logger,
) -> None:
    """Recursively copy a directory; symlinked files are skipped.

    Without ``overwrite`` the destination must not exist yet and is created
    with the source directory's permissions. With ``overwrite`` the
    destination directory is expected to exist already.
    """
    source_dir = os.path.normpath(os.fspath(source_dir))
    destination_dir = os.path.normpath(os.fspath(destination_dir))

    with _logged(logger, "getting source directory info"):
        source_info = os.stat(source_dir)

    if not stat.S_ISDIR(source_info.st_mode):
        message = "source is not a directory"
        logger.debug(message)
        raise NotADirectoryError(message)

    try:
        os.stat(destination_dir)
        destination_exists = True
    except FileNotFoundError:
        destination_exists = False
    except OSError as exc:
        logger.debug(f"error getting destination file info: {exc}")
        raise

    if not overwrite:
        if destination_exists:
            message = "destination already exists"
            logger.debug(message)
            raise FileExistsError(message)
        with _logged(logger, "creating destination directory"):
            maybe_create_destination_dir(
                destination_dir, source_info.st_mode, err_on_exists=True
            )

    with _logged(logger, "reading source directory entries"):
        with os.scandir(source_dir) as scan:
            entries = sorted(scan, key=lambda entry: entry.name)

    for entry in entries:
        source_path = os.path.join(source_dir, entry.name)
        destination_path = os.path.join(destination_dir, entry.name)
        if entry.is_dir(follow_symlinks=False):
            copy_dir(source_path, destination_path, overwrite, logger)
        elif entry.is_symlink():
            continue
        else:
            copy_file(source_path, destination_path, logger)


def maybe_create_destination_dir(
    path: PathLike, mode: int = 0o755, err_on_exists: bool = False
) -> None:
    """Create ``path`` and its parents if missing.

    Raises FileExistsError if the path exists and ``err_on_exists`` is set.
    """
    try:
        os.stat(path)
    except FileNotFoundError:
        os.makedirs(path, stat.S_IMODE(mode))
        return
    except OSError:
        return
    if err_on_exists:
        raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), os.fspath(path))