"""Output directory lifecycle.

Every configured target directory is emptied before generation so that it
ends up holding exactly the files produced by the current schema. Two
strategies share one interface:

- DirectOutput: reset each existing directory up front, then write into it.
- StagedOutput: write into a sibling staging directory and swap it over the
  live directory only once the whole run succeeded.

Directories that do not exist are never created; writes aimed at them are
skipped. A target path that exists as something other than a directory is
replaced by an empty directory. Paths name the same directory when their
absolute forms are equal.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
import tempfile
from os import PathLike
from pathlib import Path
from types import TracebackType
from typing import Iterable

from .errors import OutputError

logger = logging.getLogger(__name__)

StrPath = str | PathLike[str]


def reset_directory(path: StrPath) -> bool:
    """Remove a directory with all its contents and recreate it empty.

    A regular file at ``path`` is removed and a directory created in its place.

    Returns:
        True if the directory was reset, False if nothing exists at ``path``

    Raises:
        OutputError: If the directory cannot be removed or recreated
    """
    directory = Path(path)
    if not directory.exists():
        return False
    try:
        _remove(directory)
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputError(f"Failed to reset output directory {directory}: {exc}") from exc
    logger.info("Reset output directory %s", directory)
    return True


def reset_directories(paths: Iterable[StrPath]) -> list[Path]:
    """Reset every distinct directory of ``paths``; return the ones that exist."""
    existing: list[Path] = []
    for directory in _distinct(paths):
        if reset_directory(directory):
            existing.append(directory)
    return existing


def write_file(directory: Path, filename: str, code: str) -> Path:
    path = directory / filename
    try:
        path.write_text(code, encoding="utf-8")
    except OSError as exc:
        raise OutputError(f"Failed to write {path}: {exc}") from exc
    return path


class DirectOutput:
    """Reset target directories on entry and write straight into them."""

    def __init__(self, directories: Iterable[StrPath]) -> None:
        self._directories = _distinct(directories)

    def __enter__(self) -> "DirectOutput":
        reset_directories(self._directories)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        return None

    def target(self, directory: StrPath) -> Path | None:
        """Directory to write into for ``directory``, or None when it does not exist."""
        path = Path(directory)
        return path if path.is_dir() else None


class StagedOutput:
    """Stage generated files and swap them over the live directories on success.

    On entry a hidden staging directory is created next to every existing
    target directory. On a clean exit each live directory is replaced by its
    staging directory. If the block raises, the staging directories are
    removed and the live directories are left as they were.

    A target nested inside another existing target is not staged: replacing
    the outer directory removes it, just as resetting the outer directory does.

    Example:
        >>> with StagedOutput(["src/api"]) as output:
        ...     directory = output.target("src/api")
        ...     if directory is not None:
        ...         write_file(directory, "userApi.ts", code)
    """

    def __init__(self, directories: Iterable[StrPath]) -> None:
        self._directories = _distinct(directories)
        self._staged: dict[Path, Path] = {}

    def __enter__(self) -> "StagedOutput":
        existing = {_absolute(directory): directory for directory in self._directories if directory.exists()}
        try:
            for live, directory in existing.items():
                if any(parent in existing for parent in live.parents):
                    logger.debug("Output directory %s is replaced with its parent; not staging it", directory)
                    continue
                self._staged[live] = _make_staging_dir(live)
        except OutputError:
            self._discard()
            raise
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is not None:
            self._discard()
            return None
        self._commit()
        return None

    def target(self, directory: StrPath) -> Path | None:
        """Staging directory for ``directory``, or None when it is not staged."""
        return self._staged.get(_absolute(directory))

    def _commit(self) -> None:
        pending = list(self._staged.items())
        try:
            while pending:
                live, staging = pending[0]
                _swap(live, staging)
                pending.pop(0)
                logger.info("Replaced output directory %s", live)
        finally:
            for _, staging in pending:
                shutil.rmtree(staging, ignore_errors=True)
            self._staged.clear()

    def _discard(self) -> None:
        for staging in self._staged.values():
            shutil.rmtree(staging, ignore_errors=True)
        self._staged.clear()


def _distinct(paths: Iterable[StrPath]) -> list[Path]:
    distinct: dict[Path, Path] = {}
    for path in paths:
        distinct.setdefault(_absolute(path), Path(path))
    return list(distinct.values())


def _absolute(path: StrPath) -> Path:
    return Path(os.path.abspath(path))


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def _default_mode() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return 0o777 & ~umask


def _make_staging_dir(live: Path) -> Path:
    try:
        staging = Path(tempfile.mkdtemp(prefix=f".{live.name}.", suffix=".staging", dir=live.parent))
        mode = stat.S_IMODE(live.stat().st_mode) if live.is_dir() else _default_mode()
        os.chmod(staging, mode)
    except OSError as exc:
        raise OutputError(f"Failed to stage output directory {live}: {exc}") from exc
    return staging


def _swap(live: Path, staging: Path) -> None:
    backup = staging.with_name(staging.name[: -len(".staging")] + ".old")
    try:
        os.replace(live, backup)
    except OSError as exc:
        raise OutputError(f"Failed to replace output directory {live}: {exc}") from exc
    try:
        os.replace(staging, live)
    except OSError as exc:
        os.replace(backup, live)
        raise OutputError(f"Failed to replace output directory {live}: {exc}") from exc
    try:
        _remove(backup)
    except OSError as exc:
        raise OutputError(f"Failed to remove previous contents of {live} at {backup}: {exc}") from exc
