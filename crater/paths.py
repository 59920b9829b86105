"""Path normalisation and disk usage of the filesystem holding a directory."""

from __future__ import annotations

import logging
import ntpath
import os
import shutil
from dataclasses import dataclass
from pathlib import Path

_log = logging.getLogger(__name__)

_VERBATIM = "\\\\?\\"
# A conservative path limit on Windows, leaving room for files inside directories.
_MAX_PATH_LEN = 260 - 12


def _split_verbatim(text: str) -> tuple[str, str] | None:
    """Split an extended-length path into its plain prefix and the remainder."""
    if not text.startswith(_VERBATIM):
        return None
    rest = text[len(_VERBATIM):]

    if rest.startswith("UNC\\"):
        server, _, after = rest[4:].partition("\\")
        share, sep, remainder = after.partition("\\")
        return f"\\\\{server}\\{share}", sep + remainder

    if len(rest) >= 2 and rest[1] == ":" and rest[0].isascii() and rest[0].isalpha():
        return f"{rest[0]}:\\", rest[2:]

    name, sep, remainder = rest.partition("\\")
    return name, sep + remainder


def strip_verbatim_prefix(path: str | os.PathLike[str]) -> str | None:
    """Return the prefix of an extended-length (``\\\\?\\``) path without that syntax.

    Returns None when the path does not use the extended-length syntax.
    """
    split = _split_verbatim(os.fspath(path))
    return None if split is None else split[0]


def normalize_path(path: str | os.PathLike[str]) -> Path:
    """Canonicalise a path, keeping it as given when it cannot be resolved."""
    given = Path(path)
    try:
        resolved = given.resolve(strict=True)
    except (OSError, RuntimeError):
        resolved = given

    if os.name == "nt":
        split = _split_verbatim(str(resolved))
        if split is not None:
            prefix, remainder = split
            resolved = Path(ntpath.join(prefix, remainder.lstrip("\\")))
        if len(str(resolved)) >= _MAX_PATH_LEN:
            _log.warning("Canonicalized path is too long for Windows: %s", resolved)

    return resolved


def current_mount(path: str | os.PathLike[str]) -> Path:
    """Return the mount point of the filesystem that holds ``path``."""
    normalized = normalize_path(path)
    for candidate in (normalized, *normalized.parents):
        if os.path.ismount(candidate):
            return candidate
    raise RuntimeError("failed to find the current mount")


@dataclass(frozen=True)
class DiskUsage:
    """Fraction of a filesystem that is in use."""

    mount_point: str
    usage: float

    @classmethod
    def fetch(cls, work_dir: str | os.PathLike[str]) -> DiskUsage:
        """Measure the filesystem holding ``work_dir``."""
        mount = current_mount(work_dir)
        stats = shutil.disk_usage(mount)
        return cls(str(mount), (stats.total - stats.free) / stats.total)

    def is_threshold_reached(self, threshold: float) -> bool:
        """Tell whether usage is at or above ``threshold`` (a fraction), logging it."""
        percent = int(self.usage * 100)
        if self.usage < threshold:
            _log.info("%s disk usage at %d%%", self.mount_point, percent)
            return False
        _log.warning(
            "%s disk usage at %d%%, which is over the threshold of %d%%",
            self.mount_point,
            percent,
            int(threshold * 100),
        )
        return True