# dylib_relocate/resolver/path_resolver.py
import os
import stat
from typing import Set

from dylib_relocate.exceptions import CyclicLink, InvalidPathType, PathNotFound


def resolve_canonical_path(path: str) -> str:
    """
    Follows a symbolic link chain down to the regular file it names.

    Relative link targets are joined against the directory holding the link.
    A regular file is returned unchanged, so resolving an already resolved
    path is a no-op.

    Args:
        path: File system path, possibly a symlink.

    Returns:
        Path of the regular file at the end of the chain.

    Raises:
        PathNotFound: If any path on the chain is missing or unreadable.
        InvalidPathType: If the chain ends in something other than a regular file.
        CyclicLink: If the chain revisits a path.
    """
    seen: Set[str] = set()
    current = path

    while True:
        try:
            mode = os.lstat(current).st_mode
        except OSError as e:
            raise PathNotFound(f"Cannot stat '{current}': {e}") from e

        if stat.S_ISREG(mode):
            return current

        if not stat.S_ISLNK(mode):
            raise InvalidPathType(f"'{current}' is not a regular file or symlink")

        if current in seen:
            raise CyclicLink(f"Symlink cycle detected at '{current}' while resolving '{path}'")
        seen.add(current)

        try:
            link_target = os.readlink(current)
        except OSError as e:
            raise PathNotFound(f"Cannot read link '{current}': {e}") from e

        # Absolute targets replace the directory part entirely.
        current = os.path.normpath(os.path.join(os.path.dirname(current), link_target))
