# dylib_relocate/extractor/dependency_extractor.py
import os
import re
from typing import Any, Dict, List, Optional

from dylib_relocate.exceptions import ExtractionFailed
from dylib_relocate.models import DependencyEdge
from dylib_relocate.resolver import resolve_canonical_path
from dylib_relocate.toolchain import MetadataOracle

# "\t/usr/local/lib/libfoo.dylib (compatibility version 1.0.0, current version 1.2.3)"
DEPENDENCY_LINE_RE = re.compile(r"^\t(.*) \(.*\)$")

DEFAULT_SYSTEM_LIBRARY_PREFIX = "/usr/lib"
DEFAULT_LIBRARY_SUFFIX = ".dylib"


def parse_declared_paths(listing: str) -> List[str]:
    """
    Pulls the declared library paths out of an otool -L style listing.

    Only tab-indented lines are dependency lines; headers and banners are skipped.

    Raises:
        ExtractionFailed: If a tab-indented line lacks the trailing parenthetical.
    """
    declared: List[str] = []
    for line in listing.splitlines():
        if not line.startswith("\t"):
            continue
        match = DEPENDENCY_LINE_RE.match(line)
        if not match:
            raise ExtractionFailed(f"Unparseable dependency line: {line.strip()!r}")
        declared.append(match.group(1))
    return declared


class DependencyExtractor:
    def __init__(
        self,
        oracle: MetadataOracle,
        target_dir: str,
        fix_base_dir: str,
        app_config: Optional[Dict[str, Any]] = None,
    ):
        self.oracle = oracle
        self.target_dir = target_dir
        self.fix_base_dir = fix_base_dir
        self.app_config = app_config if app_config else {}
        filtering = self.app_config.get("filtering", {})
        self.system_library_prefix = filtering.get("system_library_prefix", DEFAULT_SYSTEM_LIBRARY_PREFIX)
        self.library_suffix = filtering.get("library_suffix", DEFAULT_LIBRARY_SUFFIX)
        self.skip_missing_system_libraries = filtering.get("skip_missing_system_libraries", False)

    def is_bundled(self, canonical_path: str) -> bool:
        """System libraries and non-dylib references (frameworks) stay where they are."""
        return not canonical_path.startswith(self.system_library_prefix) and canonical_path.endswith(
            self.library_suffix
        )

    def _is_missing_system_library(self, declared_path: str) -> bool:
        # macOS 11+ serves system libraries from the dyld shared cache, not from disk.
        return (
            self.skip_missing_system_libraries
            and declared_path.startswith(self.system_library_prefix)
            and not os.path.lexists(declared_path)
        )

    def extract(self, binary_path: str) -> List[DependencyEdge]:
        """
        Lists the third-party libraries a binary links against, in the order
        the oracle reports them.

        Raises:
            ExtractionFailed: If the oracle fails or its output is malformed.
            PathNotFound, InvalidPathType, CyclicLink: If a declared path cannot be resolved.
        """
        listing = self.oracle.list_references(binary_path)

        edges: List[DependencyEdge] = []
        for declared_path in parse_declared_paths(listing):
            if self._is_missing_system_library(declared_path):
                continue
            canonical_path = resolve_canonical_path(declared_path)
            if not self.is_bundled(canonical_path):
                continue
            edges.append(
                DependencyEdge.from_canonical(declared_path, canonical_path, self.target_dir, self.fix_base_dir)
            )
        return edges
