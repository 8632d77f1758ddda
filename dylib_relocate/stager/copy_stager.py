# dylib_relocate/stager/copy_stager.py
import os
from pathlib import Path
from typing import Any, Dict, Optional, Set

from dylib_relocate.exceptions import CopyFailed, InvalidConfiguration
from dylib_relocate.models import DependencyGraph
from dylib_relocate.toolchain import IdentityRewriter, LibraryCopier

DEFAULT_FILE_MODE = 0o644


def parse_file_mode(value: Any) -> int:
    """
    Accepts a mode as an int (YAML reads 0644 as octal) or as a string such
    as "0o644" or "644", which is read as octal.

    Raises:
        InvalidConfiguration: If the value is not a permission mode.
    """
    if isinstance(value, bool):
        raise InvalidConfiguration(f"staging.file_mode must be a permission mode, got {value!r}")
    if isinstance(value, int):
        mode = value
    elif isinstance(value, str):
        text = value.strip()
        try:
            mode = int(text, 0) if text[:2].lower() in ("0o", "0x", "0b") else int(text, 8)
        except ValueError as e:
            raise InvalidConfiguration(f"staging.file_mode {value!r} is not a permission mode") from e
    else:
        raise InvalidConfiguration(f"staging.file_mode must be a permission mode, got {value!r}")

    if not 0 <= mode <= 0o7777:
        raise InvalidConfiguration(f"staging.file_mode {oct(mode)} is out of range")
    return mode


class CopyStager:
    def __init__(
        self,
        copier: LibraryCopier,
        identity_rewriter: IdentityRewriter,
        app_config: Optional[Dict[str, Any]] = None,
    ):
        self.copier = copier
        self.identity_rewriter = identity_rewriter
        self.app_config = app_config if app_config else {}
        staging = self.app_config.get("staging", {})
        self.file_mode = parse_file_mode(staging.get("file_mode", DEFAULT_FILE_MODE))
        self.create_target_dir = staging.get("create_target_dir", True)

    def stage(self, graph: DependencyGraph, target_dir: str) -> int:
        """
        Copies every distinct dependency into target_dir and stamps its new install name.

        Copies are always redone: a library already present from an earlier run
        is overwritten and re-stamped.

        Returns:
            Number of distinct libraries staged.

        Raises:
            CopyFailed: If a copy or the permission change fails.
            IdentityRewriteFailed: If the install name cannot be rewritten.
        """
        if self.create_target_dir:
            try:
                Path(target_dir).mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise CopyFailed(f"Could not create target directory '{target_dir}': {e}") from e

        staged: Set[str] = set()
        for edge in graph.iter_edges():
            if edge.target_path in staged:
                continue

            self.copier.copy_tree(edge.canonical_path, edge.target_path)
            try:
                os.chmod(edge.target_path, self.file_mode)
            except OSError as e:
                raise CopyFailed(f"Could not set mode {oct(self.file_mode)} on '{edge.target_path}': {e}") from e
            self.identity_rewriter.set_identity(edge.target_path, edge.fixed_path)

            print(f"Stager: {edge.canonical_path} -> {edge.target_path}")
            staged.add(edge.target_path)

        print(f"Stager: Copied {len(staged)} dylibs.")
        return len(staged)
