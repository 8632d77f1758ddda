# dylib_relocate/fixer/reference_fixer.py
import os
from typing import Any, Dict, Optional, Set

from dylib_relocate.models import DependencyGraph
from dylib_relocate.toolchain import ReferenceRewriter


class ReferenceFixer:
    def __init__(self, rewriter: ReferenceRewriter, app_config: Optional[Dict[str, Any]] = None):
        self.rewriter = rewriter
        self.app_config = app_config if app_config else {}
        self.verbose = self.app_config.get("general", {}).get("verbose", False)

    def rewrite_target_for(self, canonical_path: str, root_canonical_path: str, target_dir: str) -> str:
        # The executable is patched where it lives; libraries are patched in their staged copy.
        if canonical_path == root_canonical_path:
            return canonical_path
        return os.path.join(target_dir, os.path.basename(canonical_path))

    def fix(self, graph: DependencyGraph, root_canonical_path: str, target_dir: str) -> int:
        """
        Points every recorded dependency reference at its staged install name.

        Returns:
            Number of binaries whose references were rewritten.

        Raises:
            ReferenceRewriteFailed: On the first rewrite that fails.
        """
        fixed: Set[str] = set()
        for canonical_path, edges in graph.entries.items():
            rewrite_target = self.rewrite_target_for(canonical_path, root_canonical_path, target_dir)
            if rewrite_target in fixed:
                continue

            print(f"Fixer: --> {rewrite_target}")
            for edge in edges:
                if self.verbose:
                    print(f"Fixer:     {edge.declared_path} => {edge.fixed_path}")
                self.rewriter.change_reference(rewrite_target, edge.declared_path, edge.fixed_path)
            fixed.add(rewrite_target)

        print(f"Fixer: Fixed {len(fixed)} dylibs.")
        return len(fixed)
