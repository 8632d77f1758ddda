# dylib_relocate/models/dependency.py
import os
from typing import Dict, Iterator, List, Optional, Set

from pydantic import BaseModel, ConfigDict, Field


class DependencyEdge(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    declared_path: str = Field(description="Reference string exactly as recorded in the consumer binary.")
    canonical_path: str = Field(description="Symlink-resolved path of the dependency; the graph node key.")
    target_path: str = Field(description="Where the dependency is staged inside the target directory.")
    fixed_path: str = Field(description="New install name stamped into the copy and into its consumers.")

    @classmethod
    def from_canonical(
        cls,
        declared_path: str,
        canonical_path: str,
        target_dir: str,
        fix_base_dir: str,
    ) -> "DependencyEdge":
        """
        Builds an edge, deriving the staged location and new install name.

        fix_base_dir is concatenated as-is (it is expected to end with a
        separator, e.g. "@rpath/"), while target_dir is path-joined.
        """
        base_name = os.path.basename(canonical_path)
        return cls(
            declared_path=declared_path,
            canonical_path=canonical_path,
            target_path=os.path.join(target_dir, base_name),
            fixed_path=fix_base_dir + base_name,
        )


class DependencyGraph(BaseModel):
    """Canonical binary path -> its direct dependency edges, in discovery order."""

    model_config = ConfigDict(extra="forbid")

    root: Optional[str] = Field(default=None, description="Canonical path of the root executable.")
    entries: Dict[str, List[DependencyEdge]] = Field(default_factory=dict)

    def record(self, canonical_path: str, edges: List[DependencyEdge]) -> None:
        self.entries[canonical_path] = list(edges)

    def __contains__(self, canonical_path: object) -> bool:
        return canonical_path in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def iter_edges(self) -> Iterator[DependencyEdge]:
        for edges in self.entries.values():
            yield from edges

    def dangling_targets(self) -> Set[str]:
        """Edge targets that never became keys. Empty for a fully built graph."""
        return {edge.canonical_path for edge in self.iter_edges() if edge.canonical_path not in self.entries}


class RelocationSummary(BaseModel):
    root: str
    dependencies_found: int = 0
    libraries_copied: int = 0
    libraries_fixed: int = 0
