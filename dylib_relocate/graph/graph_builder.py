# dylib_relocate/graph/graph_builder.py
from typing import Any, Dict, List, Optional

from dylib_relocate.extractor import DependencyExtractor
from dylib_relocate.models import DependencyGraph
from dylib_relocate.resolver import resolve_canonical_path


class DependencyGraphBuilder:
    """
    Walks the dependency closure of an executable depth-first.

    Nodes are keyed by canonical path, and the key set of the graph is the
    visited set: a canonical path is expanded at most once. Any resolver or
    extractor error aborts the build and no partial graph is returned.
    """

    def __init__(self, extractor: DependencyExtractor, app_config: Optional[Dict[str, Any]] = None):
        self.extractor = extractor
        self.app_config = app_config if app_config else {}
        self.verbose = self.app_config.get("general", {}).get("verbose", False)

    def build(self, root_executable_path: str) -> DependencyGraph:
        graph = DependencyGraph(root=resolve_canonical_path(root_executable_path))

        # Paths still to scan. The root is scanned as given; everything else by canonical path.
        pending: List[str] = [root_executable_path]
        while pending:
            scan_path = pending.pop()
            canonical_path = resolve_canonical_path(scan_path)
            if canonical_path in graph:
                continue

            edges = self.extractor.extract(scan_path)
            graph.record(canonical_path, edges)
            if self.verbose:
                print(f"GraphBuilder: {canonical_path} -> {len(edges)} dependencies")

            # Reversed so the first declared dependency is expanded first.
            for edge in reversed(edges):
                if edge.canonical_path not in graph:
                    pending.append(edge.canonical_path)

        return graph


def build_dependency_graph(
    root_executable_path: str,
    extractor: DependencyExtractor,
    app_config: Optional[Dict[str, Any]] = None,
) -> DependencyGraph:
    return DependencyGraphBuilder(extractor, app_config).build(root_executable_path)
