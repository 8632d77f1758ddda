# dylib_relocate/graph/__init__.py
from .graph_builder import DependencyGraphBuilder, build_dependency_graph

__all__ = [
    "DependencyGraphBuilder",
    "build_dependency_graph",
]
