# dylib_relocate/models/__init__.py
from .dependency import DependencyEdge, DependencyGraph, RelocationSummary

__all__ = [
    "DependencyEdge",
    "DependencyGraph",
    "RelocationSummary",
]
