# dylib_relocate/extractor/__init__.py
from .dependency_extractor import DependencyExtractor, parse_declared_paths

__all__ = [
    "DependencyExtractor",
    "parse_declared_paths",
]
