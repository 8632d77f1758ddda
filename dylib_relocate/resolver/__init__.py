# dylib_relocate/resolver/__init__.py
from .path_resolver import resolve_canonical_path

__all__ = ["resolve_canonical_path"]
