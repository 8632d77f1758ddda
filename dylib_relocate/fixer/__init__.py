# dylib_relocate/fixer/__init__.py
from .reference_fixer import ReferenceFixer

__all__ = ["ReferenceFixer"]
