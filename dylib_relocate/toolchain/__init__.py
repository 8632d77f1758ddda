# dylib_relocate/toolchain/__init__.py
from .interfaces import (
    BinaryToolchain,
    IdentityRewriter,
    LibraryCopier,
    MetadataOracle,
    ReferenceRewriter,
)
from .macho_toolchain import MachOToolchain

__all__ = [
    "BinaryToolchain",
    "IdentityRewriter",
    "LibraryCopier",
    "MetadataOracle",
    "ReferenceRewriter",
    "MachOToolchain",
]
