# dylib_relocate/__init__.py
from .exceptions import (
    RelocationError,
    PathNotFound,
    InvalidPathType,
    CyclicLink,
    InvalidConfiguration,
    ExtractionFailed,
    CopyFailed,
    IdentityRewriteFailed,
    ReferenceRewriteFailed,
)
from .relocator import relocate_executable

__all__ = [
    "RelocationError",
    "PathNotFound",
    "InvalidPathType",
    "CyclicLink",
    "InvalidConfiguration",
    "ExtractionFailed",
    "CopyFailed",
    "IdentityRewriteFailed",
    "ReferenceRewriteFailed",
    "relocate_executable",
]
