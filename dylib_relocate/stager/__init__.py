# dylib_relocate/stager/__init__.py
from .copy_stager import CopyStager, DEFAULT_FILE_MODE, parse_file_mode

__all__ = [
    "CopyStager",
    "DEFAULT_FILE_MODE",
    "parse_file_mode",
]
