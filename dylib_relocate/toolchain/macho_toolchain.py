# dylib_relocate/toolchain/macho_toolchain.py
import subprocess
from typing import Any, Dict, List, Optional, Type

from dylib_relocate.exceptions import (
    CopyFailed,
    ExtractionFailed,
    IdentityRewriteFailed,
    ReferenceRewriteFailed,
    ToolFailure,
)
from .interfaces import BinaryToolchain


class MachOToolchain(BinaryToolchain):
    """
    Drives the macOS binary tools: otool for listing load commands,
    install_name_tool for rewriting them and cp for staging copies.
    """

    def __init__(self, app_config: Optional[Dict[str, Any]] = None):
        self.app_config = app_config if app_config else {}
        tools = self.app_config.get("tools", {})
        self.verbose = self.app_config.get("general", {}).get("verbose", False)
        self.otool_path = tools.get("otool_path", "otool")
        self.install_name_tool_path = tools.get("install_name_tool_path", "install_name_tool")
        self.cp_path = tools.get("cp_path", "cp")

    def _run(self, command: List[str], error_cls: Type[ToolFailure], action: str) -> str:
        if self.verbose:
            print(f"MachOToolchain: Running: {' '.join(command)}")
        try:
            result = subprocess.run(command, capture_output=True, text=True, check=False)
        except OSError as e:
            # Missing executable or no permission to start it.
            raise error_cls(f"Could not start '{command[0]}' to {action}: {e}", command=command) from e

        if result.returncode != 0:
            raise error_cls(
                f"'{command[0]}' failed to {action}",
                command=command,
                returncode=result.returncode,
                stderr=result.stderr,
            )
        return result.stdout

    def list_references(self, binary_path: str) -> str:
        return self._run(
            [self.otool_path, "-L", binary_path],
            ExtractionFailed,
            f"list libraries of '{binary_path}'",
        )

    def copy_tree(self, source_path: str, destination_path: str) -> None:
        self._run(
            [self.cp_path, "-rf", source_path, destination_path],
            CopyFailed,
            f"copy '{source_path}' to '{destination_path}'",
        )

    def set_identity(self, binary_path: str, new_identity: str) -> None:
        self._run(
            [self.install_name_tool_path, "-id", new_identity, binary_path],
            IdentityRewriteFailed,
            f"set install name of '{binary_path}'",
        )

    def change_reference(self, binary_path: str, old_reference: str, new_reference: str) -> None:
        self._run(
            [self.install_name_tool_path, "-change", old_reference, new_reference, binary_path],
            ReferenceRewriteFailed,
            f"change '{old_reference}' in '{binary_path}'",
        )
