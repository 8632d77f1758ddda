# dylib_relocate/exceptions.py
from typing import Optional, Sequence


class RelocationError(Exception):
    """Base class for every failure that aborts a relocation run."""
    pass


class PathNotFound(RelocationError):
    """Raised when a path does not exist or cannot be inspected."""
    pass


class InvalidPathType(RelocationError):
    """Raised when a path is neither a regular file nor a symbolic link."""
    pass


class CyclicLink(RelocationError):
    """Raised when following a symbolic link chain revisits a path."""
    pass


class InvalidConfiguration(RelocationError):
    """Raised when a configuration value cannot be used."""
    pass


class ToolFailure(RelocationError):
    """
    Base for failures of an external tool invocation.

    Keeps the command line, exit status and stderr so the CLI can report them.
    """

    def __init__(
        self,
        message: str,
        command: Optional[Sequence[str]] = None,
        returncode: Optional[int] = None,
        stderr: Optional[str] = None,
    ):
        self.command = list(command) if command else []
        self.returncode = returncode
        self.stderr = stderr
        details = message
        if returncode is not None:
            details += f" (exit code {returncode})"
        if stderr:
            details += f": {stderr.strip()}"
        super().__init__(details)


class ExtractionFailed(ToolFailure):
    pass


class CopyFailed(ToolFailure):
    pass


class IdentityRewriteFailed(ToolFailure):
    pass


class ReferenceRewriteFailed(ToolFailure):
    pass
