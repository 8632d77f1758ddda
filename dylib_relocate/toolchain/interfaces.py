# dylib_relocate/toolchain/interfaces.py
from abc import ABC, abstractmethod


class MetadataOracle(ABC):
    @abstractmethod
    def list_references(self, binary_path: str) -> str:
        """
        Returns the raw line-oriented listing of the libraries a binary links against.
        Raises ExtractionFailed if the listing cannot be produced.
        """
        pass


class LibraryCopier(ABC):
    @abstractmethod
    def copy_tree(self, source_path: str, destination_path: str) -> None:
        """Recursively copies source over destination, overwriting. Raises CopyFailed."""
        pass


class IdentityRewriter(ABC):
    @abstractmethod
    def set_identity(self, binary_path: str, new_identity: str) -> None:
        """Overwrites the install name of a library. Raises IdentityRewriteFailed."""
        pass


class ReferenceRewriter(ABC):
    @abstractmethod
    def change_reference(self, binary_path: str, old_reference: str, new_reference: str) -> None:
        """Replaces a recorded dependency reference inside a binary. Raises ReferenceRewriteFailed."""
        pass


class BinaryToolchain(MetadataOracle, LibraryCopier, IdentityRewriter, ReferenceRewriter):
    """All four capabilities a relocation run needs, bundled behind one object."""
    pass
