from abc import ABC, abstractmethod


class FileSystemPort(ABC):
    """Interface for reading and replacing source files in the watched project."""

    @abstractmethod
    def read_file(self, file_path: str) -> str:
        """Returns the file content with its line endings untouched."""
        pass

    @abstractmethod
    def write_file(self, file_path: str, content: str):
        """
        Replaces the file content in one step, so a watching dev server never
        reloads a half-written file.
        """
        pass

    @abstractmethod
    def exists(self, path: str) -> bool:
        pass
