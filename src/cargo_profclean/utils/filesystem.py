"""Filesystem utilities and abstractions."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Set


class FileSystemAdapter(ABC):
    """Abstract base class for filesystem operations."""

    @abstractmethod
    def list_dir(self, directory: Path) -> List[Path]:
        """Lists the immediate entries of a directory.

        Args:
            directory (Path): The directory to list.

        Returns:
            List[Path]: The entries, files and directories alike.

        Raises:
            OSError: If the directory cannot be listed.
        """
        ...

    @abstractmethod
    def remove_file(self, path: Path) -> None:
        """Deletes a single file.

        Args:
            path (Path): The file to delete.

        Raises:
            OSError: If the file cannot be deleted.
        """
        ...


class RealFileSystem(FileSystemAdapter):
    """Real filesystem implementation of FileSystemAdapter."""

    def list_dir(self, directory: Path) -> List[Path]:
        """Lists the immediate entries of a directory."""
        return list(directory.iterdir())

    def remove_file(self, path: Path) -> None:
        """Deletes a single file."""
        path.unlink()


class InMemoryFileSystem(FileSystemAdapter):
    """In-memory filesystem implementation of FileSystemAdapter for testing purposes."""

    def __init__(self):
        """Initialises the empty in-memory filesystem."""
        self.files: dict[Path, bytes] = {}
        self.directories: Set[Path] = {Path("/")}
        self.protected: Set[Path] = set()
        self.unreadable: Set[Path] = set()

    def is_file(self, path: Path) -> bool:
        """Checks if a path is a file."""
        return path in self.files

    def list_dir(self, directory: Path) -> List[Path]:
        """Lists the immediate entries of a directory."""
        if directory in self.files:
            raise NotADirectoryError(f"Not a directory: {directory}")
        if directory not in self.directories:
            raise FileNotFoundError(f"Directory does not exist: {directory}")
        if directory in self.unreadable:
            raise PermissionError(f"Permission denied: {directory}")

        entries = [path for path in self.files if path.parent == directory]
        entries.extend(
            path
            for path in self.directories
            if path.parent == directory and path != directory
        )
        return entries

    def remove_file(self, path: Path) -> None:
        """Deletes a single file."""
        if path in self.protected:
            raise PermissionError(f"Permission denied: {path}")
        if path not in self.files:
            raise FileNotFoundError(f"File does not exist: {path}")
        del self.files[path]

    def add_file(self, path: Path, content: bytes = b"") -> None:
        """Adds a file and its parent directories to the in-memory filesystem.

        Args:
            path (Path): The file path.
            content (bytes): The content of the file.
        """
        self.files[path] = content
        self.add_directory(path.parent)

    def add_directory(self, path: Path) -> None:
        """Adds a directory and all of its parents.

        Args:
            path (Path): The directory path.
        """
        self.directories.add(path)
        self.directories.update(path.parents)

    def protect(self, path: Path) -> None:
        """Makes a file fail on deletion with PermissionError."""
        self.protected.add(path)

    def deny_listing(self, path: Path) -> None:
        """Makes a directory fail on listing with PermissionError."""
        self.unreadable.add(path)


def resolve_filesystem(fs: Optional[FileSystemAdapter] = None) -> FileSystemAdapter:
    """Returns the given adapter, or a RealFileSystem when none is given."""
    if fs is None:
        fs = RealFileSystem()
    return fs
