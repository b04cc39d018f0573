"""File system access for the scanner and the local module catalog."""
import fnmatch
import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, Set, Union

logger = logging.getLogger('genenv.file_system')

# Encodings tried in order when reading source files
ENCODINGS = ('utf-8', 'latin-1')


def should_ignore_path(rel_path: Union[str, Path], ignore_patterns: Iterable[str]) -> bool:
    """Check if any component of a relative path matches an ignore pattern.

    Hidden components (``.git``, ``.venv``, ``.hidden.py``) are always ignored.
    """
    parts = [part for part in Path(rel_path).parts if part not in ('', '.')]
    for part in parts:
        if part.startswith('.'):
            return True
        if any(fnmatch.fnmatch(part, pattern) for pattern in ignore_patterns):
            return True
    return False


class FileSystemInterface:
    """Interface for file system operations."""

    def read_file(self, path: Path) -> str:
        """Read a file's contents.

        Args:
            path: Path to the file to read

        Returns:
            The file's contents as a string

        Raises:
            OSError: If the file cannot be read
        """
        raise NotImplementedError

    def find_python_files(self, directory: Path, ignore_patterns: Optional[Iterable[str]] = None) -> List[Path]:
        """Find all Python files below a directory.

        Args:
            directory: Directory to search in
            ignore_patterns: Glob patterns matched against each path component

        Returns:
            Sorted list of paths to Python files
        """
        raise NotImplementedError


class DefaultFileSystem(FileSystemInterface):
    """Default implementation of file system operations."""

    def read_file(self, path: Path) -> str:
        path = Path(str(path))
        raw = path.read_bytes()
        for encoding in ENCODINGS:
            try:
                return raw.decode(encoding)
            except UnicodeDecodeError:
                continue
        raise OSError(f"Could not read file {path} with any supported encoding")

    def find_python_files(self, directory: Path, ignore_patterns: Optional[Iterable[str]] = None) -> List[Path]:
        directory = Path(str(directory))
        if not directory.is_dir():
            return []

        patterns: Set[str] = set(ignore_patterns or ())
        python_files = []

        for root, dirs, files in os.walk(directory):
            root_path = Path(root)
            rel_root = root_path.relative_to(directory)

            # Prune ignored directories so os.walk never descends into them
            kept = []
            for name in dirs:
                if should_ignore_path(rel_root / name, patterns):
                    logger.debug(f"Skipping ignored directory: {rel_root / name}")
                else:
                    kept.append(name)
            dirs[:] = kept

            for name in files:
                if not name.endswith('.py'):
                    continue
                if should_ignore_path(rel_root / name, patterns):
                    logger.debug(f"Skipping ignored file: {rel_root / name}")
                    continue
                python_files.append(root_path / name)

        return sorted(python_files)
