"""Local module catalog.

Collects the names of modules and packages that belong to the project so the
resolver never mistakes them for installable distributions. The catalog is a
heuristic: a local module sharing its name with an unrelated distribution
hides that distribution.
"""
import logging
from pathlib import Path
from typing import FrozenSet, Iterable, List, Optional, Set, Union

from .file_system import DefaultFileSystem, FileSystemInterface

logger = logging.getLogger('genenv.catalog')

INIT_FILE = '__init__.py'


class LocalModuleCatalog:
    """Names of project-internal modules and packages."""

    def __init__(
        self,
        root: Union[str, Path],
        fs: Optional[FileSystemInterface] = None,
        ignore_patterns: Iterable[str] = (),
        skip_files: Iterable[str] = ()
    ):
        self.root = Path(root)
        self.fs = fs or DefaultFileSystem()
        self.ignore_patterns = set(ignore_patterns)
        self.skip_files = set(skip_files)
        self._files: Optional[List[Path]] = None

    @property
    def files(self) -> List[Path]:
        """Project source files, relative to the root."""
        if self._files is None:
            found = self.fs.find_python_files(self.root, self.ignore_patterns)
            self._files = [
                self._relative(path) for path in found
                if path.name not in self.skip_files
            ]
        return self._files

    def _relative(self, path: Path) -> Path:
        try:
            return path.relative_to(self.root)
        except ValueError:
            return path

    def module_names(self) -> Set[str]:
        """Base name of every source file except package init files."""
        return {path.stem for path in self.files if path.name != INIT_FILE}

    def package_names(self) -> Set[str]:
        """Directories holding an init file, plus their package ancestors.

        From each init file the walk goes upward while the parent directory
        has its own init file, stopping at the project root.
        """
        init_dirs = {path.parent for path in self.files if path.name == INIT_FILE}
        names = set()

        for package_dir in init_dirs:
            current = package_dir
            while current != Path('.') and current in init_dirs:
                names.add(current.name)
                current = current.parent

        return names

    def namespace_package_names(self) -> Set[str]:
        """Directories that contain source files at any depth.

        Covers implicit namespace packages, which have no init file. Hidden
        and dunder directories never count, nor anything below them.
        """
        names = set()
        for path in self.files:
            for parent in path.parents:
                if parent == Path('.'):
                    break
                if any(part.startswith(('.', '__')) for part in parent.parts):
                    continue
                names.add(parent.name)
        return names

    def build(self) -> FrozenSet[str]:
        """Build the complete local module set."""
        local_modules = frozenset(
            self.module_names() | self.package_names() | self.namespace_package_names()
        )
        logger.debug(f"Detected local modules/packages: {', '.join(sorted(local_modules))}")
        return local_modules
