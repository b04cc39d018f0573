"""Static import scanner.

Parses every project source file and collects the top-level identifiers it
imports. Relative imports are dropped since they always point inside the
project. Files that cannot be read or parsed are reported to the error
handler and contribute nothing; the scan always runs to completion.
"""
import ast
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Set, Tuple, Union

from .error_handling import ErrorHandler
from .file_system import DefaultFileSystem, FileSystemInterface
from .genenv_types import DetectionError, ImportInfo, ScanResult
from .import_visitor import ImportVisitor

logger = logging.getLogger('genenv.scanner')


def parse_imports(content: str) -> List[ImportInfo]:
    """Collect every import statement of a source text.

    Raises:
        SyntaxError: If the code cannot be parsed
        ValueError: If the source contains null bytes
    """
    tree = ast.parse(content)
    visitor = ImportVisitor()
    visitor.visit(tree)
    return visitor.imports


def import_roots(imports: Iterable[ImportInfo]) -> Set[str]:
    """Leading segment of every absolute import."""
    return {info.root for info in imports if not info.is_relative and info.root}


def extract_imports(content: str) -> Set[str]:
    """Extract top-level imported identifiers from Python source.

    Malformed source yields an empty set.
    """
    try:
        imports = parse_imports(content)
    except (SyntaxError, ValueError):
        return set()
    return import_roots(imports)


class ImportScanner:
    """Walks a project tree and extracts imports from each source file."""

    def __init__(
        self,
        fs: Optional[FileSystemInterface] = None,
        ignore_patterns: Iterable[str] = (),
        skip_files: Iterable[str] = (),
        error_handler: Optional[ErrorHandler] = None
    ):
        """Initialize the scanner.

        Args:
            fs: File system used to list and read files
            ignore_patterns: Glob patterns for directories/files to skip
            skip_files: File names produced by gen-env itself
            error_handler: Receives read and parse errors
        """
        self.fs = fs or DefaultFileSystem()
        self.ignore_patterns = set(ignore_patterns)
        self.skip_files = set(skip_files)
        self.error_handler = error_handler

    def _report(self, result: ScanResult, error: DetectionError) -> None:
        result.errors.append(error)
        if self.error_handler is not None:
            self.error_handler.handle_error(error)

    def project_files(self, root: Union[str, Path]) -> List[Path]:
        """List the source files that belong to the project."""
        files = self.fs.find_python_files(Path(root), self.ignore_patterns)
        return [path for path in files if path.name not in self.skip_files]

    def scan_file(self, file_path: Path) -> Tuple[List[ImportInfo], Optional[DetectionError]]:
        """Parse one file.

        Returns:
            The imports found and the error met, if any
        """
        try:
            content = self.fs.read_file(file_path)
        except OSError as e:
            return [], DetectionError(
                error_type="ReadError",
                message=f"Error reading {file_path}: {e}",
                file=file_path
            )

        try:
            return parse_imports(content), None
        except SyntaxError as e:
            return [], DetectionError(
                error_type="ParseError",
                message=e.msg or str(e),
                file=file_path,
                line_number=e.lineno
            )
        except ValueError as e:
            return [], DetectionError(
                error_type="ParseError",
                message=str(e),
                file=file_path
            )

    def scan(self, root: Union[str, Path]) -> ScanResult:
        """Scan a project directory for imports."""
        root = Path(root)
        result = ScanResult()

        for file_path in self.project_files(root):
            imports, error = self.scan_file(file_path)
            if error is not None:
                logger.debug(f"Skipping {file_path}: {error}")
                self._report(result, error)

            result.imports[str(file_path)] = imports
            result.add_file(file_path, import_roots(imports))

        logger.info(f"Scanned {len(result.files)} files, found {len(result.identifiers)} imported names")
        return result
