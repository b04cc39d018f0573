"""Type definitions shared by the scanner, resolver and orchestrator."""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Set, Union

import networkx as nx


class GenEnvError(Exception):
    """Base class for fatal errors raised by gen-env."""


class RuntimeVersionUnavailable(GenEnvError):
    """Raised when the pinned Python version is not installed."""

    def __init__(self, version: str):
        self.version = version
        super().__init__(f"Python {version} not found. Please install it.")


@dataclass
class DetectionError(Exception):
    """Represents a recoverable error met while detecting dependencies."""
    error_type: str
    message: str
    file: Optional[Union[str, Path]] = None
    line_number: Optional[int] = None
    context: Optional[str] = None

    @property
    def file_path(self) -> str:
        """Return the file path as a string."""
        return str(self.file) if self.file else ""

    def __str__(self) -> str:
        """Return a string representation of the error."""
        parts = []
        if self.error_type:
            parts.append(f"[{self.error_type}]")
        if self.file:
            parts.append(f"in {self.file}")
        if self.line_number is not None and self.line_number > 0:
            parts.append(f"at line {self.line_number}")
        if self.message:
            parts.append(self.message)
        if self.context:
            parts.append(f"({self.context})")
        return " ".join(parts)


@dataclass
class ImportInfo:
    """Information about an import statement."""
    name: str
    alias: str | None = None
    is_relative: bool = False
    lineno: int = 0

    @property
    def root(self) -> str:
        """Leading segment of the imported module name."""
        return self.name.split('.')[0]


class ResolutionSource(str, Enum):
    """Which step of the resolution order produced a decision."""
    STDLIB = "stdlib"
    LOCAL = "local"
    ALIAS = "alias"
    REGISTRY = "registry"
    FALLBACK = "fallback"
    REJECTED = "rejected"


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving one import identifier."""
    identifier: str
    package: Optional[str]
    source: ResolutionSource

    @property
    def is_resolved(self) -> bool:
        return self.package is not None


@dataclass
class ScanResult:
    """Imports collected from a project tree."""
    files: List[Path] = field(default_factory=list)
    imports: Dict[str, List[ImportInfo]] = field(default_factory=dict)
    import_graph: nx.DiGraph = field(default_factory=nx.DiGraph)
    errors: List[DetectionError] = field(default_factory=list)

    @property
    def identifiers(self) -> Set[str]:
        """All top-level import identifiers found in the project."""
        return {
            node for node, data in self.import_graph.nodes(data=True)
            if data.get('kind') == 'import'
        }

    def add_file(self, file_path: Path, identifiers: Set[str]) -> None:
        """Record a scanned file and the identifiers it imports."""
        source = str(file_path)
        self.files.append(file_path)
        self.import_graph.add_node(source, kind='file')
        for identifier in identifiers:
            self.import_graph.add_node(identifier, kind='import')
            self.import_graph.add_edge(source, identifier)

    def files_importing(self, identifier: str) -> List[str]:
        """Files that import the given identifier, sorted."""
        if identifier not in self.import_graph:
            return []
        return sorted(self.import_graph.predecessors(identifier))


@dataclass
class RunSummary:
    """Result of a full gen-env run."""
    resolutions: List[Resolution] = field(default_factory=list)
    packages: List[str] = field(default_factory=list)
    installed: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    requirements_file: Optional[Path] = None
    errors: List[DetectionError] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failed
