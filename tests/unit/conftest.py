"""Test fixtures for gen-env units."""
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

import pytest

from src.genenv.config import GenEnvConfig
from src.genenv.file_system import FileSystemInterface, should_ignore_path
from src.genenv.registry import StaticRegistry


class MockFileSystem(FileSystemInterface):
    """In-memory file system for testing."""

    def __init__(self, base_dir: Union[str, Path], mock_files: Dict[str, Optional[str]]):
        """Initialize mock file system.

        Args:
            base_dir: Base directory for mock files
            mock_files: Relative paths and their contents; None marks an
                unreadable file
        """
        self.base_dir = Path(base_dir)
        self.mock_files = {self.base_dir / rel: content for rel, content in mock_files.items()}
        self.reads: List[Path] = []

    def read_file(self, path: Path) -> str:
        self.reads.append(Path(path))
        content = self.mock_files.get(Path(path))
        if content is None:
            raise OSError(f"File not readable: {path}")
        return content

    def find_python_files(self, directory: Path, ignore_patterns: Optional[Iterable[str]] = None) -> List[Path]:
        directory = Path(directory)
        patterns = set(ignore_patterns or ())
        found = []
        for path in self.mock_files:
            if path.suffix != '.py':
                continue
            try:
                rel = path.relative_to(directory)
            except ValueError:
                continue
            if not should_ignore_path(rel, patterns):
                found.append(path)
        return sorted(found)


class RecordingInstaller:
    """Installer double that records calls and fails for chosen names."""

    def __init__(self, failing: Iterable[str] = ()):
        self.failing = set(failing)
        self.calls: List[str] = []

    def install(self, name: str) -> bool:
        self.calls.append(name)
        return name not in self.failing


class StubEnvironment:
    """Environment manager double."""

    def __init__(self, exists: bool = True, frozen: Iterable[str] = ("pip==24.0",)):
        self.exists = exists
        self.frozen = list(frozen)
        self.ensure_calls = 0
        self.activated = False

    def ensure(self) -> bool:
        self.ensure_calls += 1
        created = not self.exists
        self.exists = True
        return created

    def activate(self) -> Path:
        self.activated = True
        return Path("/fake/.venv/bin/python")

    def freeze(self) -> List[str]:
        return list(self.frozen)


class CountingRegistry:
    """Registry double that records every lookup."""

    def __init__(self, names: Iterable[str] = (), raises: bool = False):
        self.names = set(names)
        self.raises = raises
        self.lookups: List[str] = []

    def exists(self, name: str) -> Optional[bool]:
        self.lookups.append(name)
        if self.raises:
            raise ConnectionError("registry unreachable")
        return name in self.names


@pytest.fixture
def registry():
    """Registry snapshot containing a few well-known distributions."""
    return StaticRegistry({
        "numpy", "requests", "rembg", "onnxruntime", "utils", "flask",
        "pyyaml", "typing-extensions", "engine",
    })


@pytest.fixture
def config(monkeypatch):
    """Default configuration, isolated from GEN_ENV_* variables."""
    import os
    for key in list(os.environ):
        if key.upper().startswith("GEN_ENV_"):
            monkeypatch.delenv(key)
    return GenEnvConfig()


@pytest.fixture
def installer():
    return RecordingInstaller()


@pytest.fixture
def environment():
    return StubEnvironment()
