"""Virtual environment management and package installation."""
import logging
import os
import shutil
import subprocess
import sys
from pathlib import Path
from typing import List, Optional, Protocol, Union, runtime_checkable

from .genenv_types import RuntimeVersionUnavailable

logger = logging.getLogger('genenv.environment')


@runtime_checkable
class PackageInstaller(Protocol):
    """Protocol for package installers."""

    def install(self, name: str) -> bool:
        """Install a package, returning whether it succeeded."""
        ...


def read_version_pin(project_dir: Union[str, Path], version_file: str = "version") -> Optional[str]:
    """Return the pinned Python version of a project, if any."""
    pin_path = Path(project_dir) / version_file
    if not pin_path.is_file():
        return None
    version = pin_path.read_text(encoding='utf-8').strip()
    return version or None


def is_windows() -> bool:
    return os.name == "nt" or sys.platform in ("msys", "cygwin")


def venv_bin_dir(venv_path: Path, windows: Optional[bool] = None) -> Path:
    """Directory holding the executables of a virtual environment."""
    if windows is None:
        windows = is_windows()
    if windows:
        return venv_path / "Scripts"
    return venv_path / "bin"


def run_command(cmd: List[str], cwd: Optional[Path] = None) -> subprocess.CompletedProcess:
    """Run a command, capturing its output."""
    logger.debug(f"Running: {' '.join(cmd)}")
    return subprocess.run(cmd, cwd=cwd, capture_output=True, text=True)


class VirtualEnvironment:
    """Isolated Python environment living inside the project directory."""

    def __init__(
        self,
        project_dir: Union[str, Path],
        venv_dir: str = ".venv",
        version_file: str = "version"
    ):
        self.project_dir = Path(project_dir)
        self.path = self.project_dir / venv_dir
        self.version_file = version_file

    @property
    def exists(self) -> bool:
        return self.path.is_dir()

    @property
    def python_path(self) -> Path:
        """Interpreter of the environment."""
        name = "python.exe" if is_windows() else "python"
        return venv_bin_dir(self.path) / name

    def base_interpreter(self) -> str:
        """Interpreter used to create the environment.

        Raises:
            RuntimeVersionUnavailable: If the pinned version is not installed
        """
        version = read_version_pin(self.project_dir, self.version_file)
        if version is None:
            return sys.executable

        logger.info(f"Detected Python version from '{self.version_file}' file: {version}")
        interpreter = shutil.which(f"python{version}")
        if interpreter is None:
            raise RuntimeVersionUnavailable(version)
        return interpreter

    def ensure(self) -> bool:
        """Create the environment if it does not exist yet.

        Returns:
            True if a new environment was created

        Raises:
            RuntimeVersionUnavailable: If the pinned version is not installed
            subprocess.CalledProcessError: If venv creation fails
        """
        if self.exists:
            logger.info("Using existing virtual environment.")
            return False

        interpreter = self.base_interpreter()
        result = run_command([interpreter, "-m", "venv", str(self.path)], cwd=self.project_dir)
        if result.returncode != 0:
            raise subprocess.CalledProcessError(
                result.returncode, result.args, output=result.stdout, stderr=result.stderr
            )
        logger.info(f"Created virtual environment at {self.path}")
        return True

    def activate(self) -> Path:
        """Locate the environment interpreter used by later steps."""
        python = self.python_path
        if not python.exists():
            logger.warning(f"Interpreter not found at {python}")
        logger.info(f"Activated virtual environment: {venv_bin_dir(self.path)}")
        return python

    def freeze(self) -> List[str]:
        """Currently installed packages in ``pip freeze`` format."""
        try:
            result = run_command([str(self.python_path), "-m", "pip", "freeze"], cwd=self.project_dir)
        except OSError as e:
            logger.warning(f"pip freeze failed: {e}")
            return []
        if result.returncode != 0:
            logger.warning(f"pip freeze failed: {result.stderr.strip()}")
            return []
        return [line for line in result.stdout.splitlines() if line.strip()]


class PipInstaller:
    """Installs packages with the pip of a given interpreter."""

    def __init__(self, python: Union[str, Path], cwd: Optional[Path] = None):
        self.python = str(python)
        self.cwd = cwd

    def install(self, name: str) -> bool:
        try:
            result = run_command([self.python, "-m", "pip", "install", name], cwd=self.cwd)
        except OSError as e:
            logger.debug(f"Could not run pip for {name}: {e}")
            return False
        if result.returncode != 0:
            logger.debug(f"pip install {name} failed: {result.stderr.strip()}")
            return False
        return True
