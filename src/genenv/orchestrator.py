"""Run orchestration: environment, detection, installation, output."""
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Protocol, Tuple, Union

from rich.console import Console
from rich.table import Table

from .catalog import LocalModuleCatalog
from .config import GenEnvConfig
from .environment import PackageInstaller, PipInstaller, VirtualEnvironment
from .error_handling import ConsoleErrorHandler, ErrorHandler
from .expander import expand_complementary
from .file_system import FileSystemInterface
from .genenv_types import DetectionError, Resolution, RunSummary, ScanResult
from .registry import CachingRegistry, ExistenceOracle, OfflineRegistry, PyPIRegistry
from .resolver import NameResolver
from .scanner import ImportScanner

logger = logging.getLogger('genenv.orchestrator')

# Scratch files, removed at the end of every run
INITIAL_PACKAGES_FILE = "initial_packages.txt"
DETECTED_PACKAGES_FILE = "detected_packages.txt"
SCRATCH_FILES = (INITIAL_PACKAGES_FILE, DETECTED_PACKAGES_FILE)


class EnvironmentManager(Protocol):
    """Protocol for isolated runtime management."""

    def ensure(self) -> bool:
        ...

    def activate(self) -> Path:
        ...

    def freeze(self) -> List[str]:
        ...


def build_oracle(config: GenEnvConfig) -> ExistenceOracle:
    """Registry oracle described by the configuration."""
    if config.offline:
        return OfflineRegistry()
    return CachingRegistry(PyPIRegistry(config.registry_url, config.registry_timeout))


def detect_packages(
    project_dir: Union[str, Path],
    config: GenEnvConfig,
    oracle: ExistenceOracle,
    fs: Optional[FileSystemInterface] = None,
    error_handler: Optional[ErrorHandler] = None,
    skip_files: Iterable[str] = ()
) -> Tuple[List[str], List[Resolution], ScanResult]:
    """Detect the distributions a project needs.

    Returns:
        The sorted package list, the per-identifier resolutions and the scan
    """
    project_dir = Path(project_dir)
    skip_files = tuple(skip_files)
    # The environment directory is never project code, whatever its name
    ignore_patterns = {*config.ignore_patterns, Path(config.venv_dir).name}

    catalog = LocalModuleCatalog(project_dir, fs, ignore_patterns, skip_files)
    local_modules = catalog.build()

    scanner = ImportScanner(fs, ignore_patterns, skip_files, error_handler)
    scan = scanner.scan(project_dir)

    resolver = NameResolver(local_modules, oracle, aliases=config.alias_table)
    resolutions = resolver.classify_all(scan.identifiers)
    packages = {r.package for r in resolutions if r.is_resolved}
    packages = expand_complementary(packages, config.complementary_table)

    return sorted(packages), resolutions, scan


def write_requirements(path: Path, packages: List[str]) -> Path:
    """Write one package per line; no packages gives an empty file."""
    content = "".join(f"{package}\n" for package in sorted(packages))
    path.write_text(content, encoding='utf-8')
    return path


class Orchestrator:
    """Sequences the steps of a gen-env run."""

    def __init__(
        self,
        config: GenEnvConfig,
        env_manager: Optional[EnvironmentManager] = None,
        installer: Optional[PackageInstaller] = None,
        oracle: Optional[ExistenceOracle] = None,
        error_handler: Optional[ErrorHandler] = None,
        console: Optional[Console] = None,
        fs: Optional[FileSystemInterface] = None
    ):
        self.config = config
        self.env_manager = env_manager
        self.installer = installer
        self.oracle = oracle or build_oracle(config)
        self.console = console or Console(highlight=False)
        self.error_handler = error_handler or ConsoleErrorHandler()
        self.fs = fs

    def _print(self, message: str) -> None:
        self.console.print(message, markup=False)

    def _warn(self, error: DetectionError) -> None:
        self.error_handler.handle_error(error)

    @property
    def generated_files(self) -> Tuple[str, ...]:
        return (*SCRATCH_FILES, self.config.requirements_file)

    def prepare_environment(self, project_dir: Path) -> Path:
        """Create and activate the isolated runtime.

        Raises:
            RuntimeVersionUnavailable: If the pinned version is not installed
        """
        if self.env_manager is None:
            self.env_manager = VirtualEnvironment(
                project_dir, self.config.venv_dir, self.config.version_file
            )

        if self.env_manager.ensure():
            self._print("Created new virtual environment.")
        else:
            self._print("Using existing virtual environment.")

        python = self.env_manager.activate()
        self._print("Activated virtual environment.")

        if self.installer is None:
            self.installer = PipInstaller(python, cwd=project_dir)
        return python

    def install_packages(self, packages: List[str]) -> Tuple[List[str], List[str]]:
        """Install each package; failures are reported and skipped."""
        installed, failed = [], []
        if not packages:
            self._print("No external dependencies detected.")
            return installed, failed

        self._print("Installing detected dependencies...")
        for package in packages:
            self._print(f"Installing: {package}")
            if self.installer.install(package):
                installed.append(package)
            else:
                failed.append(package)
                self._warn(DetectionError(
                    error_type="InstallError",
                    message=f"Warning: Failed to install {package}",
                    context=package
                ))
        return installed, failed

    def report(self, packages: List[str], resolutions: List[Resolution], scan: ScanResult) -> None:
        """Print the detected packages and where they come from."""
        by_package = {}
        for resolution in resolutions:
            if resolution.is_resolved:
                by_package.setdefault(resolution.package, []).append(resolution)

        table = Table(title="Detected dependencies")
        table.add_column("Package")
        table.add_column("Import")
        table.add_column("Source")
        table.add_column("Files", justify="right")
        for package in packages:
            matches = by_package.get(package)
            if not matches:
                table.add_row(package, "-", "complementary", "-")
                continue
            for resolution in matches:
                files = scan.files_importing(resolution.identifier)
                table.add_row(package, resolution.identifier, resolution.source.value, str(len(files)))
        self.console.print(table)

    def run(self, project_dir: Union[str, Path]) -> RunSummary:
        """Run every step against a project directory.

        Raises:
            RuntimeVersionUnavailable: If the pinned version is not installed
        """
        project_dir = Path(project_dir)
        summary = RunSummary()

        self.prepare_environment(project_dir)

        initial_path = project_dir / INITIAL_PACKAGES_FILE
        detected_path = project_dir / DETECTED_PACKAGES_FILE
        try:
            initial_path.write_text("\n".join(self.env_manager.freeze()), encoding='utf-8')

            self._print("Scanning project for dependencies...")
            packages, resolutions, scan = detect_packages(
                project_dir,
                self.config,
                self.oracle,
                fs=self.fs,
                error_handler=self.error_handler,
                skip_files=self.generated_files
            )
            summary.packages = packages
            summary.resolutions = resolutions
            summary.errors = list(scan.errors)
            write_requirements(detected_path, packages)
            if packages:
                self.report(packages, resolutions, scan)

            summary.installed, summary.failed = self.install_packages(packages)

            self._print(f"Generating {self.config.requirements_file}...")
            summary.requirements_file = write_requirements(
                project_dir / self.config.requirements_file, packages
            )
            if packages:
                self._print(f"Created {self.config.requirements_file} with the detected dependencies.")
                for package in packages:
                    self._print(package)
            else:
                self._print(f"No dependencies detected. Created empty {self.config.requirements_file}.")
        finally:
            self._print("Cleaning up...")
            for scratch in (initial_path, detected_path):
                scratch.unlink(missing_ok=True)

        self._print("Setup complete.")
        if not summary.success:
            self._print(f"Failed to install: {', '.join(summary.failed)}")
        return summary
