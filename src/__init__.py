"""gen-env: bootstrap a virtual environment from a project's imports."""

from .genenv import GenEnvConfig, Orchestrator, detect_packages
from .genenv.error_handling import ConsoleErrorHandler, FileErrorHandler, CompositeErrorHandler

__version__ = "0.1.0"

__all__ = [
    "GenEnvConfig",
    "Orchestrator",
    "detect_packages",
    "ConsoleErrorHandler",
    "FileErrorHandler",
    "CompositeErrorHandler",
]
