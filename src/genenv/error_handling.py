"""Error handling for gen-env."""
from typing import List, Optional, Protocol, runtime_checkable

from rich.console import Console
from rich.markup import escape

from .genenv_types import DetectionError


@runtime_checkable
class ErrorHandler(Protocol):
    """Protocol for error handlers."""

    def handle_error(self, error: DetectionError) -> None:
        """Handle a detection error."""
        ...

    def get_errors(self) -> List[DetectionError]:
        """Get all accumulated errors."""
        ...


def _location(error: DetectionError) -> str:
    location = f"{error.file}" if error.file else "<project>"
    if error.line_number is not None:
        location += f" (line {error.line_number})"
    return location


class ConsoleErrorHandler:
    """Error handler that outputs to the diagnostic stream using rich."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(stderr=True)
        self.errors: List[DetectionError] = []

    def handle_error(self, error: DetectionError) -> None:
        """Handle a detection error by printing it to the console."""
        self.errors.append(error)

        message = f"[red]{error.error_type}[/red]: {escape(error.message)}"
        if error.context:
            message += f"\n  Context: {escape(error.context)}"

        self.console.print(f"{escape(_location(error))}: {message}")

    def get_errors(self) -> List[DetectionError]:
        """Get all accumulated errors."""
        return self.errors.copy()


class FileErrorHandler:
    """Error handler that writes to a log file."""

    def __init__(self, log_file: str):
        self.log_file = log_file
        self.errors: List[DetectionError] = []

    def handle_error(self, error: DetectionError) -> None:
        """Handle a detection error by writing it to the log file."""
        self.errors.append(error)

        message = f"{error.error_type}: {error.message}"
        if error.context:
            message += f"\n  Context: {error.context}"

        with open(self.log_file, 'a', encoding='utf-8') as f:
            f.write(f"{_location(error)}: {message}\n")

    def get_errors(self) -> List[DetectionError]:
        """Get all accumulated errors."""
        return self.errors.copy()


class CompositeErrorHandler:
    """Error handler that delegates to multiple handlers."""

    def __init__(self, handlers: List[ErrorHandler]):
        self.handlers = handlers
        self.errors: List[DetectionError] = []

    def handle_error(self, error: DetectionError) -> None:
        """Handle a detection error by delegating to all handlers."""
        self.errors.append(error)
        for handler in self.handlers:
            handler.handle_error(error)

    def get_errors(self) -> List[DetectionError]:
        """Get all accumulated errors."""
        return self.errors.copy()

