"""Main module for gen-env."""
import argparse
import logging
import subprocess
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console

from src.genenv.config import GenEnvConfig
from src.genenv.error_handling import CompositeErrorHandler, ConsoleErrorHandler, FileErrorHandler
from src.genenv.genenv_types import GenEnvError, RunSummary
from src.genenv.logging_config import setup_logging
from src.genenv.orchestrator import Orchestrator

logger = logging.getLogger('genenv.cli')

EXIT_OK = 0
EXIT_ENVIRONMENT_ERROR = 1
EXIT_BAD_CONFIG = 2


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog='gen-env',
        description=(
            'Create a virtual environment in the current directory, detect the '
            'packages its Python files import, install them and write requirements.txt.'
        )
    )
    return parser.parse_args(args)


def run(project_dir: Path, config: GenEnvConfig) -> RunSummary:
    """Run gen-env against a project directory."""
    handlers = [ConsoleErrorHandler()]
    if config.log_file is not None:
        handlers.append(FileErrorHandler(str(config.log_file)))
    orchestrator = Orchestrator(config, error_handler=CompositeErrorHandler(handlers))
    return orchestrator.run(project_dir)


def main(args=None) -> int:
    """Main entry point."""
    parse_args(args)
    project_dir = Path.cwd()
    stderr = Console(stderr=True, highlight=False)

    try:
        config = GenEnvConfig.load(project_dir)
    except ValidationError as e:
        stderr.print(f"Invalid gen-env configuration:\n{e}", markup=False)
        return EXIT_BAD_CONFIG

    setup_logging(logging.WARNING, config.log_file)
    logger.debug("Starting gen-env")

    try:
        run(project_dir, config)
    except GenEnvError as e:
        stderr.print(str(e), markup=False)
        return EXIT_ENVIRONMENT_ERROR
    except subprocess.CalledProcessError as e:
        detail = (e.stderr or "").strip() or f"exit status {e.returncode}"
        stderr.print(f"Failed to create virtual environment: {detail}", markup=False)
        return EXIT_ENVIRONMENT_ERROR
    return EXIT_OK


def run_main():
    """Console script entry point."""
    sys.exit(main())


if __name__ == '__main__':
    run_main()
