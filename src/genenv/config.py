"""Configuration management for gen-env."""
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import tomli
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .package_mappings import COMPLEMENTARY_PACKAGES, MODULE_TO_PACKAGE
from .registry import DEFAULT_TIMEOUT, PYPI_URL

logger = logging.getLogger('genenv.config')

PYPROJECT_SECTION = "gen-env"


def load_pyproject_settings(pyproject_file: Path) -> Dict[str, Any]:
    """Read the ``[tool.gen-env]`` table of a pyproject.toml file.

    Missing or malformed files give an empty dict.
    """
    if not pyproject_file.exists():
        return {}

    try:
        with open(pyproject_file, 'rb') as f:
            data = tomli.load(f)
    except (OSError, tomli.TOMLDecodeError) as e:
        logger.error(f"Error parsing {pyproject_file}: {e}")
        return {}

    section = data.get('tool', {}).get(PYPROJECT_SECTION, {})
    if not isinstance(section, dict):
        logger.error(f"Ignoring [tool.{PYPROJECT_SECTION}] in {pyproject_file}: not a table")
        return {}

    # TOML keys use dashes, settings fields use underscores
    return {key.replace('-', '_'): value for key, value in section.items()}


class GenEnvConfig(BaseSettings):
    """Configuration settings for gen-env."""

    model_config = SettingsConfigDict(
        env_prefix="GEN_ENV_",
        case_sensitive=False,
        extra="ignore"
    )

    # Registry
    registry_url: str = Field(
        default=PYPI_URL,
        description="Base URL of the package registry JSON API"
    )
    registry_timeout: float = Field(
        default=DEFAULT_TIMEOUT,
        gt=0,
        description="Timeout in seconds for each registry lookup"
    )
    offline: bool = Field(
        default=False,
        description="Skip registry lookups and rely on aliases and the fallback"
    )

    # Environment
    venv_dir: str = Field(
        default=".venv",
        description="Directory of the virtual environment, relative to the project"
    )
    version_file: str = Field(
        default="version",
        description="File pinning the Python version used for the environment"
    )
    requirements_file: str = Field(
        default="requirements.txt",
        description="File receiving the detected dependencies"
    )

    # File patterns
    ignore_patterns: List[str] = Field(
        default=[
            "__pycache__", "*.pyc", ".git", ".venv", "venv", ".temp_env",
            ".tox", ".nox", "build", "dist", "*.egg-info", "node_modules",
        ],
        description="Patterns to ignore during file scanning"
    )

    # Name tables
    extra_aliases: Dict[str, str] = Field(
        default_factory=dict,
        description="Import name to distribution name overrides"
    )
    extra_complementary: Dict[str, List[str]] = Field(
        default_factory=dict,
        description="Additional companion packages per trigger package"
    )

    log_file: Optional[Path] = Field(
        default=None,
        description="Optional debug log file"
    )

    @property
    def alias_table(self) -> Mapping[str, str]:
        """Built-in aliases merged with the configured ones."""
        return MappingProxyType({**MODULE_TO_PACKAGE, **self.extra_aliases})

    @property
    def complementary_table(self) -> Mapping[str, Tuple[str, ...]]:
        """Built-in companion packages merged with the configured ones."""
        merged = dict(COMPLEMENTARY_PACKAGES)
        for trigger, companions in self.extra_complementary.items():
            merged[trigger] = tuple(dict.fromkeys((*merged.get(trigger, ()), *companions)))
        return MappingProxyType(merged)

    @classmethod
    def load(cls, project_dir: Union[str, Path]) -> 'GenEnvConfig':
        """Load settings for a project.

        Values from ``[tool.gen-env]`` in the project's pyproject.toml are
        used unless the matching ``GEN_ENV_*`` environment variable is set.
        """
        file_settings = load_pyproject_settings(Path(project_dir) / "pyproject.toml")
        env_settings = cls()
        overrides = env_settings.model_dump(exclude_unset=True)
        return cls(**{**file_settings, **overrides})
