"""Dependency detection and environment bootstrap package."""
from .catalog import LocalModuleCatalog
from .config import GenEnvConfig
from .expander import expand_complementary
from .genenv_types import (
    DetectionError,
    GenEnvError,
    Resolution,
    ResolutionSource,
    RunSummary,
    RuntimeVersionUnavailable,
    ScanResult
)
from .orchestrator import Orchestrator, detect_packages
from .registry import CachingRegistry, ExistenceOracle, OfflineRegistry, PyPIRegistry, StaticRegistry
from .resolver import NameResolver
from .scanner import ImportScanner, extract_imports

__all__ = [
    'LocalModuleCatalog',
    'GenEnvConfig',
    'expand_complementary',
    'DetectionError',
    'GenEnvError',
    'Resolution',
    'ResolutionSource',
    'RunSummary',
    'RuntimeVersionUnavailable',
    'ScanResult',
    'Orchestrator',
    'detect_packages',
    'CachingRegistry',
    'ExistenceOracle',
    'OfflineRegistry',
    'PyPIRegistry',
    'StaticRegistry',
    'NameResolver',
    'ImportScanner',
    'extract_imports'
]
