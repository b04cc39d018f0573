"""Import name to distribution name resolution."""
import logging
from typing import AbstractSet, Iterable, List, Mapping, Optional, Set

from .genenv_types import Resolution, ResolutionSource
from .package_mappings import MODULE_TO_PACKAGE, STDLIB_MODULES
from .registry import ExistenceOracle

logger = logging.getLogger('genenv.resolver')

# Characters that can never appear in a distribution name
INVALID_NAME_CHARS = ('/', '\\', '*')


def is_plausible_package_name(name: str) -> bool:
    """Check whether an unresolved identifier may be installed as is."""
    if not name or name.startswith('_'):
        return False
    if any(char.isspace() for char in name):
        return False
    return not any(char in name for char in INVALID_NAME_CHARS)


def registry_candidates(identifier: str) -> List[str]:
    """Names queried on the registry, in order, without repeats.

    The exact name comes first, then its lower-cased form, then the form
    with underscores replaced by hyphens.
    """
    candidates = [identifier]
    for variant in (identifier.lower(), identifier.replace('_', '-')):
        if variant not in candidates:
            candidates.append(variant)
    return candidates


class NameResolver:
    """Maps import identifiers to installable distribution names.

    Resolution order, first match wins:

    1. standard library modules are never installed
    2. project-local modules are never installed
    3. the alias table gives the canonical distribution name
    4. the registry is asked for the exact, lower-cased and hyphenated names
    5. otherwise the identifier is kept unless it cannot be a valid name
    """

    def __init__(
        self,
        local_modules: AbstractSet[str],
        oracle: ExistenceOracle,
        aliases: Mapping[str, str] = MODULE_TO_PACKAGE,
        stdlib: AbstractSet[str] = STDLIB_MODULES
    ):
        self.local_modules = frozenset(local_modules)
        self.oracle = oracle
        self.aliases = aliases
        self.stdlib = stdlib

    def _lookup(self, name: str) -> bool:
        try:
            return self.oracle.exists(name) is True
        except Exception as e:
            # A failing oracle counts as a miss
            logger.debug(f"Existence check for '{name}' raised: {e}")
            return False

    def classify(self, identifier: str) -> Resolution:
        """Resolve an identifier and report which step decided."""
        if identifier in self.stdlib:
            return Resolution(identifier, None, ResolutionSource.STDLIB)
        if identifier in self.local_modules:
            return Resolution(identifier, None, ResolutionSource.LOCAL)
        if identifier in self.aliases:
            return Resolution(identifier, self.aliases[identifier], ResolutionSource.ALIAS)

        for candidate in registry_candidates(identifier):
            if self._lookup(candidate):
                return Resolution(identifier, candidate, ResolutionSource.REGISTRY)

        if is_plausible_package_name(identifier):
            return Resolution(identifier, identifier, ResolutionSource.FALLBACK)
        return Resolution(identifier, None, ResolutionSource.REJECTED)

    def resolve(self, identifier: str) -> Optional[str]:
        """Return the distribution name for an identifier, or None."""
        return self.classify(identifier).package

    def classify_all(self, identifiers: Iterable[str]) -> List[Resolution]:
        """Classify identifiers in sorted order."""
        resolutions = []
        for identifier in sorted(set(identifiers)):
            resolution = self.classify(identifier)
            logger.debug(f"{identifier} -> {resolution.package} ({resolution.source.value})")
            resolutions.append(resolution)
        return resolutions

    def resolve_all(self, identifiers: Iterable[str]) -> Set[str]:
        """Resolve identifiers to the set of distributions to install."""
        return {r.package for r in self.classify_all(identifiers) if r.is_resolved}
