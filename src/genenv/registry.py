"""Package registry existence checks.

The resolver only needs to know whether a distribution name exists. Any
object with an ``exists(name)`` method answering ``True``, ``False`` or
``None`` (unknown) can serve; the PyPI JSON API is the default.
"""
import logging
from typing import Dict, Iterable, Optional, Protocol, runtime_checkable

import requests

logger = logging.getLogger('genenv.registry')

PYPI_URL = "https://pypi.org/pypi"
DEFAULT_TIMEOUT = 5.0


@runtime_checkable
class ExistenceOracle(Protocol):
    """Protocol for package existence checks."""

    def exists(self, name: str) -> Optional[bool]:
        """Return whether a distribution exists, or None if unknown."""
        ...


class PyPIRegistry:
    """Existence checks against the PyPI JSON API."""

    def __init__(
        self,
        base_url: str = PYPI_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None
    ):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.setdefault("Accept", "application/json")

    def url_for(self, name: str) -> str:
        return f"{self.base_url}/{name}/json"

    def exists(self, name: str) -> Optional[bool]:
        """Check a name against the registry.

        HTTP 200 means the distribution exists, any other status means it
        does not. Network errors and timeouts give None.
        """
        try:
            response = self.session.get(self.url_for(name), timeout=self.timeout)
        except requests.RequestException as e:
            logger.debug(f"Registry lookup for '{name}' failed: {e}")
            return None
        logger.debug(f"Registry lookup for '{name}' returned {response.status_code}")
        return response.status_code == 200


class StaticRegistry:
    """Existence checks against a fixed snapshot of distribution names."""

    def __init__(self, names: Iterable[str]):
        self.names = frozenset(names)

    def exists(self, name: str) -> Optional[bool]:
        return name in self.names


class OfflineRegistry:
    """Registry used when lookups are disabled; every answer is unknown."""

    def exists(self, name: str) -> Optional[bool]:
        return None


class CachingRegistry:
    """Memoizes the answers of another oracle for the length of a run."""

    def __init__(self, oracle: ExistenceOracle):
        self.oracle = oracle
        self._cache: Dict[str, Optional[bool]] = {}

    def exists(self, name: str) -> Optional[bool]:
        if name not in self._cache:
            self._cache[name] = self.oracle.exists(name)
        return self._cache[name]
