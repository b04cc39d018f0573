"""Complementary package expansion."""
from typing import AbstractSet, Iterable, Mapping, Set

from .package_mappings import COMPLEMENTARY_PACKAGES


def expand_complementary(
    packages: AbstractSet[str],
    table: Mapping[str, Iterable[str]] = COMPLEMENTARY_PACKAGES
) -> Set[str]:
    """Add the companions of every trigger package present.

    A single pass over the input: companions pulled in here are not
    themselves expanded.
    """
    expanded = set(packages)
    for package in packages:
        expanded.update(table.get(package, ()))
    return expanded
