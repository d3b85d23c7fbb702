"""Selection of the objects to generate from the catalog.

Objects are kept when they are named in the includes or fully match the
include pattern, and are neither named in the excludes nor fully match
the exclude pattern.
"""

import re
from typing import Iterable

from .core.config import ConfigurationError
from .core.schema import Catalog
from .logging_config import get_logger

logger = get_logger(__name__)

MATCH_ALL = re.compile(r".*", re.DOTALL)
MATCH_NOTHING = re.compile(r"(?!)")


def _normalize_names(names: Iterable[str] | None, kind: str) -> frozenset[str]:
    """Trim names, rejecting empty ones."""
    normalized = set()
    for name in names or ():
        name = name.strip()
        if not name:
            raise ConfigurationError(f"Invalid empty name in {kind}")
        normalized.add(name)
    return frozenset(normalized)


def _compile(pattern: str, kind: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ConfigurationError(f"Invalid {kind} {pattern!r}: {e}") from e


def _is_set(pattern: str | None) -> bool:
    return pattern is not None and bool(pattern.strip())


class ObjectSelector:
    """Applies include/exclude names and patterns to a catalog.

    Example:
        >>> selector = ObjectSelector(includes=["Account"], exclude_pattern=".*History")
        >>> selector.select(frozenset({"Account", "Contact"}))
        frozenset({'Account'})
    """

    def __init__(
        self,
        includes: Iterable[str] | None = None,
        excludes: Iterable[str] | None = None,
        include_pattern: str | None = None,
        exclude_pattern: str | None = None,
    ) -> None:
        self.includes = _normalize_names(includes, "includes")
        self.excludes = _normalize_names(excludes, "excludes")

        if _is_set(include_pattern):
            self.include_pattern = _compile(include_pattern.strip(), "include pattern")
        elif self.includes:
            # Only the explicitly named objects unless a pattern is given too
            self.include_pattern = MATCH_NOTHING
        else:
            self.include_pattern = MATCH_ALL

        if _is_set(exclude_pattern):
            self.exclude_pattern = _compile(exclude_pattern.strip(), "exclude pattern")
        else:
            self.exclude_pattern = MATCH_NOTHING

        self.configured = bool(
            self.includes
            or self.excludes
            or _is_set(include_pattern)
            or _is_set(exclude_pattern)
        )

    def is_included(self, name: str) -> bool:
        return name in self.includes or self.include_pattern.fullmatch(name) is not None

    def is_excluded(self, name: str) -> bool:
        return name in self.excludes or self.exclude_pattern.fullmatch(name) is not None

    def accepts(self, name: str) -> bool:
        """True if the object should be generated."""
        return self.is_included(name) and not self.is_excluded(name)

    def select(self, catalog: Catalog) -> frozenset[str]:
        """Return the selected subset of the catalog."""
        if not self.configured:
            logger.warning(
                "Generating classes for all %d Objects, this may take a while...",
                len(catalog),
            )
            return frozenset(catalog)

        logger.info("Looking for matching Object names...")
        selected = frozenset(name for name in catalog if self.accepts(name))
        logger.info("Found %d matching Objects", len(selected))
        return selected


def select_objects(
    catalog: Catalog,
    includes: Iterable[str] | None = None,
    excludes: Iterable[str] | None = None,
    include_pattern: str | None = None,
    exclude_pattern: str | None = None,
) -> frozenset[str]:
    """Convenience function applying an ObjectSelector to a catalog."""
    selector = ObjectSelector(includes, excludes, include_pattern, exclude_pattern)
    return selector.select(catalog)
