"""
Ignore pattern compilation and matching.

Patterns use gitignore wildcard syntax (``*``, ``?``, ``**``, trailing
``/`` for directories). A path is ignored when it matches any pattern
in the set. Negation is not supported: a ``!`` pattern never matches
and cannot re-include a path matched by another pattern.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

import pathspec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IgnorePattern:
    """A compiled pattern together with its original text."""

    text: str
    spec: pathspec.PathSpec

    @classmethod
    def compile(cls, text: str) -> "IgnorePattern":
        return cls(text=text, spec=pathspec.PathSpec.from_lines("gitwildmatch", [text]))

    def matches(self, path: str) -> bool:
        return self.spec.match_file(path)


class PatternSet:
    """
    An immutable OR-combination of ignore patterns.

    ``excluded_paths`` holds exact relative paths that are always
    ignored regardless of wildcard syntax (e.g. the output document).
    """

    def __init__(self, patterns: Iterable[str] = (), excluded_paths: Iterable[str] = ()):
        compiled = []
        for text in patterns:
            text = text.strip()
            if not text:
                continue
            if text.startswith("!"):
                logger.debug(f"Negated pattern not supported, skipping: {text}")
                continue
            try:
                compiled.append(IgnorePattern.compile(text))
            except ValueError as e:
                logger.warning(f"Invalid ignore pattern {text!r}: {e}")
        self._patterns: Tuple[IgnorePattern, ...] = tuple(compiled)
        self._excluded_paths = frozenset(_normalize_path(p) for p in excluded_paths)

    @property
    def patterns(self) -> Tuple[str, ...]:
        """Original text of every compiled pattern."""
        return tuple(p.text for p in self._patterns)

    @property
    def excluded_paths(self) -> frozenset:
        return self._excluded_paths

    def matches(self, path: str) -> bool:
        """Check if a repository-relative path is ignored."""
        path = _normalize_path(path)
        if path in self._excluded_paths:
            return True
        return any(p.matches(path) for p in self._patterns)

    def filter(self, paths: Iterable[str]) -> Iterator[str]:
        """Yield the paths that are not ignored."""
        for path in paths:
            if not self.matches(path):
                yield path

    def __len__(self) -> int:
        return len(self._patterns)

    def __iter__(self) -> Iterator[IgnorePattern]:
        return iter(self._patterns)

    def __repr__(self) -> str:
        return f"PatternSet({list(self.patterns)!r})"


def _normalize_path(path: str) -> str:
    while path.startswith("./"):
        path = path[2:]
    return path.lstrip("/")


def matches(path: str, patterns) -> bool:
    """
    Check whether ``path`` matches any of ``patterns``.

    Args:
        path: Forward-slash separated, repository-relative path.
        patterns: A PatternSet or an iterable of pattern strings.

    Returns:
        True if the path should be ignored.
    """
    if not isinstance(patterns, PatternSet):
        patterns = PatternSet(patterns)
    return patterns.matches(path)
