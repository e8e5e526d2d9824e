"""
Ignore rule resolution.

Assembles the pattern list for an acquisition from ordered sources:
built-in defaults, then the ignore file of the acquisition root, then
the ignore files of every ancestor directory. The result is always a
fresh, deduplicated, immutable PatternSet.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from flatrepo.core.config import AcquisitionConfig
from flatrepo.ingestion.observer import AcquisitionObserver, LoggingObserver
from flatrepo.ingestion.patterns import PatternSet

logger = logging.getLogger(__name__)


def normalize_ignore_line(line: str) -> Optional[str]:
    """
    Turn one ignore-file line into a pattern.

    Blank lines, comments and negations yield None. A pattern that is
    not anchored with a leading ``/`` or ``**/`` matches at any depth.
    """
    line = line.strip()
    if not line or line.startswith("#"):
        return None
    if line.startswith("!"):
        logger.debug(f"Ignoring negated pattern: {line}")
        return None
    if line.startswith("/") or line.startswith("**/"):
        return line
    return f"**/{line}"


def parse_ignore_file(content: str) -> List[str]:
    """Parse ignore-file content into patterns."""
    patterns = []
    for line in content.splitlines():
        pattern = normalize_ignore_line(line)
        if pattern is not None:
            patterns.append(pattern)
    return patterns


def read_ignore_file(path: Path) -> List[str]:
    """Read patterns from an ignore file; a missing file yields none."""
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read ignore file {path}: {e}")
        return []
    return parse_ignore_file(content)


def collect_patterns(sources: Iterable[Iterable[str]]) -> Tuple[str, ...]:
    """Merge pattern sources in order, keeping the first occurrence."""
    seen = set()
    merged = []
    for source in sources:
        for pattern in source:
            if pattern not in seen:
                seen.add(pattern)
                merged.append(pattern)
    return tuple(merged)


def ancestor_directories(root: Path) -> List[Path]:
    """The root itself followed by each parent up to the filesystem root."""
    root = root.resolve()
    return [root, *root.parents]


def output_exclusion(root: Path, output_path) -> Tuple[str, ...]:
    """Relative path of the output document when it lies inside root."""
    if not output_path:
        return ()
    try:
        relative = Path(output_path).resolve().relative_to(root.resolve())
    except ValueError:
        return ()
    return (relative.as_posix(),)


class IgnoreRuleResolver:
    """
    Resolves the ignore rules that apply to one acquisition.

    The built-in defaults are part of every result and cannot be
    overridden by repository ignore files.
    """

    def __init__(
        self,
        config: AcquisitionConfig,
        observer: Optional[AcquisitionObserver] = None,
    ):
        self.config = config
        self.observer = observer or LoggingObserver()

    @property
    def default_patterns(self) -> Tuple[str, ...]:
        return tuple(self.config.ignore_patterns)

    def ignore_file_patterns(self, root: Path) -> List[List[str]]:
        """Patterns from the root's ignore file and every ancestor's."""
        return [
            read_ignore_file(directory / self.config.ignore_file_name)
            for directory in ancestor_directories(root)
        ]

    def resolve_local(self, root: Path, output_path=None) -> PatternSet:
        """
        Build the pattern set for a local directory.

        Args:
            root: Acquisition root.
            output_path: Optional output document to exclude.

        Returns:
            PatternSet of defaults and discovered ignore-file patterns.
        """
        patterns = collect_patterns([self.default_patterns, *self.ignore_file_patterns(root)])
        pattern_set = PatternSet(patterns, excluded_paths=output_exclusion(root, output_path))
        self.observer.patterns_resolved(pattern_set.patterns)
        return pattern_set

    def resolve_remote(self) -> PatternSet:
        """Build the pattern set for a remote archive (defaults only)."""
        pattern_set = PatternSet(collect_patterns([self.default_patterns]))
        self.observer.patterns_resolved(pattern_set.patterns)
        return pattern_set


def split_extra_patterns(extra_patterns: str) -> List[str]:
    """Split a comma-separated pattern string."""
    if not extra_patterns:
        return []
    return [p.strip() for p in extra_patterns.split(",") if p.strip()]


def normalize_extra_pattern(pattern: str) -> str:
    """
    Apply the directory-versus-file heuristic to a caller pattern.

    Anchored patterns are used as given. Otherwise ``dir/`` matches
    everything beneath dir, a name without a dot (or starting with one)
    is treated as a directory name, and anything else is a file
    pattern matching at any depth.
    """
    if pattern.startswith("/") or pattern.startswith("**/"):
        return pattern
    if pattern.endswith("/"):
        return f"**/{pattern}**"
    if "." not in pattern or pattern.startswith("."):
        return f"**/{pattern}/**"
    return f"**/{pattern}"


def compile_extra_patterns(extra_patterns: str) -> PatternSet:
    """Compile a comma-separated caller pattern string."""
    return PatternSet(normalize_extra_pattern(p) for p in split_extra_patterns(extra_patterns))
