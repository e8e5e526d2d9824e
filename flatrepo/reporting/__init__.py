"""
Summary data for the formatting layer.

Provides aggregate statistics and the directory tree of a filtered
file collection.
"""

from flatrepo.reporting.stats import RepositoryStats, calculate_stats
from flatrepo.reporting.tree import build_file_tree, generate_directory_tree

__all__ = [
    "RepositoryStats",
    "calculate_stats",
    "build_file_tree",
    "generate_directory_tree",
]
