"""
Directory tree rendering.
"""

from typing import Dict, List, Sequence

from flatrepo.ingestion.repository import FileRecord


def build_file_tree(files: Sequence[FileRecord]) -> Dict:
    """
    Build a hierarchical file tree representation.

    Returns:
        Nested dictionary; directories map to dictionaries, files map
        to their FileRecord.
    """
    tree: Dict = {}

    for record in files:
        parts = record.relative_path.split("/")
        current = tree

        for i, part in enumerate(parts):
            if i == len(parts) - 1:
                current[part] = record
            else:
                current = current.setdefault(part, {})

    return tree


def _sorted_entries(node: Dict) -> List[str]:
    directories = sorted(name for name, child in node.items() if isinstance(child, dict))
    files = sorted(name for name, child in node.items() if not isinstance(child, dict))
    return directories + files


def _render(node: Dict, prefix: str, lines: List[str]) -> None:
    entries = _sorted_entries(node)
    for index, name in enumerate(entries):
        is_last = index == len(entries) - 1
        child = node[name]
        connector = "└── " if is_last else "├── "

        if isinstance(child, dict):
            lines.append(f"{prefix}{connector}{name}/")
            _render(child, prefix + ("    " if is_last else "│   "), lines)
        else:
            lines.append(f"{prefix}{connector}{name}")


def generate_directory_tree(files: Sequence[FileRecord]) -> str:
    """
    Render an ASCII directory tree rooted at ``.``.

    Directories come before files; each level is sorted by name.
    """
    lines = ["."]
    _render(build_file_tree(files), "", lines)
    return "\n".join(lines)
