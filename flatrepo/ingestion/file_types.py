"""
Binary classification by file extension.

Both acquirers classify files the same way: the extension decides
whether content is kept as raw bytes or decoded as UTF-8 text.
"""

import posixpath

from flatrepo.ingestion.repository import FileRecord


BINARY_EXTENSIONS = frozenset({
    # Images
    ".jpg", ".jpeg", ".png", ".gif", ".bmp", ".ico", ".webp", ".svg", ".tiff",
    # Video
    ".mp4", ".mov", ".avi", ".mkv", ".wmv", ".flv", ".webm",
    # Audio
    ".mp3", ".wav", ".ogg", ".m4a", ".flac", ".aac",
    # Documents
    ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx",
    # Archives
    ".zip", ".rar", ".7z", ".tar", ".gz",
    # Executables and libraries
    ".exe", ".dll", ".so", ".dylib",
    # Fonts
    ".ttf", ".otf", ".woff", ".woff2", ".eot",
})


def get_extension(relative_path: str) -> str:
    """Lowercase extension including the leading dot, or ''."""
    return posixpath.splitext(posixpath.basename(relative_path))[1].lower()


def is_binary_extension(extension: str) -> bool:
    return extension.lower() in BINARY_EXTENSIONS


def build_record(relative_path: str, data: bytes) -> FileRecord:
    """
    Create a FileRecord from raw bytes.

    Text that is not valid UTF-8 is kept as bytes so the processing
    stage can report it as an encoding error.
    """
    extension = get_extension(relative_path)
    is_binary = is_binary_extension(extension)

    content = data
    if not is_binary:
        try:
            content = data.decode("utf-8")
        except UnicodeDecodeError:
            content = data

    return FileRecord(
        relative_path=relative_path,
        content=content,
        is_binary=is_binary,
        extension=extension,
    )
