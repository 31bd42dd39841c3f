"""
Shared utility helpers for filesystem access.
"""

from .filesystem import ensure_directory, file_lock, is_within, lock_path_for, write_bytes_file

__all__ = [
    "ensure_directory",
    "file_lock",
    "is_within",
    "lock_path_for",
    "write_bytes_file",
]
