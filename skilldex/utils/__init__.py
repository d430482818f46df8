"""skilldex utilities."""

from skilldex.utils.helpers import hash_content, truncate_string
from skilldex.utils.logging import get_logger, setup_logging

__all__ = [
    "hash_content",
    "truncate_string",
    "setup_logging",
    "get_logger",
]
