"""
Shared filesystem helpers.
"""

from .filesystem import read_text_file, write_text_file

__all__ = ["read_text_file", "write_text_file"]
