"""
Storage adapters
"""

from .file import FilePreferenceStore
from .memory import MemoryPreferenceStore

__all__ = ["FilePreferenceStore", "MemoryPreferenceStore"]
