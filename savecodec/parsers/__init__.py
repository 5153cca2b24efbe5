"""
Save File Readers

- base: SaveCursor (forward-only bounded reader) and cached struct formats
"""

from .base import SaveCursor, get_struct

__all__ = [
    'SaveCursor',
    'get_struct',
]
