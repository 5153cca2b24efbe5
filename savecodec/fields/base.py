"""
Codec base class.

A codec knows how one kind of field is laid out on disk. Schemas are trees of
codec instances; decoding and encoding walk that tree recursively.
"""

from typing import Any

from ..parsers.base import SaveCursor
from ..utils.binary import SaveWriter


class Codec:
    """
    Base class for field codecs.

    Subclasses implement decode/encode and set:
    - min_size: smallest number of bytes an encoded value can occupy
    - type_tag: property type name used by the tagged backend
    """

    min_size: int = 0
    type_tag: str = ""

    def decode(self, cursor: SaveCursor) -> Any:
        raise NotImplementedError

    def encode(self, value: Any, writer: SaveWriter):
        raise NotImplementedError

    def accept(self, visitor, value: Any, path: list):
        """Dispatch to the visitor method for this kind of codec."""
        return visitor.visit_leaf(self, value, path)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
