"""
Aggregate traversal.

Walks a decoded value alongside the schema codec that describes it. Each codec
kind dispatches to one visitor method through Codec.accept, so a visitor only
overrides the kinds it cares about. Used by the tagged property encoder and
by field path listing.
"""

from typing import Any, Iterator, List, Tuple

from ..errors import SaveCodecError, format_path


class AggregateVisitor:
    """
    Base visitor. The default methods recurse into children and do nothing
    at leaves. Child visits made through visit_child are tagged with their
    path component if they raise.
    """

    def visit(self, codec, value: Any, path: List[str] = None):
        return codec.accept(self, value, path or [])

    def visit_child(self, part: str, codec, value: Any, path: List[str]):
        try:
            return codec.accept(self, value, path + [part])
        except SaveCodecError as e:
            e.add_path(part)
            raise

    def visit_leaf(self, codec, value, path):
        pass

    def visit_record(self, codec, value, path):
        for name, field in codec.fields:
            if name in value:
                self.visit_child(name, field, value[name], path)

    def visit_sequence(self, codec, value, path):
        for i, item in enumerate(value):
            self.visit_child(f"[{i}]", codec.element, item, path)

    def visit_map(self, codec, value, path):
        for key, item in value.items():
            self.visit_child(f"[{key!r}]", codec.value, item, path)

    def visit_variant(self, codec, value, path):
        if isinstance(value, tuple) and value[0] in codec.payloads:
            member, payload = value
            self.visit_child(member.name, codec.payloads[member], payload, path)
        else:
            self.visit_leaf(codec, value, path)


class FieldCollector(AggregateVisitor):
    """Collects (path, value) for every leaf."""

    def __init__(self):
        self.fields: List[Tuple[str, Any]] = []

    def visit_leaf(self, codec, value, path):
        self.fields.append((format_path(path), value))


def iter_fields(codec, value: Any) -> Iterator[Tuple[str, Any]]:
    """
    Yield (path, leaf value) pairs in declaration order.

    Example:
        for path, value in iter_fields(ME3_GALAXY_MAP, save.body["galaxy_map"]):
            print(path, value)   # planets[0].id 12 ...
    """
    collector = FieldCollector()
    collector.visit(codec, value)
    return iter(collector.fields)
