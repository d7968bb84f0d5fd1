from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Optional, Tuple


class SymbolKind(IntEnum):
    FILE = 1
    MODULE = 2
    NAMESPACE = 3
    PACKAGE = 4
    CLASS = 5
    METHOD = 6
    PROPERTY = 7
    FIELD = 8
    CONSTRUCTOR = 9
    ENUM = 10
    INTERFACE = 11
    FUNCTION = 12
    VARIABLE = 13
    CONSTANT = 14
    STRING = 15
    NUMBER = 16
    BOOLEAN = 17
    ARRAY = 18
    OBJECT = 19
    KEY = 20
    NULL = 21
    ENUM_MEMBER = 22
    STRUCT = 23
    EVENT = 24
    OPERATOR = 25
    TYPE_PARAMETER = 26


class SymbolTag(IntEnum):
    DEPRECATED = 1


@dataclass(frozen=True, order=True)
class Position:
    """Zero-based line/character offset in a document"""
    line: int
    character: int

    def to_dict(self) -> Dict[str, int]:
        return {'line': self.line, 'character': self.character}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Position':
        return cls(line=int(data['line']), character=int(data['character']))


@dataclass(frozen=True)
class Range:
    start: Position
    end: Position

    def contains(self, other) -> bool:
        """True when a Position or a whole Range lies inside this range."""
        if isinstance(other, Range):
            return self.contains(other.start) and self.contains(other.end)
        return self.start <= other <= self.end

    def to_dict(self) -> Dict[str, Dict[str, int]]:
        return {'start': self.start.to_dict(), 'end': self.end.to_dict()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Range':
        return cls(
            start=Position.from_dict(data['start']),
            end=Position.from_dict(data['end'])
        )


@dataclass(frozen=True)
class TypeHierarchyItem:
    """Immutable type hierarchy item as returned by a provider.

    Attributes:
        name: The name of the type.
        kind: The symbol category of the type.
        uri: The resource identifier of the document declaring the type.
        range: The span enclosing the whole declaration.
        selection_range: The span to reveal when the item is picked, e.g. the
            type name. Must be contained by ``range``.
        tags: Optional modifiers of the item.
        detail: Optional extra text, e.g. a qualified name.
        data: Opaque payload preserved between a prepare call and later
            supertypes/subtypes calls for the same item.
    """
    name: str
    kind: SymbolKind
    uri: str
    range: Range
    selection_range: Range
    tags: Optional[Tuple[SymbolTag, ...]] = None
    detail: Optional[str] = None
    # Excluded from equality/hash so arbitrary JSON payloads are allowed
    data: Any = field(default=None, compare=False, hash=False)

    def to_dict(self) -> Dict[str, Any]:
        """Serializes the item to its wire shape."""
        result = {
            'name': self.name,
            'kind': int(self.kind),
            'uri': self.uri,
            'range': self.range.to_dict(),
            'selectionRange': self.selection_range.to_dict(),
        }
        if self.tags is not None:
            result['tags'] = [int(tag) for tag in self.tags]
        if self.detail is not None:
            result['detail'] = self.detail
        if self.data is not None:
            result['data'] = self.data
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TypeHierarchyItem':
        """Builds an item from its wire shape.

        Raises KeyError/ValueError/TypeError on malformed input; callers that
        accept untrusted input should go through ``HierarchyValidator``.
        """
        tags = data.get('tags')
        return cls(
            name=data['name'],
            kind=SymbolKind(data['kind']),
            uri=data['uri'],
            range=Range.from_dict(data['range']),
            selection_range=Range.from_dict(data['selectionRange']),
            tags=tuple(SymbolTag(t) for t in tags) if tags is not None else None,
            detail=data.get('detail'),
            data=data.get('data')
        )
