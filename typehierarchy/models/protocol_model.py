"""Request shapes of the type hierarchy protocol.

The three requests share the item wire shape defined in ``item_model``. Each
response is a list of items or ``None``.
"""
from dataclasses import dataclass
from typing import Any, Dict

from typehierarchy.models.document_model import Location
from typehierarchy.models.item_model import Position, Range, TypeHierarchyItem

PREPARE_METHOD = 'textDocument/prepareTypeHierarchy'
SUPERTYPES_METHOD = 'typeHierarchy/supertypes'
SUBTYPES_METHOD = 'typeHierarchy/subtypes'


@dataclass(frozen=True)
class TypeHierarchyPrepareParams:
    document_uri: str
    position: Position

    def to_dict(self) -> Dict[str, Any]:
        return {
            'textDocument': {'uri': self.document_uri},
            'position': self.position.to_dict()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TypeHierarchyPrepareParams':
        return cls(
            document_uri=data['textDocument']['uri'],
            position=Position.from_dict(data['position'])
        )

    def to_location(self) -> Location:
        """Empty range at the requested position"""
        return Location(uri=self.document_uri, range=Range(self.position, self.position))


@dataclass(frozen=True)
class TypeHierarchySupertypesParams:
    item: TypeHierarchyItem

    def to_dict(self) -> Dict[str, Any]:
        return {'item': self.item.to_dict()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TypeHierarchySupertypesParams':
        return cls(item=TypeHierarchyItem.from_dict(data['item']))


@dataclass(frozen=True)
class TypeHierarchySubtypesParams:
    item: TypeHierarchyItem

    def to_dict(self) -> Dict[str, Any]:
        return {'item': self.item.to_dict()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TypeHierarchySubtypesParams':
        return cls(item=TypeHierarchyItem.from_dict(data['item']))
