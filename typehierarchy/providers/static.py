import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from typehierarchy.core.cancellation import CancellationToken
from typehierarchy.models.document_model import TextDocument
from typehierarchy.models.item_model import Position, TypeHierarchyItem
from typehierarchy.providers.base import TypeHierarchyProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeclaredType:
    """A type and the names of its direct supertypes"""
    item: TypeHierarchyItem
    supertypes: Tuple[str, ...] = ()

    @property
    def name(self) -> str:
        return self.item.name


class StaticHierarchyProvider(TypeHierarchyProvider):
    """Answers from a fixed table of declared types.

    Items handed out carry ``{"name": <type name>}`` as their data so later
    supertypes/subtypes requests can find them again.
    """

    def __init__(self, declared_types: List[DeclaredType], name: str = "static"):
        self.name = name
        self._types: Dict[str, DeclaredType] = {}
        for declared in declared_types:
            data = {'name': declared.name}
            item = declared.item
            if item.data != data:
                item = TypeHierarchyItem(
                    name=item.name,
                    kind=item.kind,
                    uri=item.uri,
                    range=item.range,
                    selection_range=item.selection_range,
                    tags=item.tags,
                    detail=item.detail,
                    data=data
                )
            self._types[declared.name] = DeclaredType(item, tuple(declared.supertypes))

    def prepare_type_hierarchy(self, document: TextDocument, position: Position,
                               token: CancellationToken) -> List[TypeHierarchyItem]:
        """Declared types of ``document`` enclosing ``position``, innermost first"""
        candidates = [
            t.item for t in self._types.values()
            if t.item.uri == document.uri and t.item.range.contains(position)
        ]
        # Innermost means the latest start, then the earliest end
        candidates.sort(key=lambda i: (i.range.start, _negated(i.range.end)), reverse=True)
        return candidates

    def provide_type_hierarchy_supertypes(self, item: TypeHierarchyItem,
                                          token: CancellationToken) -> List[TypeHierarchyItem]:
        declared = self._lookup(item)
        if not declared:
            return []
        return [self._types[name].item for name in declared.supertypes if name in self._types]

    def provide_type_hierarchy_subtypes(self, item: TypeHierarchyItem,
                                        token: CancellationToken) -> List[TypeHierarchyItem]:
        declared = self._lookup(item)
        if not declared:
            return []
        return [t.item for t in self._types.values() if declared.name in t.supertypes]

    def _lookup(self, item: TypeHierarchyItem) -> Optional[DeclaredType]:
        name = item.data.get('name') if isinstance(item.data, dict) else None
        declared = self._types.get(name or item.name)
        if not declared:
            logger.debug("No declared type for %r in %s", item.name, self.name)
        return declared

    def __repr__(self) -> str:
        return f"StaticHierarchyProvider(name={self.name!r}, types={len(self._types)})"


def _negated(position: Position) -> Tuple[int, int]:
    return (-position.line, -position.character)
