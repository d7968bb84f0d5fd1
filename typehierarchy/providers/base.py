from abc import ABC, abstractmethod
from typing import Awaitable, List, Optional, Union

from typehierarchy.core.cancellation import CancellationToken
from typehierarchy.models.document_model import TextDocument
from typehierarchy.models.item_model import Position, TypeHierarchyItem

# A provider may answer directly or with an awaitable; None means "no result"
ProviderResult = Union[
    Optional[List[TypeHierarchyItem]],
    Awaitable[Optional[List[TypeHierarchyItem]]],
]


class TypeHierarchyProvider(ABC):
    """Answers type hierarchy queries for a class of documents"""

    @abstractmethod
    def prepare_type_hierarchy(
        self,
        document: TextDocument,
        position: Position,
        token: CancellationToken
    ) -> ProviderResult:
        """Return the items denoted by ``position`` in ``document``.

        The items are used as entries into the type graph. Return None or an
        empty list when there is no type at the given location.
        """

    @abstractmethod
    def provide_type_hierarchy_supertypes(
        self,
        item: TypeHierarchyItem,
        token: CancellationToken
    ) -> ProviderResult:
        """Return the types ``item`` derives from or implements."""

    @abstractmethod
    def provide_type_hierarchy_subtypes(
        self,
        item: TypeHierarchyItem,
        token: CancellationToken
    ) -> ProviderResult:
        """Return the types deriving from or implementing ``item``."""
