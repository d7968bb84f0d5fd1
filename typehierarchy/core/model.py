import inspect
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from typehierarchy.core.cancellation import CancellationToken
from typehierarchy.core.registry import TypeHierarchyProviderRegistry
from typehierarchy.models.document_model import TextDocument
from typehierarchy.models.item_model import Position, TypeHierarchyItem
from typehierarchy.providers.base import ProviderResult, TypeHierarchyProvider

logger = logging.getLogger(__name__)


class ExpansionStatus(Enum):
    OK = "ok"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass(frozen=True)
class ExpansionResult:
    """Outcome of a supertypes/subtypes request before it reaches the host"""
    status: ExpansionStatus
    items: List[TypeHierarchyItem] = field(default_factory=list)
    error: Optional[BaseException] = None


async def _settle(result: ProviderResult):
    if inspect.isawaitable(result):
        return await result
    return result


def _as_items(result) -> List[TypeHierarchyItem]:
    """Normalizes a provider answer.

    Anything but a non-empty list/tuple of ``TypeHierarchyItem`` is empty. A
    list holding any other element is malformed as a whole.
    """
    if not isinstance(result, (list, tuple)) or len(result) == 0:
        return []
    if not all(isinstance(item, TypeHierarchyItem) for item in result):
        logger.warning("Discarding malformed type hierarchy result: %r", result)
        return []
    return list(result)


class TypeHierarchyModel:
    """One browsing session: a provider and the root items it prepared.

    Models are only built by ``create`` and never change afterwards. Expanding
    an item returns a fresh list and leaves ``roots`` untouched.
    """

    def __init__(self, model_id: str, provider: TypeHierarchyProvider,
                 roots: Sequence[TypeHierarchyItem]):
        if not roots:
            raise ValueError("A type hierarchy model needs at least one root item")
        self._id = model_id
        self._provider = provider
        self._roots = tuple(roots)

    @property
    def id(self) -> str:
        return self._id

    @property
    def provider(self) -> TypeHierarchyProvider:
        return self._provider

    @property
    def roots(self) -> List[TypeHierarchyItem]:
        return list(self._roots)

    @property
    def root(self) -> TypeHierarchyItem:
        return self._roots[0]

    @classmethod
    async def create(cls, document: TextDocument, position: Position,
                     token: CancellationToken) -> Optional['TypeHierarchyModel']:
        """Prepare a new session with the highest-priority provider for ``document``.

        Lower-priority providers are never consulted. Returns None when no
        provider applies, when the provider has nothing at ``position``, or when
        it fails. On success the new model becomes the registry's current model.
        """
        registry = TypeHierarchyProviderRegistry()
        providers = registry.ordered(document)
        if not providers:
            return None
        provider = providers[0]

        try:
            roots = _as_items(await _settle(
                provider.prepare_type_hierarchy(document, position, token)))
        except Exception as e:
            logger.warning("Type hierarchy provider %r failed to prepare %s: %s",
                           provider, document.uri, e, exc_info=True)
            return None
        if not roots:
            return None

        # Ids are not unique, identical root sets alias each other in the cache
        model_id = "".join(root.uri for root in roots)
        model = cls(model_id, provider, roots)
        registry.current_model = model
        return model

    async def expand_supertypes(self, item: TypeHierarchyItem,
                                token: CancellationToken) -> ExpansionResult:
        return await self._expand(
            self._provider.provide_type_hierarchy_supertypes, item, token)

    async def expand_subtypes(self, item: TypeHierarchyItem,
                              token: CancellationToken) -> ExpansionResult:
        return await self._expand(
            self._provider.provide_type_hierarchy_subtypes, item, token)

    async def resolve_supertypes(self, item: TypeHierarchyItem,
                                 token: CancellationToken) -> List[TypeHierarchyItem]:
        return (await self.expand_supertypes(item, token)).items

    async def resolve_subtypes(self, item: TypeHierarchyItem,
                               token: CancellationToken) -> List[TypeHierarchyItem]:
        return (await self.expand_subtypes(item, token)).items

    async def _expand(self, operation, item: TypeHierarchyItem,
                      token: CancellationToken) -> ExpansionResult:
        try:
            result = await _settle(operation(item, token))
        except Exception as e:
            logger.warning("Type hierarchy provider %r failed to expand %r: %s",
                           self._provider, item.name, e, exc_info=True)
            return ExpansionResult(ExpansionStatus.FAILED, error=e)

        items = _as_items(result)
        if not items:
            return ExpansionResult(ExpansionStatus.EMPTY)
        return ExpansionResult(ExpansionStatus.OK, items=items)

    def __repr__(self) -> str:
        return f"TypeHierarchyModel(id={self._id!r}, root={self.root.name!r})"
