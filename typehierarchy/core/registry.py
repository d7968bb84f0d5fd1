import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

from typehierarchy.core import matcher
from typehierarchy.core.disposable import Disposable
from typehierarchy.models.document_model import TextDocument
from typehierarchy.providers.base import TypeHierarchyProvider

logger = logging.getLogger(__name__)

UNSCORED = -1


@dataclass
class ProviderRegistration:
    selector: Any
    provider: TypeHierarchyProvider
    score: int
    registration_order: int


class TypeHierarchyProviderRegistry:
    """Thread-safe process-wide registry of type hierarchy providers.

    Every feature registering a provider shares this one instance, so all of
    them observe the same priority ordering and the host commands are
    registered exactly once, when the instance is first created.
    """
    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    instance = super().__new__(cls)
                    instance._initialize()
                    cls._instance = instance
        return cls._instance

    def _initialize(self):
        self._mutex = threading.RLock()
        self._clock = 0
        self._entries: List[ProviderRegistration] = []
        self._current_model = None
        self._last_candidate: Optional[Tuple[str, str]] = None
        self.matcher: Callable[[Any, TextDocument], int] = matcher.score

        # Imported here, the dispatcher depends on this module
        from typehierarchy.host.dispatcher import register_commands
        self.dispatcher = register_commands(self)

    def register(self, selector: Any, provider: TypeHierarchyProvider) -> None:
        """Register a provider for documents matching ``selector`` (not de-duplicated)"""
        with self._mutex:
            self._entries.append(ProviderRegistration(
                selector=selector,
                provider=provider,
                score=UNSCORED,
                registration_order=self._clock
            ))
            self._clock += 1
            # The new entry is unscored, force a rescoring pass on next lookup
            self._last_candidate = None
            logger.debug("Registered type hierarchy provider %r (order %d)",
                         provider, self._clock - 1)

    @property
    def current_model(self):
        return self._current_model

    @current_model.setter
    def current_model(self, model) -> None:
        with self._mutex:
            self._current_model = model

    def ordered(self, document: Optional[TextDocument]) -> List[TypeHierarchyProvider]:
        """Providers applicable to ``document``, highest priority first"""
        if document is None:
            return []
        with self._mutex:
            self._update_scores(document)
            return [entry.provider for entry in self._entries if entry.score > 0]

    def registrations(self) -> List[ProviderRegistration]:
        """Snapshot of the registrations in their current order"""
        with self._mutex:
            return list(self._entries)

    def _update_scores(self, document: TextDocument) -> None:
        candidate = (document.uri, document.language_id)
        if self._last_candidate == candidate:
            # nothing has changed
            return
        self._last_candidate = candidate

        for entry in self._entries:
            entry.score = self.matcher(entry.selector, document)

        # Higher score first; ties go to the most recent registration
        self._entries.sort(key=lambda e: (e.score, e.registration_order), reverse=True)

    def clear(self) -> None:
        """Clear all registrations and sessions (for testing)"""
        with self._mutex:
            self._clock = 0
            self._entries.clear()
            self._current_model = None
            self._last_candidate = None
            self.matcher = matcher.score
            self.dispatcher.model_cache.clear()


def register_type_hierarchy_provider(selector: Any, provider: TypeHierarchyProvider) -> Disposable:
    """Register a type hierarchy provider with the shared registry.

    Args:
        selector: Defines the documents this provider is applicable to.
        provider: The provider implementation.

    Returns:
        Disposable: Disposing it does nothing, registrations live for the
        whole process.
    """
    TypeHierarchyProviderRegistry().register(selector, provider)
    return Disposable()
