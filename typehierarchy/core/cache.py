import hashlib
import logging
from collections import OrderedDict
from typing import Any, Dict, List, Optional

from typehierarchy.models.config_model import DEFAULT_MODEL_CACHE_SIZE

logger = logging.getLogger(__name__)


class ModelCache:
    """Bounded store of hierarchy models keyed by model id.

    Eviction is first-in-first-out by insertion order. Reading a model does not
    refresh it, and storing a model under an id that is already present
    replaces the model but keeps the first insertion slot.
    """

    def __init__(self, max_size: int = DEFAULT_MODEL_CACHE_SIZE):
        if max_size < 1:
            raise ValueError(f"Model cache size must be positive, got {max_size}")
        self.max_size = max_size
        self._models: OrderedDict[str, Any] = OrderedDict()

    def set(self, model) -> None:
        """Store a model and evict the oldest entries beyond capacity"""
        self._models[model.id] = model
        while len(self._models) > self.max_size:
            evicted_id, _ = self._models.popitem(last=False)
            logger.debug("Evicted hierarchy model %r from cache", evicted_id)

    def get(self, model_id: str) -> Optional[Any]:
        return self._models.get(model_id)

    def ids(self) -> List[str]:
        """Model ids, oldest first"""
        return list(self._models.keys())

    def clear(self) -> None:
        self._models.clear()

    def __contains__(self, model_id: str) -> bool:
        return model_id in self._models

    def __len__(self) -> int:
        return len(self._models)


class DeclarationCache:
    """In-memory LRU of parsed hierarchy declarations keyed by content hash"""

    def __init__(self, max_size: int = 128):
        self.max_size = max_size
        self._memory_cache: OrderedDict[str, Dict[str, Any]] = OrderedDict()

    def _get_cache_key(self, content: str) -> str:
        """Generate deterministic cache key"""
        return hashlib.sha256(content.encode()).hexdigest()

    def get(self, content: str) -> Optional[Dict[str, Any]]:
        cache_key = self._get_cache_key(content)
        if cache_key not in self._memory_cache:
            return None
        self._memory_cache.move_to_end(cache_key)
        return self._memory_cache[cache_key]

    def set(self, content: str, value: Dict[str, Any]) -> None:
        cache_key = self._get_cache_key(content)
        self._memory_cache[cache_key] = value
        self._memory_cache.move_to_end(cache_key)
        if len(self._memory_cache) > self.max_size:
            self._memory_cache.popitem(last=False)

    def invalidate(self, content: str) -> None:
        self._memory_cache.pop(self._get_cache_key(content), None)

    def clear_all(self) -> None:
        self._memory_cache.clear()
