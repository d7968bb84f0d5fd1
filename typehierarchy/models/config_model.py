from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_MODEL_CACHE_SIZE = 10


@dataclass
class TypeHierarchyConfig:
    """Represents the configuration for the type hierarchy service.

    Attributes:
        version: The version of the configuration format.
        model_cache_size: The maximum number of hierarchy models kept in the
            model cache. Older models are evicted first.
        log_level: The name of the logging level used by ``configure_logging``.
        hierarchy_dir: Directory holding ``*.yml`` hierarchy declarations to
            load at startup. If None, no declarations are loaded.
        strict_mode: Whether invalid declaration files abort loading instead
            of being skipped with a warning.
    """
    version: str = "1.0"
    model_cache_size: int = DEFAULT_MODEL_CACHE_SIZE
    log_level: str = "INFO"
    hierarchy_dir: Optional[Path] = None
    strict_mode: bool = True
