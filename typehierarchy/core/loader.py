import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from typehierarchy.core.cache import DeclarationCache
from typehierarchy.core.registry import TypeHierarchyProviderRegistry
from typehierarchy.core.validator import HierarchyValidator, ValidationError
from typehierarchy.models.item_model import Range, SymbolKind, SymbolTag, TypeHierarchyItem
from typehierarchy.providers.static import DeclaredType, StaticHierarchyProvider

logger = logging.getLogger(__name__)


class HierarchyLoader:
    """Loads hierarchy declaration files and registers a provider per file.

    A declaration file is YAML with a ``selector`` (language id, filter
    mapping or list of those) and a list of ``types``::

        selector: {language: python}
        types:
          - name: Dog
            kind: class
            uri: file:///zoo/animals.py
            range: {start: {line: 4, character: 0}, end: {line: 9, character: 0}}
            supertypes: [Animal]
    """

    def __init__(self, hierarchy_dir: Path, enable_cache: bool = True,
                 strict_mode: bool = True):
        self.hierarchy_dir = hierarchy_dir
        self.registry = TypeHierarchyProviderRegistry()
        self.validator = HierarchyValidator()
        self.strict_mode = strict_mode
        self.cache = DeclarationCache() if enable_cache else None

    def load_all(self) -> List[StaticHierarchyProvider]:
        """Load all declarations from the hierarchy directory"""
        if not self.hierarchy_dir.exists():
            logger.warning("Hierarchy directory %s does not exist", self.hierarchy_dir)
            return []

        providers = []
        for yml_file in sorted(self.hierarchy_dir.glob("*.yml")):
            try:
                providers.append(self.load_file(yml_file))
            except (ValidationError, yaml.YAMLError) as e:
                if self.strict_mode:
                    raise
                logger.warning("Skipping invalid hierarchy file %s: %s", yml_file, e)
        return providers

    def load_file(self, filepath: Path) -> StaticHierarchyProvider:
        """Load a single declaration file and register its provider"""
        content = filepath.read_text(encoding="utf-8")

        data = self.cache.get(content) if self.cache else None
        if data is None:
            data = yaml.safe_load(content)
            try:
                self.validator.validate_declaration(data)
            except ValidationError as e:
                raise ValidationError(f"{filepath}: {e}") from e
            if self.cache:
                self.cache.set(content, data)

        provider = StaticHierarchyProvider(
            [self._parse_type(t) for t in data['types']],
            name=filepath.stem
        )
        self.registry.register(data['selector'], provider)
        logger.info("Registered %d declared types from %s", len(data['types']), filepath)
        return provider

    def _parse_type(self, type_data: Dict[str, Any]) -> DeclaredType:
        """Parse one declared type"""
        type_range = Range.from_dict(type_data['range'])
        selection = type_data.get('selection_range')
        tags = (SymbolTag.DEPRECATED,) if type_data.get('deprecated') else None
        item = TypeHierarchyItem(
            name=type_data['name'],
            kind=SymbolKind[str(type_data.get('kind', 'class')).upper()],
            uri=type_data['uri'],
            range=type_range,
            selection_range=Range.from_dict(selection) if selection else type_range,
            tags=tags,
            detail=type_data.get('detail')
        )
        return DeclaredType(item, tuple(type_data.get('supertypes', [])))


def load_hierarchies(hierarchy_dir: Optional[Path], strict_mode: bool = True) -> List[StaticHierarchyProvider]:
    if hierarchy_dir is None:
        return []
    return HierarchyLoader(hierarchy_dir, strict_mode=strict_mode).load_all()
