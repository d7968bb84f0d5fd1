import logging
from typing import Any, List, Optional

from typehierarchy.core.cache import ModelCache
from typehierarchy.core.cancellation import NONE_CANCELLATION_TOKEN
from typehierarchy.core.model import TypeHierarchyModel
from typehierarchy.core.validator import HierarchyValidator
from typehierarchy.host.commands import CommandRegistry, commands
from typehierarchy.host.workspace import DocumentNotFoundError, Workspace, workspace
from typehierarchy.models.config_model import TypeHierarchyConfig
from typehierarchy.models.document_model import Location
from typehierarchy.models.item_model import TypeHierarchyItem
from typehierarchy.models.protocol_model import TypeHierarchyPrepareParams

logger = logging.getLogger(__name__)

PREPARE_COMMAND = 'typeHierarchy.prepare'
SUPERTYPES_COMMAND = 'typeHierarchy.supertypes'
SUBTYPES_COMMAND = 'typeHierarchy.subtypes'


class TypeHierarchyCommands:
    """Host-facing prepare/supertypes/subtypes verbs.

    Every command runs with a token that is never cancelled. Expansion always
    targets the registry's current model, i.e. the model of the most recently
    completed prepare. Any session information carried by the item argument is
    ignored, so interleaved sessions cannot be told apart here even though
    ``model_cache`` keeps them by id.
    """

    def __init__(self, registry, workspace: Workspace,
                 config: Optional[TypeHierarchyConfig] = None):
        self.registry = registry
        self.workspace = workspace
        self.validator = HierarchyValidator()
        self.model_cache = ModelCache((config or TypeHierarchyConfig()).model_cache_size)

    def configure(self, config: TypeHierarchyConfig) -> None:
        """Apply a new configuration, dropping cached models"""
        self.model_cache = ModelCache(config.model_cache_size)

    async def prepare(self, location: Any) -> List[TypeHierarchyItem]:
        location = self._to_location(location)
        try:
            document = await self.workspace.open_text_document(location.uri)
        except DocumentNotFoundError as e:
            logger.warning("Type hierarchy prepare skipped: %s", e)
            return []

        model = await TypeHierarchyModel.create(
            document, location.range.start, NONE_CANCELLATION_TOKEN)
        if not model:
            return []

        self.model_cache.set(model)
        # Extra roots stay on the model, the host only sees the first one
        return [model.root]

    async def supertypes(self, item: Any) -> List[TypeHierarchyItem]:
        model = self.registry.current_model
        if not model:
            return []
        return await model.resolve_supertypes(self._to_item(item), NONE_CANCELLATION_TOKEN)

    async def subtypes(self, item: Any) -> List[TypeHierarchyItem]:
        model = self.registry.current_model
        if not model:
            return []
        return await model.resolve_subtypes(self._to_item(item), NONE_CANCELLATION_TOKEN)

    def _to_location(self, location: Any) -> Location:
        if isinstance(location, Location):
            return location
        if isinstance(location, TypeHierarchyPrepareParams):
            return location.to_location()
        self.validator.validate_location(location)
        return Location.from_dict(location)

    def _to_item(self, item: Any) -> TypeHierarchyItem:
        if isinstance(item, TypeHierarchyItem):
            return item
        self.validator.validate_item(item)
        return TypeHierarchyItem.from_dict(item)


def register_commands(registry, command_registry: CommandRegistry = commands,
                      host_workspace: Workspace = workspace) -> TypeHierarchyCommands:
    """Registers the three type hierarchy commands with the host.

    The dispatcher starts on the default configuration. Loaded configuration is
    applied later through ``TypeHierarchyCommands.configure``, so registering a
    provider never reads files or the environment.
    """
    dispatcher = TypeHierarchyCommands(registry, host_workspace)
    command_registry.register_command(PREPARE_COMMAND, dispatcher.prepare)
    command_registry.register_command(SUPERTYPES_COMMAND, dispatcher.supertypes)
    command_registry.register_command(SUBTYPES_COMMAND, dispatcher.subtypes)
    logger.info("Registered type hierarchy commands")
    return dispatcher
