import inspect
import logging
from typing import Any, Callable, Dict, List

from typehierarchy.core.disposable import Disposable

logger = logging.getLogger(__name__)


class CommandError(Exception):
    pass


class CommandRegistry:
    """Table of host commands invoked by id"""

    def __init__(self):
        self._commands: Dict[str, Callable[..., Any]] = {}

    def register_command(self, command_id: str, handler: Callable[..., Any]) -> Disposable:
        if command_id in self._commands:
            raise CommandError(f"Command already registered: {command_id}")
        self._commands[command_id] = handler
        logger.debug("Registered command %s", command_id)
        return Disposable(lambda: self._commands.pop(command_id, None))

    def has_command(self, command_id: str) -> bool:
        return command_id in self._commands

    def list_commands(self) -> List[str]:
        return sorted(self._commands)

    async def execute_command(self, command_id: str, *args: Any) -> Any:
        handler = self._commands.get(command_id)
        if handler is None:
            raise CommandError(f"Command not found: {command_id}")
        result = handler(*args)
        if inspect.isawaitable(result):
            result = await result
        return result


commands = CommandRegistry()
