import asyncio
import os
import unittest
from unittest.mock import AsyncMock, MagicMock, patch
from typehierarchy.core.registry import TypeHierarchyProviderRegistry
from typehierarchy.core.validator import ValidationError
from typehierarchy.host.commands import CommandRegistry, commands
from typehierarchy.host.dispatcher import (
    PREPARE_COMMAND, SUBTYPES_COMMAND, SUPERTYPES_COMMAND, register_commands
)
from typehierarchy.host.workspace import Workspace, workspace
from typehierarchy.models.config_model import DEFAULT_MODEL_CACHE_SIZE, TypeHierarchyConfig
from typehierarchy.models.document_model import Location, TextDocument
from typehierarchy.models.item_model import Position, Range, SymbolKind, TypeHierarchyItem
from typehierarchy.models.protocol_model import TypeHierarchyPrepareParams
from typehierarchy.providers.base import TypeHierarchyProvider

PY_DOC = TextDocument(uri="memory:///zoo/animals.py", language_id="python")
JAVA_DOC = TextDocument(uri="memory:///zoo/Animals.java", language_id="java")


def make_item(name, uri=PY_DOC.uri):
    span = Range(Position(0, 0), Position(3, 0))
    return TypeHierarchyItem(name=name, kind=SymbolKind.CLASS, uri=uri,
                             range=span, selection_range=span, data={'name': name})


def location_of(document, line=1, character=2):
    position = Position(line, character)
    return Location(document.uri, Range(position, position))


def make_provider(roots=None, supertypes=None, subtypes=None):
    provider = MagicMock(spec=TypeHierarchyProvider)
    provider.prepare_type_hierarchy = AsyncMock(return_value=roots)
    provider.provide_type_hierarchy_supertypes = AsyncMock(return_value=supertypes)
    provider.provide_type_hierarchy_subtypes = AsyncMock(return_value=subtypes)
    return provider


class TestTypeHierarchyCommands(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.registry = TypeHierarchyProviderRegistry()
        self.registry.clear()
        self.dispatcher = self.registry.dispatcher
        workspace.add_document(PY_DOC)
        workspace.add_document(JAVA_DOC)

    def tearDown(self):
        self.registry.clear()
        workspace.remove_document(PY_DOC.uri)
        workspace.remove_document(JAVA_DOC.uri)

    async def test_prepare_returns_first_root_only(self):
        roots = [make_item("Dog"), make_item("Cat", uri="memory:///zoo/cats.py"),
                 make_item("Cow", uri="memory:///zoo/cows.py")]
        self.registry.register("python", make_provider(roots=roots))

        result = await self.dispatcher.prepare(location_of(PY_DOC))
        self.assertEqual(result, [roots[0]])

        model = self.dispatcher.model_cache.get(
            "memory:///zoo/animals.pymemory:///zoo/cats.pymemory:///zoo/cows.py")
        self.assertEqual(model.roots, roots)
        self.assertIs(self.registry.current_model, model)

    async def test_prepare_uses_location_start(self):
        provider = make_provider(roots=[make_item("Dog")])
        self.registry.register("python", provider)
        location = Location(PY_DOC.uri, Range(Position(4, 1), Position(6, 0)))

        await self.dispatcher.prepare(location)
        document, position, token = provider.prepare_type_hierarchy.call_args.args
        self.assertEqual(document, PY_DOC)
        self.assertEqual(position, Position(4, 1))
        self.assertFalse(token.is_cancellation_requested)

    async def test_prepare_accepts_wire_location(self):
        self.registry.register("python", make_provider(roots=[make_item("Dog")]))
        result = await commands.execute_command(PREPARE_COMMAND, location_of(PY_DOC).to_dict())
        self.assertEqual([i.name for i in result], ["Dog"])

    async def test_prepare_accepts_prepare_params(self):
        provider = make_provider(roots=[make_item("Dog")])
        self.registry.register("python", provider)
        params = TypeHierarchyPrepareParams(PY_DOC.uri, Position(4, 1))

        result = await commands.execute_command(PREPARE_COMMAND, params)
        self.assertEqual([i.name for i in result], ["Dog"])
        _, position, _ = provider.prepare_type_hierarchy.call_args.args
        self.assertEqual(position, Position(4, 1))

    async def test_prepare_with_non_item_roots(self):
        self.registry.register("python", make_provider(roots=[{"name": "Dog", "uri": "x"}]))
        self.assertEqual(await self.dispatcher.prepare(location_of(PY_DOC)), [])
        self.assertEqual(len(self.dispatcher.model_cache), 0)
        self.assertIsNone(self.registry.current_model)

    async def test_prepare_without_provider(self):
        self.registry.register("java", make_provider(roots=[make_item("Dog")]))
        self.assertEqual(await self.dispatcher.prepare(location_of(PY_DOC)), [])
        self.assertEqual(len(self.dispatcher.model_cache), 0)
        self.assertIsNone(self.registry.current_model)

    async def test_prepare_unknown_document(self):
        provider = make_provider(roots=[make_item("Dog")])
        self.registry.register("*", provider)
        location = Location("memory:///nowhere.py", Range(Position(0, 0), Position(0, 0)))
        self.assertEqual(await self.dispatcher.prepare(location), [])
        provider.prepare_type_hierarchy.assert_not_called()

    async def test_prepare_rejects_malformed_location(self):
        with self.assertRaises(ValidationError):
            await self.dispatcher.prepare({'uri': PY_DOC.uri})

    async def test_cache_keeps_ten_newest_models(self):
        provider = make_provider()
        self.registry.register("python", provider)
        for i in range(11):
            provider.prepare_type_hierarchy.return_value = [make_item("Dog", uri=f"memory:///m{i}.py")]
            await self.dispatcher.prepare(location_of(PY_DOC))
            self.assertLessEqual(len(self.dispatcher.model_cache), 10)

        ids = self.dispatcher.model_cache.ids()
        self.assertEqual(ids, [f"memory:///m{i}.py" for i in range(1, 11)])

    async def test_expansion_without_current_model(self):
        dog = make_item("Dog")
        self.assertEqual(await self.dispatcher.supertypes(dog), [])
        self.assertEqual(await self.dispatcher.subtypes(dog), [])

    async def test_expansion_uses_current_model(self):
        animal, puppy = make_item("Animal"), make_item("Puppy")
        provider = make_provider(roots=[make_item("Dog")], supertypes=[animal], subtypes=[puppy])
        self.registry.register("python", provider)
        [dog] = await self.dispatcher.prepare(location_of(PY_DOC))

        self.assertEqual(await commands.execute_command(SUPERTYPES_COMMAND, dog), [animal])
        self.assertEqual(await commands.execute_command(SUBTYPES_COMMAND, dog), [puppy])

    async def test_session_id_in_item_is_ignored(self):
        java_provider = make_provider(roots=[make_item("Zoo", uri=JAVA_DOC.uri)],
                                      supertypes=[make_item("Object", uri=JAVA_DOC.uri)])
        python_provider = make_provider(roots=[make_item("Dog")], supertypes=[make_item("Animal")])
        self.registry.register("java", java_provider)
        self.registry.register("python", python_provider)

        await self.dispatcher.prepare(location_of(JAVA_DOC))
        [dog] = await self.dispatcher.prepare(location_of(PY_DOC))

        wire = dict(make_item("Zoo", uri=JAVA_DOC.uri).to_dict(), _sessionId=JAVA_DOC.uri)
        result = await self.dispatcher.supertypes(wire)
        self.assertEqual([i.name for i in result], ["Animal"])
        java_provider.provide_type_hierarchy_supertypes.assert_not_called()
        passed_item = python_provider.provide_type_hierarchy_supertypes.call_args.args[0]
        self.assertEqual(passed_item.name, "Zoo")

    async def test_expansion_rejects_malformed_item(self):
        self.registry.register("python", make_provider(roots=[make_item("Dog")]))
        await self.dispatcher.prepare(location_of(PY_DOC))
        with self.assertRaises(ValidationError):
            await self.dispatcher.subtypes({'name': 'Dog'})

    async def test_provider_failure_returns_empty(self):
        provider = make_provider(roots=[make_item("Dog")])
        provider.provide_type_hierarchy_supertypes.side_effect = RuntimeError("boom")
        self.registry.register("python", provider)
        [dog] = await self.dispatcher.prepare(location_of(PY_DOC))
        self.assertEqual(await self.dispatcher.supertypes(dog), [])

    async def test_last_completed_prepare_becomes_current(self):
        release = asyncio.Event()

        async def slow_prepare(document, position, token):
            await release.wait()
            return [make_item("Zoo", uri=JAVA_DOC.uri)]

        slow = make_provider(supertypes=[make_item("Object", uri=JAVA_DOC.uri)])
        slow.prepare_type_hierarchy.side_effect = slow_prepare
        fast = make_provider(roots=[make_item("Dog")], supertypes=[make_item("Animal")])
        self.registry.register("java", slow)
        self.registry.register("python", fast)

        # P1 is issued first but completes second
        first = asyncio.create_task(self.dispatcher.prepare(location_of(JAVA_DOC)))
        await asyncio.sleep(0)
        await self.dispatcher.prepare(location_of(PY_DOC))
        self.assertEqual(self.registry.current_model.root.name, "Dog")

        release.set()
        await first
        self.assertEqual(self.registry.current_model.root.name, "Zoo")

        result = await self.dispatcher.supertypes(make_item("Dog"))
        self.assertEqual([i.name for i in result], ["Object"])
        fast.provide_type_hierarchy_supertypes.assert_not_called()


class TestRegisterCommands(unittest.TestCase):

    def test_environment_config_not_read(self):
        broken = {"TYPEHIERARCHY_MODEL_CACHE_SIZE": "ten",
                  "TYPEHIERARCHY_CONFIG": "/nowhere/typehierarchy.yml"}
        command_registry = CommandRegistry()
        with patch.dict(os.environ, broken):
            dispatcher = register_commands(MagicMock(), command_registry, Workspace())

        self.assertEqual(dispatcher.model_cache.max_size, DEFAULT_MODEL_CACHE_SIZE)
        for command in (PREPARE_COMMAND, SUPERTYPES_COMMAND, SUBTYPES_COMMAND):
            self.assertTrue(command_registry.has_command(command))

    def test_configure_applies_cache_size(self):
        dispatcher = register_commands(MagicMock(), CommandRegistry(), Workspace())
        dispatcher.configure(TypeHierarchyConfig(model_cache_size=3))
        self.assertEqual(dispatcher.model_cache.max_size, 3)


if __name__ == '__main__':
    unittest.main()
