from pathlib import Path

import pytest

from typehierarchy.core.registry import TypeHierarchyProviderRegistry

ANIMALS_PY = """\
class Animal:
    pass


class Dog(Animal):
    pass


class Puppy(Dog):
    pass
"""

DECLARATION_YML = """\
selector: {{language: python, scheme: file}}
types:
  - name: Animal
    uri: {uri}
    range: {{start: {{line: 0, character: 0}}, end: {{line: 1, character: 8}}}}
    selection_range: {{start: {{line: 0, character: 6}}, end: {{line: 0, character: 12}}}}
  - name: Dog
    uri: {uri}
    range: {{start: {{line: 4, character: 0}}, end: {{line: 5, character: 8}}}}
    selection_range: {{start: {{line: 4, character: 6}}, end: {{line: 4, character: 9}}}}
    supertypes: [Animal]
  - name: Puppy
    uri: {uri}
    range: {{start: {{line: 8, character: 0}}, end: {{line: 9, character: 8}}}}
    supertypes: [Dog]
"""


@pytest.fixture
def registry():
    """The shared registry, emptied before and after the test."""
    registry = TypeHierarchyProviderRegistry()
    registry.clear()
    yield registry
    registry.clear()


@pytest.fixture
def zoo(tmp_path):
    """A source file on disk plus a hierarchy directory declaring its types."""
    source = (tmp_path / "animals.py").resolve()
    source.write_text(ANIMALS_PY)
    hierarchy_dir = tmp_path / "hierarchy"
    hierarchy_dir.mkdir()
    (hierarchy_dir / "animals.yml").write_text(DECLARATION_YML.format(uri=source.as_uri()))
    return {"source": source, "hierarchy_dir": hierarchy_dir}


@pytest.fixture(scope="session", name="project_root")
def fixture_project_root():
    """Return the root path of the project."""
    return Path(__file__).parent.parent.resolve()
