from typing import Any, Dict, List

from typehierarchy.models.item_model import SymbolKind, SymbolTag


class ValidationError(Exception):
    pass


class HierarchyValidator:
    """Validates wire payloads and hierarchy declarations"""

    def validate_item(self, data: Any) -> None:
        """Validate a type hierarchy item in wire shape"""
        errors = self._item_errors(data, "item")
        if errors:
            raise ValidationError("; ".join(errors))

    def validate_location(self, data: Any) -> None:
        """Validate a location in wire shape"""
        errors = []
        if not isinstance(data, dict):
            raise ValidationError(f"Location must be an object, got {type(data).__name__}")

        if not isinstance(data.get('uri'), str) or not data.get('uri'):
            errors.append("Location is missing a uri")
        errors.extend(self._range_errors(data.get('range'), "location range"))

        if errors:
            raise ValidationError("; ".join(errors))

    def validate_declaration(self, data: Any) -> None:
        """Validate a parsed hierarchy declaration file"""
        errors = []
        if not isinstance(data, dict):
            raise ValidationError("Declaration must be a mapping")

        if not data.get('selector'):
            errors.append("Declaration has no selector")

        types = data.get('types')
        if not isinstance(types, list) or not types:
            errors.append("Declaration has no types")
            types = []

        names = [t.get('name') for t in types if isinstance(t, dict)]
        if len(names) != len(set(names)):
            errors.append("Duplicate type names found")

        for index, type_data in enumerate(types):
            label = f"type #{index}"
            if not isinstance(type_data, dict):
                errors.append(f"Invalid {label}: not a mapping")
                continue
            if not type_data.get('name'):
                errors.append(f"Invalid {label}: missing name")
            else:
                label = f"type '{type_data['name']}'"
            kind = type_data.get('kind', 'class')
            if str(kind).upper() not in SymbolKind.__members__:
                errors.append(f"Invalid kind for {label}: {kind}")
            if not type_data.get('uri'):
                errors.append(f"Invalid {label}: missing uri")
            range_errors = self._range_errors(type_data.get('range'), f"{label} range")
            errors.extend(range_errors)
            if 'selection_range' in type_data:
                selection_errors = self._range_errors(type_data['selection_range'],
                                                      f"{label} selection_range")
                errors.extend(selection_errors)
                if not range_errors and not selection_errors and not self._contains(
                        type_data['range'], type_data['selection_range']):
                    errors.append(f"{label} selection_range is not contained in its range")
            # Dangling supertype references are allowed, they resolve to nothing
            supertypes = type_data.get('supertypes', [])
            if not isinstance(supertypes, list):
                errors.append(f"Invalid supertypes for {label}: expected a list")

        if errors:
            raise ValidationError("; ".join(errors))

    def _item_errors(self, data: Any, label: str) -> List[str]:
        if not isinstance(data, dict):
            return [f"{label} must be an object, got {type(data).__name__}"]

        errors = []
        if not isinstance(data.get('name'), str) or not data['name']:
            errors.append(f"{label} is missing a name")
        if not isinstance(data.get('uri'), str) or not data['uri']:
            errors.append(f"{label} is missing a uri")

        kind = data.get('kind')
        if not isinstance(kind, int) or kind not in SymbolKind._value2member_map_:
            errors.append(f"Invalid {label} kind: {kind}")

        tags = data.get('tags')
        if tags is not None:
            if not isinstance(tags, list) or any(
                    t not in SymbolTag._value2member_map_ for t in tags):
                errors.append(f"Invalid {label} tags: {tags}")

        if data.get('detail') is not None and not isinstance(data['detail'], str):
            errors.append(f"Invalid {label} detail: expected a string")

        range_errors = self._range_errors(data.get('range'), f"{label} range")
        selection_errors = self._range_errors(data.get('selectionRange'),
                                              f"{label} selectionRange")
        errors.extend(range_errors)
        errors.extend(selection_errors)

        if not range_errors and not selection_errors:
            if not self._contains(data['range'], data['selectionRange']):
                errors.append(f"{label} selectionRange is not contained in its range")
        return errors

    def _range_errors(self, data: Any, label: str) -> List[str]:
        if not isinstance(data, dict):
            return [f"Invalid {label}: expected an object with start and end"]
        errors = []
        for end in ('start', 'end'):
            position = data.get(end)
            if not isinstance(position, dict) or not all(
                    isinstance(position.get(k), int) and position[k] >= 0
                    for k in ('line', 'character')):
                errors.append(f"Invalid {label} {end} position")
        if not errors and self._key(data['start']) > self._key(data['end']):
            errors.append(f"Invalid {label}: start is after end")
        return errors

    def _contains(self, outer: Dict[str, Any], inner: Dict[str, Any]) -> bool:
        return (self._key(outer['start']) <= self._key(inner['start'])
                and self._key(inner['end']) <= self._key(outer['end']))

    @staticmethod
    def _key(position: Dict[str, int]):
        return (position['line'], position['character'])
