from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import unquote, urlparse

from typehierarchy.models.item_model import Range


@dataclass(frozen=True)
class TextDocument:
    """An opened document as seen by providers"""
    uri: str
    language_id: str
    text: str = ""
    version: int = 1

    @property
    def scheme(self) -> str:
        return urlparse(self.uri).scheme

    @property
    def fs_path(self) -> str:
        return unquote(urlparse(self.uri).path)


@dataclass(frozen=True)
class DocumentFilter:
    """Describes documents by language id, uri scheme and/or a glob pattern.

    Any field left as None is not checked. ``"*"`` matches everything with a
    lower score than an exact value.
    """
    language: Optional[str] = None
    scheme: Optional[str] = None
    pattern: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DocumentFilter':
        return cls(
            language=data.get('language'),
            scheme=data.get('scheme'),
            pattern=data.get('pattern')
        )


@dataclass(frozen=True)
class Location:
    uri: str
    range: Range

    def to_dict(self) -> Dict[str, Any]:
        return {'uri': self.uri, 'range': self.range.to_dict()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Location':
        return cls(uri=data['uri'], range=Range.from_dict(data['range']))
