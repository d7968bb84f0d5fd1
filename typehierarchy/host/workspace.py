import asyncio
import logging
from pathlib import Path
from typing import Dict, Optional
from urllib.parse import urlparse

from typehierarchy.models.document_model import TextDocument

logger = logging.getLogger(__name__)

# Language ids by file extension, for documents read from disk
LANGUAGE_IDS = {
    ".py": "python",
    ".pyi": "python",
    ".java": "java",
    ".kt": "kotlin",
    ".scala": "scala",
    ".cs": "csharp",
    ".ts": "typescript",
    ".tsx": "typescriptreact",
    ".js": "javascript",
    ".go": "go",
    ".rs": "rust",
    ".cpp": "cpp",
    ".hpp": "cpp",
    ".c": "c",
    ".h": "c",
    ".swift": "swift",
}
PLAINTEXT_LANGUAGE_ID = "plaintext"


class DocumentNotFoundError(Exception):
    pass


class Workspace:
    """Resolves resource identifiers to opened documents.

    Documents added with ``add_document`` take precedence; other ``file://``
    URIs are read from disk on every open and are not kept.
    """

    def __init__(self):
        self._documents: Dict[str, TextDocument] = {}

    def add_document(self, document: TextDocument) -> None:
        self._documents[document.uri] = document

    def remove_document(self, uri: str) -> None:
        self._documents.pop(uri, None)

    def get_document(self, uri: str) -> Optional[TextDocument]:
        return self._documents.get(uri)

    async def open_text_document(self, uri: str) -> TextDocument:
        """Returns the document at ``uri``.

        Raises:
            DocumentNotFoundError: If the uri is unknown and cannot be read.
        """
        document = self._documents.get(uri)
        if document is not None:
            return document

        parsed = urlparse(uri)
        if parsed.scheme != "file":
            raise DocumentNotFoundError(f"Cannot open document: {uri}")

        path = Path(TextDocument(uri=uri, language_id="").fs_path)
        try:
            text = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentNotFoundError(f"Cannot open document: {uri}: {e}") from e

        document = TextDocument(
            uri=uri,
            language_id=LANGUAGE_IDS.get(path.suffix.lower(), PLAINTEXT_LANGUAGE_ID),
            text=text
        )
        logger.debug("Opened %s as %s", uri, document.language_id)
        return document


workspace = Workspace()
