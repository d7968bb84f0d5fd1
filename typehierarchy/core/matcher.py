"""Scores how well a document selector applies to a document.

A selector is a language id string, a ``DocumentFilter``, a filter dict, or a
list of any of those. The score of a list is the best score of its members.
Scores: 10 for an exact match, 5 for a ``"*"`` wildcard, 0 for no match.
"""
import fnmatch
from typing import Any, Dict, Union

from typehierarchy.models.document_model import DocumentFilter, TextDocument

EXACT_MATCH_SCORE = 10
WILDCARD_MATCH_SCORE = 5
NO_MATCH_SCORE = 0

DocumentSelector = Union[str, DocumentFilter, Dict[str, Any], list, tuple]


def score(selector: DocumentSelector, document: TextDocument) -> int:
    """Returns the match strength of ``selector`` for ``document``."""
    if isinstance(selector, (list, tuple)):
        best = NO_MATCH_SCORE
        for member in selector:
            best = max(best, score(member, document))
            if best == EXACT_MATCH_SCORE:
                break
        return best

    if isinstance(selector, str):
        if selector == document.language_id:
            return EXACT_MATCH_SCORE
        if selector == '*':
            return WILDCARD_MATCH_SCORE
        return NO_MATCH_SCORE

    if isinstance(selector, dict):
        selector = DocumentFilter.from_dict(selector)

    if isinstance(selector, DocumentFilter):
        return _score_filter(selector, document)

    return NO_MATCH_SCORE


def _score_filter(document_filter: DocumentFilter, document: TextDocument) -> int:
    result = NO_MATCH_SCORE

    if document_filter.scheme:
        if document_filter.scheme == document.scheme:
            result = EXACT_MATCH_SCORE
        elif document_filter.scheme == '*':
            result = WILDCARD_MATCH_SCORE
        else:
            return NO_MATCH_SCORE

    if document_filter.language:
        if document_filter.language == document.language_id:
            result = EXACT_MATCH_SCORE
        elif document_filter.language == '*':
            result = max(result, WILDCARD_MATCH_SCORE)
        else:
            return NO_MATCH_SCORE

    if document_filter.pattern:
        if document_filter.pattern == '*':
            result = max(result, WILDCARD_MATCH_SCORE)
        elif fnmatch.fnmatchcase(document.fs_path, document_filter.pattern):
            result = EXACT_MATCH_SCORE
        else:
            return NO_MATCH_SCORE

    return result
