"""
Identifier Rules
================

Input and output ids are how application logic refers to a control. They
must be simple strings made of letters, digits and underscores, and must be
unique within a page.
"""

import re
from typing import Dict, List, Tuple, Union

from widgetry.core.exceptions import DuplicateIdError, InvalidIdError
from widgetry.core.tags import Tag, TagList
from widgetry.models.schemas import BindingKind

ID_PATTERN = re.compile(r"[A-Za-z0-9_]+")


def is_valid_id(value: object) -> bool:
    return isinstance(value, str) and bool(ID_PATTERN.fullmatch(value))


def validate_id(value: object, kind: str = "input") -> str:
    """
    Validate an input or output id.

    Args:
        value: Candidate id
        kind: "input" or "output", used in the error message

    Returns:
        The id, unchanged

    Raises:
        InvalidIdError: If the id is not a non-empty string of letters,
            digits and underscores
    """
    if not isinstance(value, str):
        raise InvalidIdError(f"{kind} id must be a string, got {type(value).__name__}")
    if not value:
        raise InvalidIdError(f"{kind} id must not be empty")
    if not ID_PATTERN.fullmatch(value):
        bad = sorted({ch for ch in value if not (ch.isascii() and (ch.isalnum() or ch == "_"))})
        raise InvalidIdError(
            f"Invalid {kind} id '{value}': only letters, numbers and underscores are allowed "
            f"(found {' '.join(repr(ch) for ch in bad)})"
        )
    return value


def _roots(node: Union[Tag, TagList]) -> List[Tag]:
    if isinstance(node, Tag):
        return [node]
    return [child for child in node if isinstance(child, Tag)]


def collect_ids(node: Union[Tag, TagList]) -> List[Tuple[str, BindingKind]]:
    """
    Return every bound id with its binding kind, in document order.
    Interaction ids of plot and image outputs count as inputs.
    """
    found: List[Tuple[str, BindingKind]] = []
    for root in _roots(node):
        for tag in root.walk():
            if tag.binding is not None:
                found.append((tag.binding.id, tag.binding.kind))
            for event_id in tag.metadata.get("event_ids", ()):
                found.append((event_id, BindingKind.INPUT))
    return found


def input_ids(node: Union[Tag, TagList]) -> List[str]:
    return [id_ for id_, kind in collect_ids(node) if kind == BindingKind.INPUT]


def output_ids(node: Union[Tag, TagList]) -> List[str]:
    return [id_ for id_, kind in collect_ids(node) if kind == BindingKind.OUTPUT]


def find_duplicate_ids(node: Union[Tag, TagList]) -> Dict[str, List[str]]:
    """Map each id bound more than once to the binding kinds it was used with."""
    seen: Dict[str, List[str]] = {}
    for id_, kind in collect_ids(node):
        seen.setdefault(id_, []).append(kind.value)
    return {id_: kinds for id_, kinds in seen.items() if len(kinds) > 1}


def check_unique_ids(node: Union[Tag, TagList]) -> None:
    """
    Ensure no id is bound twice. Inputs and outputs share one namespace
    because both end up as DOM ids.

    Raises:
        DuplicateIdError: For the first duplicated id in document order
    """
    duplicates = find_duplicate_ids(node)
    if duplicates:
        first = next(iter(duplicates))
        raise DuplicateIdError(first, tuple(duplicates[first]))
