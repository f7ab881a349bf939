"""Closed set of shapes the task runner uses for message content."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

TEXT_KEY = "text"


@dataclass(frozen=True)
class TextContent:
    text: str


@dataclass(frozen=True)
class TextObjectArrayContent:
    """Sequence whose first element is a mapping exposing ``text``."""

    items: tuple[Any, ...]

    @property
    def text(self) -> Any:
        return self.items[0][TEXT_KEY]


@dataclass(frozen=True)
class TextObjectContent:
    mapping: Mapping[str, Any]

    @property
    def text(self) -> Any:
        return self.mapping[TEXT_KEY]


@dataclass(frozen=True)
class SequenceContent:
    items: tuple[Any, ...]


@dataclass(frozen=True)
class MappingContent:
    mapping: Mapping[str, Any]


@dataclass(frozen=True)
class RawContent:
    value: Any


Content = (
    TextContent
    | TextObjectArrayContent
    | TextObjectContent
    | SequenceContent
    | MappingContent
    | RawContent
)


def resolve_content(value: Any) -> Content:
    """Classify an untyped content value once, at the boundary."""
    if isinstance(value, str):
        return TextContent(value)
    if isinstance(value, Mapping):
        if TEXT_KEY in value:
            return TextObjectContent(value)
        return MappingContent(value)
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        items = tuple(value)
        if items and isinstance(items[0], Mapping) and TEXT_KEY in items[0]:
            return TextObjectArrayContent(items)
        return SequenceContent(items)
    return RawContent(value)


def to_text(value: Any) -> str:
    """String conversion used wherever a non-string value has to be surfaced.

    Strings pass through; JSON values render as compact JSON so ``None``
    becomes ``null`` and mappings keep their structure.
    """
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError):
        return str(value)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def loads_strict(text: str) -> Any:
    """``json.loads`` without the ``NaN``/``Infinity`` extensions."""
    return json.loads(text, parse_constant=_reject_constant)
