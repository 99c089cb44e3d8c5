#!/usr/bin/env python3
"""
Candidate values and resolved results

Candidate         — one augmenter's opinion about one attribute
ResolvedAttribute — the value chosen for one attribute, plus its trace
ResolvedRecord    — every registered attribute for one import unit

All three are immutable once built. Collection values are stored as tuples.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Tuple

from movie_import.confidence import Confidence


def freeze_value(value: Any) -> Any:
    """Convert list/set values to tuples so results stay immutable"""
    if isinstance(value, (list, tuple)):
        return tuple(value)
    if isinstance(value, (set, frozenset)):
        return tuple(sorted(value))
    return value


def _jsonable(value: Any) -> Any:
    if isinstance(value, tuple):
        return list(value)
    return value


@dataclass(frozen=True)
class Candidate:
    """A confidence-tagged value produced by one augmenter"""
    attribute: str
    value: Any
    confidence: Confidence
    augmenter: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'augmenter': self.augmenter,
            'value': _jsonable(self.value),
            'confidence': self.confidence.value,
        }


@dataclass(frozen=True)
class ResolvedAttribute:
    """
    Final value of one attribute

    source is the name of the winning augmenter, or None when the value is
    the attribute's default. candidates lists every opinion considered, in
    registration order, for "why was this chosen" diagnostics.
    """
    attribute: str
    value: Any
    confidence: Confidence
    source: Optional[str] = None
    candidates: Tuple[Candidate, ...] = ()
    defaulted: bool = False

    def to_dict(self, include_trace: bool = False) -> Dict[str, Any]:
        result = {
            'value': _jsonable(self.value),
            'confidence': self.confidence.value,
            'source': self.source,
            'defaulted': self.defaulted,
        }
        if include_trace:
            result['candidates'] = [c.to_dict() for c in self.candidates]
        return result


@dataclass(frozen=True)
class ResolvedRecord:
    """All resolved attributes for one import unit, in registration order"""
    attributes: Tuple[ResolvedAttribute, ...]
    path: Optional[str] = None

    def __getitem__(self, name: str) -> ResolvedAttribute:
        for resolved in self.attributes:
            if resolved.attribute == name:
                return resolved
        raise KeyError(name)

    def __contains__(self, name: object) -> bool:
        return any(resolved.attribute == name for resolved in self.attributes)

    def __iter__(self) -> Iterator[str]:
        return (resolved.attribute for resolved in self.attributes)

    def __len__(self) -> int:
        return len(self.attributes)

    def value(self, name: str) -> Any:
        """Shortcut for record[name].value"""
        return self[name].value

    def to_dict(self, include_trace: bool = False) -> Dict[str, Any]:
        """JSON-ready view handed to the commit and review collaborators"""
        return {
            'path': self.path,
            'attributes': {
                resolved.attribute: resolved.to_dict(include_trace)
                for resolved in self.attributes
            },
        }
