#!/usr/bin/env python3
"""
Per-attribute aggregation

An AttributeAggregator owns the ordered augmenter list for one attribute,
collects their candidates and reduces them with the attribute's merge policy.

Merge policies:
- BEST_CONFIDENCE: the candidate with the highest tier wins. Equal tiers are
  settled by registration order (first registered by default, configurable
  per attribute).
- CONFIDENCE_UNION: for collection values. Candidates are ordered by tier,
  strongest first (registration order among equals), and their items are
  concatenated. A repeated item keeps only its last occurrence, so
  external ["en", "fr"] with folder ["en"] merges to ["fr", "en"].

No candidates → the attribute's default (Confidence.DEFAULT). No default →
UnresolvedAttributeError.
"""

import logging
from concurrent.futures import Executor
from enum import Enum
from typing import Any, List, Optional, Sequence

from movie_import.augmenters.base import Augmenter
from movie_import.candidate import Candidate, ResolvedAttribute, freeze_value
from movie_import.confidence import Confidence, compare_confidence
from movie_import.errors import RegistrationError, UnresolvedAttributeError
from movie_import.evidence import EvidenceBundle

logger = logging.getLogger(__name__)


class MergePolicy(Enum):
    BEST_CONFIDENCE = 'best_confidence'
    CONFIDENCE_UNION = 'confidence_union'


class TieBreak(Enum):
    FIRST_REGISTERED = 'first_registered'
    LAST_REGISTERED = 'last_registered'


class _NoDefault:
    """Marker for attributes without a default value (None is a valid default)"""

    def __repr__(self) -> str:
        return 'NO_DEFAULT'


NO_DEFAULT = _NoDefault()


class AttributeAggregator:
    """Resolve one attribute from its registered augmenters"""

    def __init__(
        self,
        attribute: str,
        augmenters: Sequence[Augmenter],
        policy: MergePolicy = MergePolicy.BEST_CONFIDENCE,
        default: Any = NO_DEFAULT,
        tie_break: TieBreak = TieBreak.FIRST_REGISTERED,
    ):
        self.attribute = attribute
        self.augmenters = tuple(augmenters)
        self.policy = policy
        self.default = default if default is NO_DEFAULT else freeze_value(default)
        self.tie_break = tie_break
        self._validate()

    def _validate(self):
        if not self.attribute:
            raise RegistrationError("Attribute name is required")

        names = set()
        for augmenter in self.augmenters:
            if augmenter.attribute != self.attribute:
                raise RegistrationError(
                    f"{augmenter.name or type(augmenter).__name__} produces "
                    f"'{augmenter.attribute}', cannot be registered for '{self.attribute}'"
                )
            if augmenter.name in names:
                raise RegistrationError(
                    f"Augmenter '{augmenter.name}' registered twice for '{self.attribute}'"
                )
            names.add(augmenter.name)

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT

    def __repr__(self) -> str:
        return (
            f"AttributeAggregator({self.attribute!r}, policy={self.policy.value}, "
            f"augmenters={[a.name for a in self.augmenters]})"
        )

    def collect(self, bundle: EvidenceBundle,
                executor: Optional[Executor] = None) -> List[Candidate]:
        """
        Run every augmenter and return the candidates in registration order

        With an executor the augmenters run concurrently. Results are still
        read back in registration order, never completion order. An augmenter
        exception propagates unchanged.
        """
        if executor is None:
            results = [augmenter.evaluate(bundle) for augmenter in self.augmenters]
        else:
            futures = [executor.submit(augmenter.evaluate, bundle) for augmenter in self.augmenters]
            results = [future.result() for future in futures]

        return [candidate for candidate in results if candidate is not None]

    def resolve(self, bundle: EvidenceBundle,
                executor: Optional[Executor] = None) -> ResolvedAttribute:
        """Collect candidates and reduce them to one resolved value"""
        candidates = self.collect(bundle, executor)

        if not candidates:
            return self._resolve_default()

        if self.policy == MergePolicy.CONFIDENCE_UNION:
            resolved = self._merge_union(candidates)
        else:
            resolved = self._merge_best(candidates)

        logger.debug(
            f"{self.attribute}: using {resolved.value!r} "
            f"({resolved.confidence.value} from {resolved.source}; "
            f"{len(candidates)} candidate(s))"
        )
        return resolved

    def _resolve_default(self) -> ResolvedAttribute:
        if not self.has_default:
            raise UnresolvedAttributeError(self.attribute)

        logger.debug(f"{self.attribute}: no candidates, using default {self.default!r}")
        return ResolvedAttribute(
            attribute=self.attribute,
            value=self.default,
            confidence=Confidence.DEFAULT,
            source=None,
            candidates=(),
            defaulted=True,
        )

    def _merge_best(self, candidates: List[Candidate]) -> ResolvedAttribute:
        """Single winner by confidence, ties settled by registration order"""
        ordered = candidates if self.tie_break == TieBreak.FIRST_REGISTERED else candidates[::-1]

        winner = ordered[0]
        for candidate in ordered[1:]:
            # Strictly greater only: an equal tier never displaces the earlier one
            if compare_confidence(candidate.confidence, winner.confidence) > 0:
                winner = candidate

        return ResolvedAttribute(
            attribute=self.attribute,
            value=winner.value,
            confidence=winner.confidence,
            source=winner.augmenter,
            candidates=tuple(candidates),
        )

    def _merge_union(self, candidates: List[Candidate]) -> ResolvedAttribute:
        """Confidence-ordered union of collection values"""
        ordered = candidates if self.tie_break == TieBreak.FIRST_REGISTERED else candidates[::-1]
        # sorted() is stable, so registration order holds among equal tiers
        ordered = sorted(ordered, key=lambda c: c.confidence.rank, reverse=True)

        concatenated = []
        for candidate in ordered:
            items = candidate.value if isinstance(candidate.value, tuple) else (candidate.value,)
            concatenated.extend(items)

        # Duplicates keep their last occurrence: ['en', 'fr'] + ['en'] → ['fr', 'en']
        merged = []
        for index, item in enumerate(concatenated):
            if item not in concatenated[index + 1:]:
                merged.append(item)

        top = ordered[0]
        return ResolvedAttribute(
            attribute=self.attribute,
            value=tuple(merged),
            confidence=top.confidence,
            source=top.augmenter,
            candidates=tuple(candidates),
        )
