#!/usr/bin/env python3
"""
Confidence tiers for evidence sources

Every candidate value carries the tier of the source it was read from.
Tiers are totally ordered through CONFIDENCE_RANKS:

    DEFAULT < FILENAME < FOLDERNAME < MEDIA_INFO < EXTERNAL_RELEASE

The source → tier mapping (SOURCE_TIERS) is fixed. An augmenter never picks
its own tier; it inherits the tier of the source it reads.
"""

from enum import Enum

from movie_import.constants import CONFIDENCE_RANKS, SOURCE_TIERS


class Confidence(Enum):
    """Evidentiary strength of a candidate value"""
    DEFAULT = 'default'
    FILENAME = 'filename'
    FOLDERNAME = 'foldername'
    MEDIA_INFO = 'media_info'
    EXTERNAL_RELEASE = 'external_release'

    @property
    def rank(self) -> int:
        return CONFIDENCE_RANKS[self.value]

    def __lt__(self, other):
        if not isinstance(other, Confidence):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Confidence):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Confidence):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Confidence):
            return NotImplemented
        return self.rank >= other.rank


class EvidenceSource(Enum):
    """The four independent evidence sources of an import unit"""
    FILENAME = 'filename'
    FOLDER = 'folder'
    MEDIA_INFO = 'media_info'
    RELEASE = 'release'


# Documented source → tier mapping
SOURCE_CONFIDENCE = {
    source: Confidence(SOURCE_TIERS[source.value])
    for source in EvidenceSource
}


def compare_confidence(a: Confidence, b: Confidence) -> int:
    """
    Three-way comparison of two tiers

    Returns:
        -1 if a is weaker than b, 0 if equal, 1 if a is stronger
    """
    if a.rank < b.rank:
        return -1
    if a.rank > b.rank:
        return 1
    return 0


def confidence_for_source(source: EvidenceSource) -> Confidence:
    """Return the fixed tier for an evidence source"""
    return SOURCE_CONFIDENCE[source]
