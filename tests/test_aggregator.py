#!/usr/bin/env python3
"""
Test suite for movie_import/aggregator.py — merge policies and defaults
"""

import time
import pytest
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from movie_import.aggregator import NO_DEFAULT, AttributeAggregator, MergePolicy, TieBreak
from movie_import.augmenters.base import Augmenter
from movie_import.augmenters.languages import LanguageFromFolder, LanguageFromRelease
from movie_import.confidence import Confidence, EvidenceSource
from movie_import.errors import MalformedBundleError, RegistrationError, UnresolvedAttributeError
from movie_import.evidence import EvidenceBundle, ParsedMovieInfo, ReleaseInfo


class StaticAugmenter(Augmenter):
    """Test augmenter returning a fixed value from a given source"""

    def __init__(self, name, source, value, attribute='languages', delay=0.0):
        self.name = name
        self.source = source
        self.value = value
        self.attribute = attribute
        self.delay = delay

    def evaluate(self, bundle):
        if self.delay:
            time.sleep(self.delay)
        if self.value is None:
            return None
        return self.candidate(self.value)


class FailingAugmenter(Augmenter):
    name = 'failing'
    attribute = 'languages'
    source = EvidenceSource.FOLDER

    def evaluate(self, bundle):
        raise MalformedBundleError('folder_info', 'languages', 'broken', self.name)


EMPTY = EvidenceBundle()


def best(*augmenters, **kwargs):
    return AttributeAggregator('languages', augmenters, MergePolicy.BEST_CONFIDENCE, **kwargs)


def union(*augmenters, **kwargs):
    return AttributeAggregator('languages', augmenters, MergePolicy.CONFIDENCE_UNION, **kwargs)


# ---------------------------------------------------------------------------
# Best-confidence-wins
# ---------------------------------------------------------------------------

class TestBestConfidence:

    def test_higher_tier_wins_when_registered_last(self):
        aggregator = best(
            StaticAugmenter('a', EvidenceSource.FOLDER, ('en',)),
            StaticAugmenter('b', EvidenceSource.RELEASE, ('fr',)),
        )
        resolved = aggregator.resolve(EMPTY)
        assert resolved.value == ('fr',)
        assert resolved.confidence == Confidence.EXTERNAL_RELEASE
        assert resolved.source == 'b'

    def test_higher_tier_wins_when_registered_first(self):
        aggregator = best(
            StaticAugmenter('b', EvidenceSource.RELEASE, ('fr',)),
            StaticAugmenter('a', EvidenceSource.FOLDER, ('en',)),
        )
        assert aggregator.resolve(EMPTY).value == ('fr',)

    def test_tie_first_registered_wins(self):
        aggregator = best(
            StaticAugmenter('first', EvidenceSource.FOLDER, ('en',)),
            StaticAugmenter('second', EvidenceSource.FOLDER, ('de',)),
        )
        resolved = aggregator.resolve(EMPTY)
        assert resolved.value == ('en',)
        assert resolved.source == 'first'

    def test_tie_last_registered_when_configured(self):
        aggregator = best(
            StaticAugmenter('first', EvidenceSource.FOLDER, ('en',)),
            StaticAugmenter('second', EvidenceSource.FOLDER, ('de',)),
            tie_break=TieBreak.LAST_REGISTERED,
        )
        assert aggregator.resolve(EMPTY).source == 'second'

    def test_tie_rule_does_not_override_confidence(self):
        aggregator = best(
            StaticAugmenter('strong', EvidenceSource.RELEASE, ('fr',)),
            StaticAugmenter('weak', EvidenceSource.FILENAME, ('en',)),
            tie_break=TieBreak.LAST_REGISTERED,
        )
        assert aggregator.resolve(EMPTY).source == 'strong'

    def test_no_opinion_candidates_skipped(self):
        aggregator = best(
            StaticAugmenter('silent', EvidenceSource.RELEASE, None),
            StaticAugmenter('folder', EvidenceSource.FOLDER, ('en',)),
        )
        resolved = aggregator.resolve(EMPTY)
        assert resolved.value == ('en',)
        assert [c.augmenter for c in resolved.candidates] == ['folder']

    def test_trace_keeps_all_candidates_in_registration_order(self):
        aggregator = best(
            StaticAugmenter('a', EvidenceSource.FILENAME, ('en',)),
            StaticAugmenter('b', EvidenceSource.MEDIA_INFO, ('de',)),
            StaticAugmenter('c', EvidenceSource.FOLDER, ('fr',)),
        )
        resolved = aggregator.resolve(EMPTY)
        assert [c.augmenter for c in resolved.candidates] == ['a', 'b', 'c']
        assert resolved.value == ('de',)
        assert not resolved.defaulted

    def test_winning_value_comes_from_a_candidate(self):
        aggregator = best(
            StaticAugmenter('a', EvidenceSource.FILENAME, ('en',)),
            StaticAugmenter('b', EvidenceSource.FOLDER, ('fr',)),
            default=('und',),
        )
        resolved = aggregator.resolve(EMPTY)
        assert resolved.value in [c.value for c in resolved.candidates]


# ---------------------------------------------------------------------------
# Confidence-ordered union
# ---------------------------------------------------------------------------

class TestConfidenceUnion:

    def test_external_ordering_leads_without_duplicates(self):
        aggregator = union(
            StaticAugmenter('folder', EvidenceSource.FOLDER, ('en',)),
            StaticAugmenter('release', EvidenceSource.RELEASE, ('en', 'fr')),
        )
        resolved = aggregator.resolve(EMPTY)
        assert resolved.value == ('fr', 'en')
        assert resolved.confidence == Confidence.EXTERNAL_RELEASE
        assert resolved.source == 'release'

    def test_repeated_values_settle_at_last_occurrence(self):
        aggregator = union(
            StaticAugmenter('filename', EvidenceSource.FILENAME, ('de', 'en')),
            StaticAugmenter('media', EvidenceSource.MEDIA_INFO, ('fr',)),
            StaticAugmenter('folder', EvidenceSource.FOLDER, ('en', 'it')),
        )
        assert aggregator.resolve(EMPTY).value == ('fr', 'it', 'de', 'en')

    def test_equal_tiers_keep_registration_order(self):
        aggregator = union(
            StaticAugmenter('one', EvidenceSource.FOLDER, ('es',)),
            StaticAugmenter('two', EvidenceSource.FOLDER, ('pt',)),
        )
        assert aggregator.resolve(EMPTY).value == ('es', 'pt')

    def test_equal_tiers_reversed_with_last_registered(self):
        aggregator = union(
            StaticAugmenter('one', EvidenceSource.FOLDER, ('es',)),
            StaticAugmenter('two', EvidenceSource.FOLDER, ('pt',)),
            tie_break=TieBreak.LAST_REGISTERED,
        )
        assert aggregator.resolve(EMPTY).value == ('pt', 'es')

    def test_scalar_values_are_collected(self):
        aggregator = AttributeAggregator(
            'edition',
            [
                StaticAugmenter('f', EvidenceSource.FILENAME, 'Extended', attribute='edition'),
                StaticAugmenter('r', EvidenceSource.RELEASE, 'IMAX', attribute='edition'),
            ],
            MergePolicy.CONFIDENCE_UNION,
        )
        assert aggregator.resolve(EMPTY).value == ('IMAX', 'Extended')


# ---------------------------------------------------------------------------
# Defaults and unresolved attributes
# ---------------------------------------------------------------------------

class TestDefaults:

    def test_default_used_without_candidates(self):
        aggregator = best(LanguageFromFolder(), LanguageFromRelease(), default=['und'])
        resolved = aggregator.resolve(EMPTY)
        assert resolved.value == ('und',)
        assert resolved.confidence == Confidence.DEFAULT
        assert resolved.defaulted
        assert resolved.source is None
        assert resolved.candidates == ()

    def test_none_is_a_valid_default(self):
        aggregator = AttributeAggregator('release_group', [], default=None)
        resolved = aggregator.resolve(EMPTY)
        assert resolved.value is None
        assert resolved.defaulted

    def test_no_candidates_no_default_raises(self):
        aggregator = best(LanguageFromFolder())
        with pytest.raises(UnresolvedAttributeError) as exc:
            aggregator.resolve(EMPTY)
        assert exc.value.attribute == 'languages'

    def test_zero_augmenters_no_default_raises(self):
        aggregator = AttributeAggregator('rating', [])
        assert aggregator.default is NO_DEFAULT
        with pytest.raises(UnresolvedAttributeError, match='rating'):
            aggregator.resolve(EMPTY)

    def test_default_not_used_when_candidate_exists(self):
        aggregator = best(LanguageFromFolder(), default=['und'])
        bundle = EvidenceBundle(folder_info=ParsedMovieInfo(languages=('en',)))
        resolved = aggregator.resolve(bundle)
        assert resolved.value == ('en',)
        assert not resolved.defaulted


# ---------------------------------------------------------------------------
# Registration validation
# ---------------------------------------------------------------------------

class TestRegistration:

    def test_augmenter_for_other_attribute_rejected(self):
        edition = StaticAugmenter('e', EvidenceSource.FILENAME, 'Extended', attribute='edition')
        with pytest.raises(RegistrationError, match='edition'):
            best(edition)

    def test_duplicate_augmenter_rejected(self):
        with pytest.raises(RegistrationError, match='twice'):
            best(LanguageFromFolder(), LanguageFromFolder())

    def test_blank_attribute_rejected(self):
        with pytest.raises(RegistrationError):
            AttributeAggregator('', [])


# ---------------------------------------------------------------------------
# Concurrency and failures
# ---------------------------------------------------------------------------

class TestExecution:

    def test_parallel_tie_break_ignores_completion_order(self):
        # The first-registered augmenter finishes last
        aggregator = best(
            StaticAugmenter('slow', EvidenceSource.FOLDER, ('en',), delay=0.05),
            StaticAugmenter('fast', EvidenceSource.FOLDER, ('de',)),
        )
        with ThreadPoolExecutor(max_workers=2) as executor:
            resolved = aggregator.resolve(EMPTY, executor)
        assert resolved.source == 'slow'
        assert [c.augmenter for c in resolved.candidates] == ['slow', 'fast']

    def test_parallel_matches_sequential(self):
        bundle = EvidenceBundle(
            folder_info=ParsedMovieInfo(languages=('en',)),
            release_info=ReleaseInfo(languages=('fr',)),
        )
        aggregator = best(LanguageFromFolder(), LanguageFromRelease(), default=['und'])
        with ThreadPoolExecutor(max_workers=2) as executor:
            assert aggregator.resolve(bundle, executor) == aggregator.resolve(bundle)

    def test_augmenter_failure_propagates(self):
        aggregator = best(LanguageFromRelease(), FailingAugmenter(), default=['und'])
        with pytest.raises(MalformedBundleError):
            aggregator.resolve(EMPTY)

    def test_augmenter_failure_propagates_from_executor(self):
        aggregator = best(FailingAugmenter(), default=['und'])
        with ThreadPoolExecutor(max_workers=2) as executor:
            with pytest.raises(MalformedBundleError):
                aggregator.resolve(EMPTY, executor)

    def test_resolve_does_not_mutate_bundle(self):
        bundle = EvidenceBundle(folder_info=ParsedMovieInfo(languages=('en',)))
        snapshot = EvidenceBundle(folder_info=ParsedMovieInfo(languages=('en',)))
        best(LanguageFromFolder()).resolve(bundle)
        assert bundle == snapshot
