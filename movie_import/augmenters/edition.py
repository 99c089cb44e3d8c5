#!/usr/bin/env python3
"""Edition augmenters (file name, folder name, release record)"""

from movie_import.augmenters.base import Augmenter
from movie_import.confidence import EvidenceSource
from movie_import.editions import normalize_edition


class _EditionAugmenter(Augmenter):
    attribute = 'edition'

    def extract(self, record):
        return normalize_edition(self.read_str(record, 'edition'))


class EditionFromFilename(_EditionAugmenter):
    name = 'edition_from_filename'
    source = EvidenceSource.FILENAME


class EditionFromFolder(_EditionAugmenter):
    name = 'edition_from_folder'
    source = EvidenceSource.FOLDER


class EditionFromRelease(_EditionAugmenter):
    name = 'edition_from_release'
    source = EvidenceSource.RELEASE
