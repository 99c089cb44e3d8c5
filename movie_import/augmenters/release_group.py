#!/usr/bin/env python3
"""Release group augmenters"""

from movie_import.augmenters.base import Augmenter
from movie_import.confidence import EvidenceSource


class _ReleaseGroupAugmenter(Augmenter):
    attribute = 'release_group'

    def extract(self, record):
        return self.read_str(record, 'release_group')


class ReleaseGroupFromFilename(_ReleaseGroupAugmenter):
    name = 'release_group_from_filename'
    source = EvidenceSource.FILENAME


class ReleaseGroupFromFolder(_ReleaseGroupAugmenter):
    name = 'release_group_from_folder'
    source = EvidenceSource.FOLDER


class ReleaseGroupFromRelease(_ReleaseGroupAugmenter):
    name = 'release_group_from_release'
    source = EvidenceSource.RELEASE
