#!/usr/bin/env python3
"""
Audio language augmenters

Filename, folder and release records already carry ISO 639-1 codes and are
read verbatim. Media info carries raw stream tags and is normalized.
An empty list, or one holding only the unknown language, is no opinion.
"""

from typing import Optional, Tuple

from movie_import.augmenters.base import Augmenter
from movie_import.confidence import EvidenceSource
from movie_import.languages import is_unknown_only, normalize_language_list


class _ParsedLanguages(Augmenter):
    attribute = 'languages'

    def extract(self, info) -> Optional[Tuple[str, ...]]:
        languages = self.read_codes(info, 'languages')
        if not languages or is_unknown_only(languages):
            return None
        return languages


class LanguageFromFilename(_ParsedLanguages):
    name = 'language_from_filename'
    source = EvidenceSource.FILENAME


class LanguageFromFolder(_ParsedLanguages):
    name = 'language_from_folder'
    source = EvidenceSource.FOLDER


class LanguageFromMediaInfo(Augmenter):
    """Languages of the embedded audio streams"""
    name = 'language_from_media_info'
    attribute = 'languages'
    source = EvidenceSource.MEDIA_INFO

    def extract(self, media_info) -> Optional[Tuple[str, ...]]:
        languages = normalize_language_list(self.read_codes(media_info, 'audio_languages'))
        if not languages or is_unknown_only(languages):
            return None
        return languages


class LanguageFromRelease(_ParsedLanguages):
    name = 'language_from_release'
    source = EvidenceSource.RELEASE
