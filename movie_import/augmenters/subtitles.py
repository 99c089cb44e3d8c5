#!/usr/bin/env python3
"""
Subtitle language augmenters

Registered under the confidence-union policy by default: every source may
add languages, stronger sources decide the display order.
"""

from movie_import.augmenters.base import Augmenter
from movie_import.confidence import EvidenceSource
from movie_import.constants import UNKNOWN_LANGUAGE
from movie_import.languages import normalize_language_list


class _ParsedSubtitles(Augmenter):
    attribute = 'subtitle_languages'

    def extract(self, info):
        languages = tuple(
            code for code in self.read_codes(info, 'subtitle_languages')
            if code != UNKNOWN_LANGUAGE
        )
        return languages or None


class SubtitlesFromFilename(_ParsedSubtitles):
    name = 'subtitles_from_filename'
    source = EvidenceSource.FILENAME


class SubtitlesFromFolder(_ParsedSubtitles):
    name = 'subtitles_from_folder'
    source = EvidenceSource.FOLDER


class SubtitlesFromMediaInfo(Augmenter):
    name = 'subtitles_from_media_info'
    attribute = 'subtitle_languages'
    source = EvidenceSource.MEDIA_INFO

    def extract(self, media_info):
        languages = tuple(
            code
            for code in normalize_language_list(
                self.read_codes(media_info, 'subtitle_languages')
            )
            if code != UNKNOWN_LANGUAGE
        )
        return languages or None


class SubtitlesFromRelease(_ParsedSubtitles):
    name = 'subtitles_from_release'
    source = EvidenceSource.RELEASE
