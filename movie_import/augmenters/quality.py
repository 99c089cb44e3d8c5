#!/usr/bin/env python3
"""
Quality augmenters: source (bluray, webdl, ...) and resolution

Source and resolution are resolved as separate attributes. Neither one needs
the other's resolved value, so they stay independent.

Resolution from media info is bucketed from the frame size:
    width >= 3200 or height >= 2100  → 2160
    width >= 1800 or height >= 1000  → 1080
    width >= 1200 or height >= 700   → 720
    width >= 1000 or height >= 560   → 576
    any other known frame size       → 480
"""

import logging
import re
from typing import Optional

from movie_import.augmenters.base import Augmenter
from movie_import.confidence import EvidenceSource
from movie_import.constants import MIN_RESOLUTION, QUALITY_SOURCE_ALIASES, RESOLUTION_BUCKETS

logger = logging.getLogger(__name__)


def normalize_quality_source(text: Optional[str]) -> Optional[str]:
    """Map a release tag ('WEB-DL', 'BDRip') to a known quality source"""
    if not text:
        return None
    key = re.sub(r'[\s._\-]', '', text.lower())
    return QUALITY_SOURCE_ALIASES.get(key)


def resolution_from_frame(width: Optional[int], height: Optional[int]) -> Optional[int]:
    """Bucket a frame size into a standard resolution (None if unknown)"""
    width = width or 0
    height = height or 0
    if width <= 0 and height <= 0:
        return None

    for min_width, min_height, resolution in RESOLUTION_BUCKETS:
        if width >= min_width or height >= min_height:
            return resolution

    if width > 0 and height > 0:
        return MIN_RESOLUTION
    return None


# ---------------------------------------------------------------------------
# Quality source
# ---------------------------------------------------------------------------

class _QualitySourceAugmenter(Augmenter):
    attribute = 'quality_source'

    def extract(self, record):
        raw = self.read_str(record, 'quality_source')
        source = normalize_quality_source(raw)
        if raw and source is None:
            logger.debug(f"{self.name}: unrecognised quality source '{raw}'")
        return source


class QualitySourceFromFilename(_QualitySourceAugmenter):
    name = 'quality_source_from_filename'
    source = EvidenceSource.FILENAME


class QualitySourceFromFolder(_QualitySourceAugmenter):
    name = 'quality_source_from_folder'
    source = EvidenceSource.FOLDER


class QualitySourceFromRelease(_QualitySourceAugmenter):
    name = 'quality_source_from_release'
    source = EvidenceSource.RELEASE


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

class _ResolutionAugmenter(Augmenter):
    attribute = 'resolution'

    def extract(self, record):
        return self.read_int(record, 'resolution')


class ResolutionFromFilename(_ResolutionAugmenter):
    name = 'resolution_from_filename'
    source = EvidenceSource.FILENAME


class ResolutionFromFolder(_ResolutionAugmenter):
    name = 'resolution_from_folder'
    source = EvidenceSource.FOLDER


class ResolutionFromMediaInfo(Augmenter):
    """Resolution bucketed from the probed frame size"""
    name = 'resolution_from_media_info'
    attribute = 'resolution'
    source = EvidenceSource.MEDIA_INFO

    def extract(self, media_info):
        return resolution_from_frame(
            self.read_int(media_info, 'width'),
            self.read_int(media_info, 'height'),
        )


class ResolutionFromRelease(_ResolutionAugmenter):
    name = 'resolution_from_release'
    source = EvidenceSource.RELEASE
