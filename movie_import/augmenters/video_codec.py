#!/usr/bin/env python3
"""
Video codec augmenters

Filename tags (x264, HEVC) and probed codec ids (h264, hevc) are folded to
one spelling. Codecs without an alias are kept lowercased.
"""

import re
from typing import Optional

from movie_import.augmenters.base import Augmenter
from movie_import.confidence import EvidenceSource
from movie_import.constants import VIDEO_CODEC_ALIASES


def normalize_video_codec(text: Optional[str]) -> Optional[str]:
    if not text:
        return None
    key = re.sub(r'[\s._\-]', '', text.lower())
    if not key:
        return None
    return VIDEO_CODEC_ALIASES.get(key, key)


class _VideoCodecAugmenter(Augmenter):
    attribute = 'video_codec'

    def extract(self, record):
        return normalize_video_codec(self.read_str(record, 'video_codec'))


class VideoCodecFromFilename(_VideoCodecAugmenter):
    name = 'video_codec_from_filename'
    source = EvidenceSource.FILENAME


class VideoCodecFromFolder(_VideoCodecAugmenter):
    name = 'video_codec_from_folder'
    source = EvidenceSource.FOLDER


class VideoCodecFromMediaInfo(_VideoCodecAugmenter):
    name = 'video_codec_from_media_info'
    source = EvidenceSource.MEDIA_INFO
