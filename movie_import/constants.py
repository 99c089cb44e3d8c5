#!/usr/bin/env python3
"""
Shared constants for movie import attribute aggregation

Single source of truth for confidence tiers, language tables, edition names
and the default attribute registration.
DO NOT duplicate these tables in other modules - import from here instead.
"""

# =============================================================================
# CONFIDENCE TIERS
# =============================================================================

# Tier name → rank. Higher rank wins a best-confidence merge.
# The order is a documented contract: external release metadata outranks
# embedded media info, which outranks folder names, which outrank file names.
CONFIDENCE_RANKS = {
    'default': 0,
    'filename': 1,
    'foldername': 2,
    'media_info': 3,
    'external_release': 4,
}

# Evidence source → confidence tier name
SOURCE_TIERS = {
    'filename': 'filename',
    'folder': 'foldername',
    'media_info': 'media_info',
    'release': 'external_release',
}

# =============================================================================
# LANGUAGES
# =============================================================================

# Canonical language codes are ISO 639-1. 'und' (ISO 639-2 "undetermined")
# marks an unknown language and never counts as an opinion.
UNKNOWN_LANGUAGE = 'und'

# Format: alias → ISO 639-1 code
# Covers ISO 639-2/B, ISO 639-2/T and English names, which is what muxers
# write into stream language tags.
LANGUAGE_ALIASES = {
    # English
    'en': 'en', 'eng': 'en', 'english': 'en',
    # French
    'fr': 'fr', 'fre': 'fr', 'fra': 'fr', 'french': 'fr', 'francais': 'fr',
    # German
    'de': 'de', 'ger': 'de', 'deu': 'de', 'german': 'de', 'deutsch': 'de',
    # Spanish
    'es': 'es', 'spa': 'es', 'spanish': 'es', 'espanol': 'es',
    # Italian
    'it': 'it', 'ita': 'it', 'italian': 'it', 'italiano': 'it',
    # Portuguese
    'pt': 'pt', 'por': 'pt', 'portuguese': 'pt',
    # Dutch
    'nl': 'nl', 'dut': 'nl', 'nld': 'nl', 'dutch': 'nl',
    # Japanese
    'ja': 'ja', 'jpn': 'ja', 'japanese': 'ja',
    # Chinese
    'zh': 'zh', 'chi': 'zh', 'zho': 'zh', 'chinese': 'zh', 'mandarin': 'zh', 'cantonese': 'zh',
    # Korean
    'ko': 'ko', 'kor': 'ko', 'korean': 'ko',
    # Russian
    'ru': 'ru', 'rus': 'ru', 'russian': 'ru',
    # Polish
    'pl': 'pl', 'pol': 'pl', 'polish': 'pl',
    # Hungarian
    'hu': 'hu', 'hun': 'hu', 'hungarian': 'hu',
    # Hindi
    'hi': 'hi', 'hin': 'hi', 'hindi': 'hi',
    # Swedish
    'sv': 'sv', 'swe': 'sv', 'swedish': 'sv',
    # Danish
    'da': 'da', 'dan': 'da', 'danish': 'da',
    # Norwegian
    'no': 'no', 'nor': 'no', 'norwegian': 'no',
    # Finnish
    'fi': 'fi', 'fin': 'fi', 'finnish': 'fi',
    # Czech
    'cs': 'cs', 'cze': 'cs', 'ces': 'cs', 'czech': 'cs',
    # Greek
    'el': 'el', 'gre': 'el', 'ell': 'el', 'greek': 'el',
    # Turkish
    'tr': 'tr', 'tur': 'tr', 'turkish': 'tr',
    # Arabic
    'ar': 'ar', 'ara': 'ar', 'arabic': 'ar',
    # Hebrew
    'he': 'he', 'heb': 'he', 'hebrew': 'he',
    # Thai
    'th': 'th', 'tha': 'th', 'thai': 'th',
    # Unknown / undetermined
    'und': UNKNOWN_LANGUAGE, 'unknown': UNKNOWN_LANGUAGE, 'mis': UNKNOWN_LANGUAGE,
    'mul': UNKNOWN_LANGUAGE, 'zxx': UNKNOWN_LANGUAGE,
}

# =============================================================================
# EDITIONS
# =============================================================================

# Normalized edition token → display name
# Keys are matched after lowercasing and stripping punctuation.
EDITION_NAMES = {
    'directors cut': "Director's Cut",
    'director cut': "Director's Cut",
    'editors cut': "Editor's Cut",
    'extended': 'Extended',
    'extended cut': 'Extended',
    'extended edition': 'Extended',
    'theatrical': 'Theatrical',
    'theatrical cut': 'Theatrical',
    'unrated': 'Unrated',
    'unrated cut': 'Unrated',
    'uncut': 'Uncut',
    'redux': 'Redux',
    'final cut': 'Final Cut',
    'special edition': 'Special Edition',
    'collectors edition': "Collector's Edition",
    'ultimate edition': 'Ultimate Edition',
    'definitive edition': 'Definitive Edition',
    'anniversary edition': 'Anniversary Edition',
    'international cut': 'International Cut',
    'remastered': 'Remastered',
    'restored': 'Restored',
    'criterion': 'Criterion',
    'imax': 'IMAX',
    'open matte': 'Open Matte',
}

# =============================================================================
# QUALITY
# =============================================================================

# Release tag spellings → quality source
# Lookup keys are lowercased with '-', '.', '_' and spaces removed
QUALITY_SOURCE_ALIASES = {
    'cam': 'cam',
    'camrip': 'cam',
    'hdcam': 'cam',
    'ts': 'telesync',
    'telesync': 'telesync',
    'hdts': 'telesync',
    'tc': 'telecine',
    'telecine': 'telecine',
    'dvd': 'dvd',
    'dvdrip': 'dvd',
    'dvdr': 'dvd',
    'tv': 'tv',
    'hdtv': 'tv',
    'pdtv': 'tv',
    'webrip': 'webrip',
    'web': 'webdl',
    'webdl': 'webdl',
    'bluray': 'bluray',
    'bdrip': 'bluray',
    'brrip': 'bluray',
    'bd': 'bluray',
    'remux': 'remux',
    'bdremux': 'remux',
}

# Codec spellings → canonical codec name
VIDEO_CODEC_ALIASES = {
    'x264': 'x264',
    'h264': 'x264',
    'avc': 'x264',
    'avc1': 'x264',
    'x265': 'x265',
    'h265': 'x265',
    'hevc': 'x265',
    'xvid': 'xvid',
    'divx': 'divx',
    'av1': 'av1',
    'vp9': 'vp9',
    'mpeg2': 'mpeg2',
    'mpeg2video': 'mpeg2',
    'vc1': 'vc1',
}

# Frame size → resolution buckets, checked top to bottom.
# Format: (min_width, min_height, resolution); a frame matches when either
# dimension reaches its threshold.
RESOLUTION_BUCKETS = [
    (3200, 2100, 2160),
    (1800, 1000, 1080),
    (1200, 700, 720),
    (1000, 560, 576),
]

# Fallback bucket for any frame with known, positive dimensions
MIN_RESOLUTION = 480

# =============================================================================
# DEFAULT ATTRIBUTE REGISTRATION
# =============================================================================

# Mirrors config.yaml. Attribute order is registration order and the column
# order of the CLI manifest.
DEFAULT_REGISTRATION = {
    'max_workers': 1,
    'attributes': {
        'languages': {
            'policy': 'best_confidence',
            'tie_break': 'first_registered',
            'default': [UNKNOWN_LANGUAGE],
            'augmenters': [
                'language_from_filename',
                'language_from_folder',
                'language_from_media_info',
                'language_from_release',
            ],
        },
        'subtitle_languages': {
            'policy': 'confidence_union',
            'default': [],
            'augmenters': [
                'subtitles_from_filename',
                'subtitles_from_folder',
                'subtitles_from_media_info',
                'subtitles_from_release',
            ],
        },
        'edition': {
            'policy': 'best_confidence',
            'default': '',
            'augmenters': [
                'edition_from_filename',
                'edition_from_folder',
                'edition_from_release',
            ],
        },
        'quality_source': {
            'policy': 'best_confidence',
            'default': 'unknown',
            'augmenters': [
                'quality_source_from_filename',
                'quality_source_from_folder',
                'quality_source_from_release',
            ],
        },
        'resolution': {
            'policy': 'best_confidence',
            'default': 0,
            'augmenters': [
                'resolution_from_filename',
                'resolution_from_folder',
                'resolution_from_media_info',
                'resolution_from_release',
            ],
        },
        'release_group': {
            'policy': 'best_confidence',
            'default': None,
            'augmenters': [
                'release_group_from_filename',
                'release_group_from_folder',
                'release_group_from_release',
            ],
        },
        'video_codec': {
            'policy': 'best_confidence',
            'default': None,
            'augmenters': [
                'video_codec_from_filename',
                'video_codec_from_folder',
                'video_codec_from_media_info',
            ],
        },
    },
}
