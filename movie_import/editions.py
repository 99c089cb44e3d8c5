#!/usr/bin/env python3
"""
Edition name normalization

Edition text arrives in many spellings ("Directors.Cut", "director's cut",
"DIRECTORS CUT"). Known editions map to one display name so that the
filename, folder and release sources agree on equality. Unknown editions
are title-cased and kept.
"""

import re
from typing import Optional

from movie_import.constants import EDITION_NAMES


def _edition_key(text: str) -> str:
    """Lowercase, turn separators into spaces, drop apostrophes"""
    text = text.lower().replace("'", '').replace('’', '')
    text = re.sub(r'[._\-]+', ' ', text)
    text = re.sub(r'[^\w\s]', '', text)
    return ' '.join(text.split())


def normalize_edition(text: Optional[str]) -> Optional[str]:
    """
    Return the display name for an edition, or None for blank input

    Examples:
        >>> normalize_edition('Directors.Cut')
        "Director's Cut"
        >>> normalize_edition('final cut')
        'Final Cut'
        >>> normalize_edition('Black and Chrome')
        'Black And Chrome'
    """
    if text is None:
        return None

    key = _edition_key(text)
    if not key:
        return None

    if key in EDITION_NAMES:
        return EDITION_NAMES[key]

    return ' '.join(word.capitalize() for word in key.split())
