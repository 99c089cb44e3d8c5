#!/usr/bin/env python3
"""
Language code normalization

Media containers tag streams with ISO 639-2 codes ('eng', 'fre'), sometimes
with English names ('English') or ISO 639-1 codes. Everything is folded to
ISO 639-1 so candidates from different sources compare equal.
"""

import re
import unicodedata
from typing import Iterable, Optional, Tuple

from movie_import.constants import LANGUAGE_ALIASES, UNKNOWN_LANGUAGE


def _fold(token: str) -> str:
    """Lowercase, strip accents and punctuation"""
    token = unicodedata.normalize('NFD', token)
    token = ''.join(c for c in token if unicodedata.category(c) != 'Mn')
    token = re.sub(r'[^\w\s]', '', token.lower())
    return ' '.join(token.split())


def normalize_language(token: str) -> Optional[str]:
    """
    Map a language tag to its ISO 639-1 code

    Region suffixes are dropped ('en-US' → 'en', 'pt_BR' → 'pt').

    Returns:
        ISO 639-1 code, UNKNOWN_LANGUAGE for undetermined tags,
        or None if the tag is not recognised

    Examples:
        >>> normalize_language('eng')
        'en'
        >>> normalize_language('Français')
        'fr'
        >>> normalize_language('und')
        'und'
    """
    if not token:
        return None

    base = re.split(r'[-_]', token.strip(), maxsplit=1)[0]
    return LANGUAGE_ALIASES.get(_fold(base))


def normalize_language_list(tokens: Iterable[str]) -> Tuple[str, ...]:
    """
    Normalize tags, dropping unrecognised ones and duplicates

    Order of first appearance is kept.
    """
    result = []
    for token in tokens:
        code = normalize_language(token)
        if code and code not in result:
            result.append(code)
    return tuple(result)


def is_unknown_only(languages: Iterable[str]) -> bool:
    """True when a language list carries no real language"""
    return all(language == UNKNOWN_LANGUAGE for language in languages)
