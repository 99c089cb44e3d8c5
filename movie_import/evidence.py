#!/usr/bin/env python3
"""
Evidence records consumed by the aggregation pipeline

These are the structured outputs of collaborators that live outside this
package (filename/folder parser, media probe, release lookup). The pipeline
only depends on the field names and types documented here.

Every source is optional. A missing source is None, never an error.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Tuple

from movie_import.errors import MalformedBundleError


@dataclass(frozen=True)
class ParsedMovieInfo:
    """Structured guess produced by parsing a file name or folder name"""
    movie_title: Optional[str] = None
    year: Optional[int] = None
    languages: Tuple[str, ...] = ()  # ISO 639-1 codes
    subtitle_languages: Tuple[str, ...] = ()
    edition: Optional[str] = None  # Raw edition text, e.g. "Directors Cut"
    quality_source: Optional[str] = None  # bluray, webdl, ...
    resolution: Optional[int] = None  # 1080, 2160, ...
    video_codec: Optional[str] = None
    release_group: Optional[str] = None


@dataclass(frozen=True)
class MediaInfo:
    """Embedded media metadata extracted by probing the file"""
    width: Optional[int] = None
    height: Optional[int] = None
    video_codec: Optional[str] = None
    audio_languages: Tuple[str, ...] = ()  # Raw stream tags: 'eng', 'fre', ...
    subtitle_languages: Tuple[str, ...] = ()
    run_time_seconds: Optional[float] = None


@dataclass(frozen=True)
class ReleaseInfo:
    """External release/indexer record matched to the import unit"""
    title: Optional[str] = None
    indexer: Optional[str] = None
    languages: Tuple[str, ...] = ()
    subtitle_languages: Tuple[str, ...] = ()
    edition: Optional[str] = None
    quality_source: Optional[str] = None
    resolution: Optional[int] = None
    release_group: Optional[str] = None


@dataclass(frozen=True)
class EvidenceBundle:
    """
    All evidence available for one import unit

    Built once per import unit and read-only afterwards. Augmenters receive
    the whole bundle but each one reads exactly one of its source fields.
    """
    filename_info: Optional[ParsedMovieInfo] = None
    folder_info: Optional[ParsedMovieInfo] = None
    media_info: Optional[MediaInfo] = None
    release_info: Optional[ReleaseInfo] = None
    path: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EvidenceBundle':
        """
        Build a bundle from JSON-shaped data

        Expected keys: path, filename_info, folder_info, media_info,
        release_info. Missing or null source keys mean the source is absent.
        """
        if not isinstance(data, dict):
            raise MalformedBundleError(
                'bundle', '*', f"expected an object, got {type(data).__name__}"
            )

        unknown = set(data) - {f.name for f in fields(cls)}
        if unknown:
            raise MalformedBundleError(
                'bundle', ', '.join(sorted(unknown)), "unknown evidence source"
            )

        path = data.get('path')
        if path is not None and not isinstance(path, str):
            raise MalformedBundleError(
                'bundle', 'path', f"expected a string, got {type(path).__name__}"
            )

        return cls(
            filename_info=_build_record(ParsedMovieInfo, data.get('filename_info'), 'filename_info'),
            folder_info=_build_record(ParsedMovieInfo, data.get('folder_info'), 'folder_info'),
            media_info=_build_record(MediaInfo, data.get('media_info'), 'media_info'),
            release_info=_build_record(ReleaseInfo, data.get('release_info'), 'release_info'),
            path=path,
        )


def _build_record(record_cls, data: Optional[Dict[str, Any]], source: str):
    """Instantiate one source record, freezing list values into tuples"""
    if data is None:
        return None
    if not isinstance(data, dict):
        raise MalformedBundleError(
            source, '*', f"expected an object, got {type(data).__name__}"
        )

    known = {f.name for f in fields(record_cls)}
    unknown = set(data) - known
    if unknown:
        raise MalformedBundleError(
            source, ', '.join(sorted(unknown)), "unknown field"
        )

    values = {}
    for key, value in data.items():
        if isinstance(value, list):
            value = tuple(value)
        values[key] = value
    return record_cls(**values)
