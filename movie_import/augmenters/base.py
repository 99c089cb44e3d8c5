#!/usr/bin/env python3
"""
Augmenter base class

An augmenter answers one question ("what does source S say about attribute
A?") for one import unit. It reads exactly one source record from the bundle
and returns either None (no opinion) or a Candidate tagged with the fixed
confidence tier of that source.

Subclasses set `name`, `attribute` and `source`, and implement extract().
Field readers raise MalformedBundleError when a source record breaks its own
documented types; absence is always None.
"""

from typing import Any, Optional, Tuple

from movie_import.candidate import Candidate, freeze_value
from movie_import.confidence import EvidenceSource, confidence_for_source
from movie_import.errors import MalformedBundleError
from movie_import.evidence import EvidenceBundle, MediaInfo, ParsedMovieInfo, ReleaseInfo

# Evidence source → (bundle field, expected record type)
SOURCE_FIELDS = {
    EvidenceSource.FILENAME: ('filename_info', ParsedMovieInfo),
    EvidenceSource.FOLDER: ('folder_info', ParsedMovieInfo),
    EvidenceSource.MEDIA_INFO: ('media_info', MediaInfo),
    EvidenceSource.RELEASE: ('release_info', ReleaseInfo),
}


class Augmenter:
    """Stateless, side-effect-free opinion about one attribute from one source"""

    name: str = ''
    attribute: str = ''
    source: Optional[EvidenceSource] = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def evaluate(self, bundle: EvidenceBundle) -> Optional[Candidate]:
        """Return a candidate, or None when the source has nothing to say"""
        record = self.source_record(bundle)
        if record is None:
            return None

        value = self.extract(record)
        if value is None:
            return None

        return self.candidate(value)

    def extract(self, record: Any) -> Any:
        """Read this augmenter's value from its source record (None = no opinion)"""
        raise NotImplementedError

    def source_record(self, bundle: EvidenceBundle) -> Any:
        """Fetch this augmenter's source record; the only bundle access path"""
        bundle_field, record_type = SOURCE_FIELDS[self.source]
        record = getattr(bundle, bundle_field)
        if record is None:
            return None
        if not isinstance(record, record_type):
            raise MalformedBundleError(
                bundle_field, '*',
                f"expected {record_type.__name__}, got {type(record).__name__}",
                self.name,
            )
        return record

    def candidate(self, value: Any) -> Candidate:
        return Candidate(
            attribute=self.attribute,
            value=freeze_value(value),
            confidence=confidence_for_source(self.source),
            augmenter=self.name,
        )

    # ------------------------------------------------------------------
    # Field readers
    # ------------------------------------------------------------------

    def _malformed(self, field: str, reason: str) -> MalformedBundleError:
        bundle_field, _ = SOURCE_FIELDS[self.source]
        return MalformedBundleError(bundle_field, field, reason, self.name)

    def read_str(self, record: Any, field: str) -> Optional[str]:
        """Optional string field; blank strings are absent"""
        value = getattr(record, field)
        if value is None:
            return None
        if not isinstance(value, str):
            raise self._malformed(field, f"expected string, got {type(value).__name__}")
        value = value.strip()
        return value or None

    def read_int(self, record: Any, field: str) -> Optional[int]:
        """Optional non-negative integer field; zero is absent"""
        value = getattr(record, field)
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, int):
            raise self._malformed(field, f"expected integer, got {type(value).__name__}")
        if value < 0:
            raise self._malformed(field, f"must not be negative, got {value}")
        return value or None

    def read_codes(self, record: Any, field: str) -> Tuple[str, ...]:
        """Sequence-of-strings field; None reads as empty"""
        value = getattr(record, field)
        if value is None:
            return ()
        if not isinstance(value, (list, tuple)):
            raise self._malformed(field, f"expected a list, got {type(value).__name__}")
        for item in value:
            if not isinstance(item, str):
                raise self._malformed(
                    field, f"expected strings, found {type(item).__name__}"
                )
        return tuple(value)
