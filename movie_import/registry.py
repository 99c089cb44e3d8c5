#!/usr/bin/env python3
"""
Attribute registration — the configuration surface of the pipeline

Maps attribute id → ordered augmenter names → merge policy → optional
default. Registration is an explicit table, never discovered by reflection,
so augmenter order (and with it tie-breaking) is deterministic.

config.yaml:
  max_workers: 1
  attributes:
    languages:
      policy: best_confidence       # or confidence_union
      tie_break: first_registered   # or last_registered
      default: [und]                # omit the key for no default
      augmenters:
        - language_from_filename
        - language_from_folder
"""

import copy
import logging
from pathlib import Path
from typing import Dict, Optional, Type

import yaml

from movie_import.aggregator import NO_DEFAULT, AttributeAggregator, MergePolicy, TieBreak
from movie_import.augmenters.base import Augmenter
from movie_import.augmenters.edition import EditionFromFilename, EditionFromFolder, EditionFromRelease
from movie_import.augmenters.languages import (
    LanguageFromFilename, LanguageFromFolder, LanguageFromMediaInfo, LanguageFromRelease,
)
from movie_import.augmenters.quality import (
    QualitySourceFromFilename, QualitySourceFromFolder, QualitySourceFromRelease,
    ResolutionFromFilename, ResolutionFromFolder, ResolutionFromMediaInfo, ResolutionFromRelease,
)
from movie_import.augmenters.release_group import (
    ReleaseGroupFromFilename, ReleaseGroupFromFolder, ReleaseGroupFromRelease,
)
from movie_import.augmenters.subtitles import (
    SubtitlesFromFilename, SubtitlesFromFolder, SubtitlesFromMediaInfo, SubtitlesFromRelease,
)
from movie_import.augmenters.video_codec import (
    VideoCodecFromFilename, VideoCodecFromFolder, VideoCodecFromMediaInfo,
)
from movie_import.constants import DEFAULT_REGISTRATION
from movie_import.errors import RegistrationError
from movie_import.pipeline import AggregationPipeline

logger = logging.getLogger(__name__)

AUGMENTERS: Dict[str, Type[Augmenter]] = {
    cls.name: cls
    for cls in (
        LanguageFromFilename, LanguageFromFolder, LanguageFromMediaInfo, LanguageFromRelease,
        SubtitlesFromFilename, SubtitlesFromFolder, SubtitlesFromMediaInfo, SubtitlesFromRelease,
        EditionFromFilename, EditionFromFolder, EditionFromRelease,
        QualitySourceFromFilename, QualitySourceFromFolder, QualitySourceFromRelease,
        ResolutionFromFilename, ResolutionFromFolder, ResolutionFromMediaInfo, ResolutionFromRelease,
        ReleaseGroupFromFilename, ReleaseGroupFromFolder, ReleaseGroupFromRelease,
        VideoCodecFromFilename, VideoCodecFromFolder, VideoCodecFromMediaInfo,
    )
}


def load_config(config_path: Path) -> dict:
    """Load registration from YAML file"""
    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise RegistrationError(f"{config_path}: invalid YAML: {e}") from e

    if not isinstance(config, dict):
        raise RegistrationError(f"{config_path}: expected a mapping at top level")
    return config


def default_config() -> dict:
    """Deep copy of the built-in registration"""
    return copy.deepcopy(DEFAULT_REGISTRATION)


def _parse_enum(enum_cls, value, attribute: str, key: str):
    try:
        return enum_cls(value)
    except ValueError:
        choices = ', '.join(member.value for member in enum_cls)
        raise RegistrationError(
            f"Attribute '{attribute}': unknown {key} '{value}' (expected one of: {choices})"
        ) from None


def build_aggregator(attribute: str, entry: dict) -> AttributeAggregator:
    """Build one AttributeAggregator from its registration entry"""
    if entry is None:
        entry = {}
    if not isinstance(entry, dict):
        raise RegistrationError(f"Attribute '{attribute}': expected a mapping")

    unknown = set(entry) - {'policy', 'tie_break', 'default', 'augmenters'}
    if unknown:
        raise RegistrationError(
            f"Attribute '{attribute}': unknown keys {sorted(unknown)}"
        )

    policy = _parse_enum(MergePolicy, entry.get('policy', 'best_confidence'), attribute, 'policy')
    tie_break = _parse_enum(TieBreak, entry.get('tie_break', 'first_registered'), attribute, 'tie_break')

    names = entry.get('augmenters') or []
    if not isinstance(names, list):
        raise RegistrationError(f"Attribute '{attribute}': augmenters must be a list")

    augmenters = []
    for name in names:
        if not isinstance(name, str):
            raise RegistrationError(
                f"Attribute '{attribute}': augmenter names must be strings, got {name!r}"
            )
        if name not in AUGMENTERS:
            raise RegistrationError(f"Attribute '{attribute}': unknown augmenter '{name}'")
        augmenters.append(AUGMENTERS[name]())

    default = entry['default'] if 'default' in entry else NO_DEFAULT

    if not augmenters and default is NO_DEFAULT:
        logger.warning(
            f"Attribute '{attribute}' has no augmenters and no default; "
            "every run will fail to resolve it"
        )

    return AttributeAggregator(
        attribute=attribute,
        augmenters=augmenters,
        policy=policy,
        default=default,
        tie_break=tie_break,
    )


def build_pipeline(config: Optional[dict] = None) -> AggregationPipeline:
    """
    Build the pipeline from a registration mapping

    Args:
        config: Parsed config.yaml contents; None uses DEFAULT_REGISTRATION

    Raises:
        RegistrationError: unknown policy/augmenter names or missing sections
    """
    if config is None:
        config = default_config()

    attributes = config.get('attributes')
    if not attributes or not isinstance(attributes, dict):
        raise RegistrationError("Config has no 'attributes' section")

    aggregators = [build_aggregator(name, entry) for name, entry in attributes.items()]
    max_workers = config.get('max_workers', 1)

    if isinstance(max_workers, bool) or not isinstance(max_workers, int):
        raise RegistrationError(f"max_workers must be an integer, got {max_workers!r}")

    logger.debug(f"Registered {len(aggregators)} attributes: {[a.attribute for a in aggregators]}")
    return AggregationPipeline(aggregators, max_workers=max_workers)


def load_pipeline(config_path: Optional[Path] = None) -> AggregationPipeline:
    """Build the pipeline from a YAML file, or the built-in registration if absent"""
    if config_path is None or not config_path.exists():
        if config_path is not None:
            logger.info(f"Config not found at {config_path}, using built-in registration")
        return build_pipeline()

    return build_pipeline(load_config(config_path))
