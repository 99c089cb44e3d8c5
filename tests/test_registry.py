#!/usr/bin/env python3
"""
Test suite for movie_import/registry.py — YAML registration and validation
"""

import pytest
import sys
from pathlib import Path

import yaml

sys.path.insert(0, str(Path(__file__).parent.parent))

from movie_import.aggregator import NO_DEFAULT, MergePolicy, TieBreak
from movie_import.constants import DEFAULT_REGISTRATION
from movie_import.errors import RegistrationError
from movie_import.registry import (
    AUGMENTERS, build_aggregator, build_pipeline, default_config, load_config, load_pipeline,
)

CONFIG_PATH = Path(__file__).parent.parent / 'config.yaml'


def write_config(tmp_path, config):
    path = tmp_path / 'config.yaml'
    path.write_text(yaml.safe_dump(config), encoding='utf-8')
    return path


def describe(pipeline):
    """Comparable summary of a pipeline's registration"""
    return [
        (a.attribute, a.policy, a.tie_break, a.default, [aug.name for aug in a.augmenters])
        for a in pipeline.aggregators
    ]


class TestShippedConfig:
    """config.yaml and DEFAULT_REGISTRATION must stay in sync"""

    def test_config_yaml_loads(self):
        config = load_config(CONFIG_PATH)
        assert 'attributes' in config

    def test_config_yaml_matches_builtin(self):
        from_yaml = build_pipeline(load_config(CONFIG_PATH))
        builtin = build_pipeline()
        assert describe(from_yaml) == describe(builtin)
        assert from_yaml.max_workers == builtin.max_workers

    def test_every_augmenter_registered_once(self):
        registered = [
            name
            for entry in DEFAULT_REGISTRATION['attributes'].values()
            for name in entry['augmenters']
        ]
        assert sorted(registered) == sorted(AUGMENTERS)

    def test_subtitles_use_union(self):
        pipeline = build_pipeline()
        policies = {a.attribute: a.policy for a in pipeline.aggregators}
        assert policies['subtitle_languages'] == MergePolicy.CONFIDENCE_UNION
        assert policies['languages'] == MergePolicy.BEST_CONFIDENCE

    def test_default_config_is_a_copy(self):
        config = default_config()
        config['attributes'].clear()
        assert DEFAULT_REGISTRATION['attributes']


class TestBuildAggregator:

    def test_defaults_when_keys_omitted(self):
        aggregator = build_aggregator('edition', {'augmenters': ['edition_from_folder']})
        assert aggregator.policy == MergePolicy.BEST_CONFIDENCE
        assert aggregator.tie_break == TieBreak.FIRST_REGISTERED
        assert aggregator.default is NO_DEFAULT

    def test_null_default_is_kept(self):
        aggregator = build_aggregator('release_group', {'default': None, 'augmenters': []})
        assert aggregator.has_default
        assert aggregator.default is None

    def test_augmenter_order_preserved(self):
        names = ['language_from_release', 'language_from_filename']
        aggregator = build_aggregator('languages', {'augmenters': names})
        assert [a.name for a in aggregator.augmenters] == names

    def test_unknown_augmenter(self):
        with pytest.raises(RegistrationError, match='language_from_tea_leaves'):
            build_aggregator('languages', {'augmenters': ['language_from_tea_leaves']})

    def test_unknown_policy(self):
        with pytest.raises(RegistrationError, match='policy'):
            build_aggregator('languages', {'policy': 'majority_vote'})

    def test_unknown_tie_break(self):
        with pytest.raises(RegistrationError, match='tie_break'):
            build_aggregator('languages', {'tie_break': 'random'})

    def test_unknown_key(self):
        with pytest.raises(RegistrationError, match='unknown keys'):
            build_aggregator('languages', {'augmenter': ['language_from_folder']})

    def test_augmenter_under_wrong_attribute(self):
        with pytest.raises(RegistrationError):
            build_aggregator('languages', {'augmenters': ['edition_from_filename']})

    def test_augmenters_must_be_a_list(self):
        with pytest.raises(RegistrationError):
            build_aggregator('languages', {'augmenters': 'language_from_folder'})

    def test_augmenter_names_must_be_strings(self):
        with pytest.raises(RegistrationError, match='must be strings'):
            build_aggregator('languages', {'augmenters': [{'language_from_folder': 1}]})


class TestBuildPipeline:

    def test_missing_attributes_section(self):
        with pytest.raises(RegistrationError, match='attributes'):
            build_pipeline({'max_workers': 2})

    def test_invalid_max_workers(self):
        config = default_config()
        config['max_workers'] = 'many'
        with pytest.raises(RegistrationError):
            build_pipeline(config)

    def test_attribute_order_follows_config(self):
        config = {'attributes': {
            'edition': {'default': '', 'augmenters': ['edition_from_filename']},
            'languages': {'default': ['und'], 'augmenters': ['language_from_folder']},
        }}
        assert build_pipeline(config).attributes == ['edition', 'languages']


class TestLoadPipeline:

    def test_missing_file_uses_builtin(self, tmp_path):
        pipeline = load_pipeline(tmp_path / 'nope.yaml')
        assert describe(pipeline) == describe(build_pipeline())

    def test_none_uses_builtin(self):
        assert describe(load_pipeline(None)) == describe(build_pipeline())

    def test_custom_file(self, tmp_path):
        path = write_config(tmp_path, {
            'max_workers': 2,
            'attributes': {
                'languages': {
                    'policy': 'confidence_union',
                    'tie_break': 'last_registered',
                    'default': [],
                    'augmenters': ['language_from_folder', 'language_from_release'],
                },
            },
        })
        pipeline = load_pipeline(path)
        assert pipeline.attributes == ['languages']
        assert pipeline.max_workers == 2
        aggregator = pipeline.aggregators[0]
        assert aggregator.policy == MergePolicy.CONFIDENCE_UNION
        assert aggregator.tie_break == TieBreak.LAST_REGISTERED
        assert aggregator.default == ()

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / 'config.yaml'
        path.write_text('attributes: [unclosed', encoding='utf-8')
        with pytest.raises(RegistrationError, match='invalid YAML'):
            load_pipeline(path)

    def test_non_mapping_yaml(self, tmp_path):
        path = tmp_path / 'config.yaml'
        path.write_text('- just\n- a list\n', encoding='utf-8')
        with pytest.raises(RegistrationError):
            load_config(path)
