#!/usr/bin/env python3
"""
Unit tests for config loading and reporter settings.

Usage:
    python -m pytest tests/unit/shared/test_config.py -v
"""

import logging
from unittest import mock

import pytest
import yaml

import loopbar.shared.config as config_module
from loopbar.progress.themes import Theme
from loopbar.shared.config import ReporterSettings, load_config, settings_from_config


class TestLoadConfig:
    """Tests for load_config()."""

    def test_missing_config_returns_fallback(self, tmp_path):
        with mock.patch.object(config_module, 'CONFIG_PATH', tmp_path / "nonexistent.yaml"):
            assert load_config() is None
            assert load_config(fallback={'default': True}) == {'default': True}

    def test_missing_config_required_exits(self, tmp_path):
        with mock.patch.object(config_module, 'CONFIG_PATH', tmp_path / "nonexistent.yaml"):
            with pytest.raises(SystemExit):
                load_config(required=True)

    def test_valid_config_loads(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(yaml.dump({'progress': {'theme': 'line', 'width': 30}}))
        with mock.patch.object(config_module, 'CONFIG_PATH', config_path):
            result = load_config()
        assert result == {'progress': {'theme': 'line', 'width': 30}}

    def test_empty_yaml_returns_empty_dict(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("")
        with mock.patch.object(config_module, 'CONFIG_PATH', config_path):
            assert load_config() == {}

    def test_invalid_yaml_returns_fallback(self, tmp_path, caplog):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("{{invalid: yaml: content::")
        with mock.patch.object(config_module, 'CONFIG_PATH', config_path):
            assert load_config(fallback={'default': True}) == {'default': True}
        assert "Error reading config" in caplog.text

    @pytest.mark.parametrize("document", ["- a\n- b\n", "just a string\n", "42\n"])
    def test_non_mapping_document_returns_fallback(self, tmp_path, caplog, document):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(document)
        with mock.patch.object(config_module, 'CONFIG_PATH', config_path):
            assert load_config(fallback={'default': True}) == {'default': True}
        assert "expected a mapping" in caplog.text

    def test_invalid_yaml_required_exits(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("{{invalid: yaml: content::")
        with mock.patch.object(config_module, 'CONFIG_PATH', config_path):
            with pytest.raises(SystemExit):
                load_config(required=True)


class TestSettingsFromConfig:
    """Tests for settings_from_config()."""

    def test_defaults_without_config(self):
        assert settings_from_config(None) == ReporterSettings()
        assert settings_from_config({}) == ReporterSettings()
        assert settings_from_config({'progress': None}) == ReporterSettings()

    def test_reads_progress_section(self):
        settings = settings_from_config({'progress': {
            'theme': 'braille_spin',
            'width': 25,
            'colors': False,
            'color_transition': False,
            'label': 'rows',
            'smoothing': 20,
            'estimator': 'sma',
            'alpha': 0.25,
            'extended_glyphs': False,
        }})
        assert settings == ReporterSettings(
            theme=Theme.BRAILLE_SPIN, width=25, colors=False, color_transition=False,
            label='rows', smoothing=20, estimator='sma', alpha=0.25,
            extended_glyphs=False,
        )

    def test_integer_alpha_becomes_float(self):
        settings = settings_from_config({'progress': {'alpha': 1}})
        assert settings.alpha == 1.0
        assert isinstance(settings.alpha, float)

    @pytest.mark.parametrize("key, value", [
        ('width', 0),
        ('width', 'wide'),
        ('smoothing', -3),
        ('colors', 'yes'),
        ('estimator', 'median'),
        ('alpha', 0),
        ('alpha', 2.0),
        ('alpha', True),
        ('theme', 'plaid'),
        ('label', 42),
    ])
    def test_invalid_values_fall_back(self, key, value, caplog):
        with caplog.at_level(logging.WARNING, logger='loopbar.shared.config'):
            settings = settings_from_config({'progress': {key: value}})
        assert settings == ReporterSettings()
        assert key in caplog.text

    def test_unknown_key_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger='loopbar.shared.config'):
            settings = settings_from_config({'progress': {'speed': 'fast', 'width': 12}})
        assert settings.width == 12
        assert "speed" in caplog.text

    def test_non_mapping_section(self, caplog):
        with caplog.at_level(logging.WARNING, logger='loopbar.shared.config'):
            assert settings_from_config({'progress': ['line']}) == ReporterSettings()
        assert "expected a mapping" in caplog.text

    @pytest.mark.parametrize("config", [["a", "b"], "progress", 7])
    def test_non_mapping_config(self, config, caplog):
        with caplog.at_level(logging.WARNING, logger='loopbar.shared.config'):
            assert settings_from_config(config) == ReporterSettings()
        assert "expected a mapping" in caplog.text

    def test_settings_are_frozen(self):
        settings = ReporterSettings()
        with pytest.raises(AttributeError):
            settings.width = 10
