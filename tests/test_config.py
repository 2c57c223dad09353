import logging
import math

import pytest

from seamviz.config import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG,
    EngineConfig,
    config_from_mapping,
    get_config_path,
    load_config,
)
from seamviz.errors import ConfigError, SeamVizError


def test_defaults():
    assert DEFAULT_CONFIG.span_fraction == 0.4
    assert DEFAULT_CONFIG.min_aperture == 0.05
    assert DEFAULT_CONFIG.max_aperture == math.pi / 2
    assert DEFAULT_CONFIG.default_aperture == 0.4
    assert DEFAULT_CONFIG.default_direction == (0.0, 1.0, 0.0)


@pytest.mark.parametrize("changes", [
    {"span_fraction": 0.0},
    {"min_aperture": 0.0},
    {"min_aperture": 1.0, "max_aperture": 0.5},
    {"max_aperture": 4.0},
    {"default_aperture": -0.1},
    {"default_direction": (0.0, 0.0, 0.0)},
    {"default_direction": (1.0, 2.0)},
    {"color_u": "teal"},
])
def test_invalid_values(changes):
    with pytest.raises(ConfigError):
        DEFAULT_CONFIG.replace(**changes)


def test_config_error_hierarchy():
    assert issubclass(ConfigError, SeamVizError)
    assert issubclass(ConfigError, ValueError)


def test_direction_list_becomes_tuple():
    config = EngineConfig(default_direction=[1, 0, 0])
    assert config.default_direction == (1.0, 0.0, 0.0)
    assert config.as_dict()["default_direction"] == [1.0, 0.0, 0.0]


def test_config_from_mapping():
    config = config_from_mapping({"default_aperture": 0.25, "color_u": "#ffffff"})
    assert config.default_aperture == 0.25
    assert config.color_u == "#ffffff"
    assert config.color_neg_u == DEFAULT_CONFIG.color_neg_u
    with pytest.raises(ConfigError):
        config_from_mapping({"aperture": 0.3})
    with pytest.raises(ConfigError):
        config_from_mapping(["span_fraction", 0.2])


def test_load_config_defaults_without_path(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    assert get_config_path() is None
    assert load_config() is DEFAULT_CONFIG


def test_load_config_from_file(tmp_path, caplog):
    path = tmp_path / "seamviz.yaml"
    path.write_text("span_fraction: 0.5\ndefault_direction: [0, 0, 1]\n", encoding="utf-8")
    with caplog.at_level(logging.INFO, logger="seamviz.config"):
        config = load_config(path)
    assert config.span_fraction == 0.5
    assert config.default_direction == (0.0, 0.0, 1.0)
    assert "loaded configuration" in caplog.text


def test_load_config_from_env(tmp_path, monkeypatch):
    path = tmp_path / "env.yaml"
    path.write_text("default_aperture: 0.9\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
    assert get_config_path() == str(path)
    assert load_config().default_aperture == 0.9


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == DEFAULT_CONFIG


def test_load_config_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")

    bad = tmp_path / "bad.yaml"
    bad.write_text("span_fraction: [0.4\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(bad)

    invalid = tmp_path / "invalid.yaml"
    invalid.write_text("max_aperture: 9.0\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(invalid)

    for text in ("span_fraction: wide\n", "min_aperture: small\n", "default_aperture: [0.4]\n"):
        wordy = tmp_path / "wordy.yaml"
        wordy.write_text(text, encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(wordy)


def test_numeric_strings_are_coerced():
    config = config_from_mapping({"span_fraction": "0.5", "default_aperture": 1})
    assert config.span_fraction == 0.5
    assert isinstance(config.default_aperture, float)
