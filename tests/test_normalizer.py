import math

import pytest

from clippop.core.config_model import Configuration
from clippop.core.normalizer import normalize


def test_empty_input_gets_defaults():
    config = normalize({})
    assert config.theme == "dark"
    assert config.corner == "bottom_right"
    assert config.display_time == 3
    assert config.custom_images == {"copy": "", "clear": ""}


@pytest.mark.parametrize(
    "raw, expected",
    [
        (0, 1),
        (-5, 1),
        (120, 60),
        (60, 60),
        (10, 10),
        ("10", 10),
        (2.7, 2),
        ("abc", 3),
        ("", 3),
        (None, 3),
        (True, 3),
        (math.nan, 3),
        (math.inf, 3),
        ([5], 3),
        (10**400, 60),
        (-(10**400), 1),
    ],
)
def test_display_time_is_coerced_and_clamped(raw, expected):
    assert normalize({"display_time": raw}).display_time == expected


def test_missing_display_time_defaults_to_three():
    assert normalize({"theme": "light"}).display_time == 3


def test_custom_images_falsy_entries_become_empty_strings():
    config = normalize({"custom_images": {"copy": None, "clear": "/tmp/clear.png"}})
    assert config.custom_images == {"copy": "", "clear": "/tmp/clear.png"}


def test_custom_images_not_a_mapping():
    assert normalize({"custom_images": "nope"}).custom_images == {"copy": "", "clear": ""}


def test_falsy_or_unknown_theme_and_corner_fall_back():
    assert normalize({"theme": "", "corner": None}).theme == "dark"
    assert normalize({"theme": "", "corner": None}).corner == "bottom_right"
    assert normalize({"theme": "purple", "corner": "middle"}).theme == "dark"
    assert normalize({"theme": "purple", "corner": "middle"}).corner == "bottom_right"


def test_known_values_are_kept():
    config = normalize({"theme": "custom", "corner": "top_left", "display_time": 7})
    assert (config.theme, config.corner, config.display_time) == ("custom", "top_left", 7)


def test_unknown_fields_pass_through():
    config = normalize({"theme": "light", "opacity": 0.8})
    assert config.extras == {"opacity": 0.8}
    assert config.to_dict()["opacity"] == 0.8
    assert normalize(config).extras == {"opacity": 0.8}


@pytest.mark.parametrize("raw", [None, 42, "config", ["theme"]])
def test_non_mapping_input_yields_defaults(raw):
    assert normalize(raw) == normalize({})


@pytest.mark.parametrize(
    "raw",
    [
        {},
        {"display_time": 0},
        {"display_time": "oops", "theme": "custom"},
        {"custom_images": {"copy": "/a.png"}},
        {"corner": "top_right", "extra": {"nested": [1, 2]}},
    ],
)
def test_normalize_is_idempotent(raw):
    once = normalize(raw)
    assert normalize(once) == once
    assert normalize(once.to_dict()) == once


def test_normalize_does_not_mutate_input():
    images = {"copy": None}
    raw = {"custom_images": images, "display_time": 500}
    normalize(raw)
    assert images == {"copy": None}
    assert raw["display_time"] == 500


def test_normalize_returns_a_new_object():
    config = Configuration()
    assert normalize(config) is not config
    assert normalize(config).custom_images is not config.custom_images


def test_non_string_theme_and_corner_fall_back():
    config = normalize({"theme": ["light"], "corner": 3})
    assert (config.theme, config.corner) == ("dark", "bottom_right")
