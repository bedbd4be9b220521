"""
Тесты для ConfigInspector: diff, YAML round-trip, режимы.
"""

import datetime
from dataclasses import dataclass, field
from typing import List

import pytest
import yaml

from core.config_inspector import (
    ConfigMode,
    SerializationError,
    UnsupportedTypeError,
    diff_config,
    dump_yaml,
    lower_config,
    render_config,
)


@dataclass
class LimitsConfig:
    ingestion_rate: float = 25000.0
    max_series: int = 5000


@dataclass
class AppConfig:
    target: str = "all"
    replication_factor: int = 3
    debug: bool = False
    peers: List[str] = field(default_factory=list)
    limits: LimitsConfig = field(default_factory=LimitsConfig)


SAMPLE = {
    "a": 1,
    "s": "x",
    "b": True,
    "f": 0.5,
    "l": [1, "two", {"k": 3}],
    "n": {"a": 1, "b": {"c": None}},
}


def test_diff_identical_is_empty():
    assert diff_config(SAMPLE, SAMPLE) == {}
    assert diff_config({}, {}) == {}


def test_diff_keys_are_subset_of_actual():
    default = {"a": 1, "only_default": 2, "n": {"x": 1, "gone": 5}}
    actual = {"a": 2, "n": {"x": 2}, "new": True}

    diff = diff_config(default, actual)

    assert set(diff) <= set(actual)
    assert set(diff["n"]) <= set(actual["n"])
    assert "only_default" not in diff


def test_added_key_passthrough():
    assert diff_config({}, {"x": 1}) == {"x": 1}


def test_added_nested_mapping_is_verbatim():
    actual = {"n": {"a": 1}}
    assert diff_config({}, actual) == {"n": {"a": 1}}


def test_type_change_is_a_difference():
    assert diff_config({"x": "5"}, {"x": 5}) == {"x": 5}


def test_bool_and_int_are_different_types():
    assert diff_config({"x": 1}, {"x": True}) == {"x": True}
    assert diff_config({"x": False}, {"x": 0}) == {"x": 0}


def test_int_vs_float_is_reported():
    # Известное ограничение: 1 и 1.0 после round-trip различаются
    assert diff_config({"x": 1}, {"x": 1.0}) == {"x": 1.0}
    assert diff_config({"x": 1.0}, {"x": 1}) == {"x": 1}


def test_equal_floats_are_omitted():
    assert diff_config({"x": 0.25}, {"x": 0.25}) == {}
    assert diff_config({"x": 0.25}, {"x": 0.5}) == {"x": 0.5}


def test_nan_is_never_equal():
    nan = float("nan")
    assert "x" in diff_config({"x": nan}, {"x": nan})


def test_lists_compare_deeply_with_types():
    assert diff_config({"l": [1, 2]}, {"l": [1, 2]}) == {}
    assert diff_config({"l": [1, 2]}, {"l": [2, 1]}) == {"l": [2, 1]}
    assert diff_config({"l": [1]}, {"l": [1.0]}) == {"l": [1.0]}
    assert diff_config({"l": [1]}, {"l": [True]}) == {"l": [True]}
    assert diff_config({"l": "1"}, {"l": ["1"]}) == {"l": ["1"]}


def test_nested_equal_mapping_disappears():
    default = {"n": {"a": 1, "b": 2}}
    actual = {"n": {"a": 1, "b": 2}}
    assert diff_config(default, actual) == {}


def test_nested_partial_diff():
    default = {"n": {"a": 1, "b": 2}}
    actual = {"n": {"a": 1, "b": 3}}
    assert diff_config(default, actual) == {"n": {"b": 3}}


def test_mapping_over_non_mapping_default_is_verbatim():
    actual = {"n": {"a": 1}}
    assert diff_config({"n": "disabled"}, actual) == {"n": {"a": 1}}
    assert diff_config({"n": None}, {"n": {}}) == {"n": {}}


def test_none_values():
    assert diff_config({"x": None}, {"x": None}) == {}
    assert diff_config({"x": None}, {"x": "set"}) == {"x": "set"}
    assert diff_config({"x": "set"}, {"x": None}) == {"x": None}


def test_unsupported_type_fails_whole_diff():
    default = {"ok": 1, "blob": b"\x00"}
    actual = {"ok": 2, "blob": b"\x00\x01"}

    with pytest.raises(UnsupportedTypeError) as exc_info:
        diff_config(default, actual)

    assert exc_info.value.type_name == "bytes"
    assert "bytes" in str(exc_info.value)


def test_unsupported_type_nested():
    default = {"n": {"when": "never"}}
    actual = {"n": {"when": datetime.date(2020, 1, 1)}}
    with pytest.raises(UnsupportedTypeError):
        diff_config(default, actual)


def test_binary_blob_after_yaml_round_trip_is_unsupported():
    default = lower_config({"key": b"\x00"})
    actual = lower_config({"key": b"\x01\x02"})
    assert isinstance(actual["key"], bytes)
    with pytest.raises(UnsupportedTypeError):
        diff_config(default, actual)


def test_lower_config_dataclass():
    lowered = lower_config(AppConfig())
    assert lowered == {
        "target": "all",
        "replication_factor": 3,
        "debug": False,
        "peers": [],
        "limits": {"ingestion_rate": 25000.0, "max_series": 5000},
    }


def test_lower_config_empty_and_none():
    assert lower_config(None) == {}
    assert lower_config({}) == {}


def test_lower_config_rejects_non_mapping():
    with pytest.raises(SerializationError):
        lower_config([1, 2, 3])


def test_lower_config_rejects_unrepresentable():
    with pytest.raises(SerializationError):
        lower_config({"obj": object()})


def test_dump_yaml_preserves_declaration_order():
    text = dump_yaml(AppConfig())
    assert text.index("target") < text.index("replication_factor") < text.index("limits")
    assert yaml.safe_load(text)["limits"]["max_series"] == 5000


def test_mode_parse():
    assert ConfigMode.parse("") is ConfigMode.FULL
    assert ConfigMode.parse(None) is ConfigMode.FULL
    assert ConfigMode.parse("unknown") is ConfigMode.FULL
    assert ConfigMode.parse("diff") is ConfigMode.DIFF
    assert ConfigMode.parse(" Defaults ") is ConfigMode.DEFAULTS


def test_render_config_modes():
    default = AppConfig()
    actual = AppConfig(replication_factor=1, peers=["a", "b"], limits=LimitsConfig(max_series=10))

    assert render_config(actual, default, ConfigMode.FULL) is actual
    assert render_config(actual, default, ConfigMode.DEFAULTS) is default
    assert render_config(actual, default, ConfigMode.DIFF) == {
        "replication_factor": 1,
        "peers": ["a", "b"],
        "limits": {"max_series": 10},
    }


def test_render_config_diff_of_defaults_is_empty():
    assert render_config(AppConfig(), AppConfig(), ConfigMode.DIFF) == {}
