"""Tests for the JSON convenience codec."""
import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

import pytest

from core.animation import EasingCurve, RepeatMode
from utils.json_codec import JSON, JsonCodec, from_json, to_json


class Corner(Enum):
    TOP_LEFT = "top_left"
    BOTTOM_RIGHT = "bottom_right"


@dataclass
class Effect:
    name: str
    duration_ms: int
    easing: EasingCurve = EasingCurve.LINEAR
    repeat_mode: RepeatMode = RepeatMode.RESTART


@dataclass
class Preset:
    title: str
    effects: List[Effect] = field(default_factory=list)
    anchor: Optional[Corner] = None
    cache_dir: Optional[Path] = None


class Legacy:
    def __init__(self, value):
        self.value = value
        self._private = "hidden"


def test_encodes_dataclasses_and_enums():
    text = to_json(Effect("flip", 500, EasingCurve.OVERSHOOT))
    assert json.loads(text) == {
        "name": "flip",
        "duration_ms": 500,
        "easing": EasingCurve.OVERSHOOT.value,
        "repeat_mode": RepeatMode.RESTART.value,
    }


def test_decodes_nested_dataclasses():
    preset = Preset("intro", [Effect("fade", 300), Effect("bounce", 1000, EasingCurve.ANTICIPATE)],
                    anchor=Corner.BOTTOM_RIGHT, cache_dir=Path("/tmp/cache"))

    decoded = from_json(to_json(preset), Preset)

    assert decoded == preset
    assert isinstance(decoded.effects[1].easing, EasingCurve)
    assert isinstance(decoded.cache_dir, Path)


def test_plain_objects_skip_private_attributes():
    data = json.loads(to_json(Legacy(3)))
    assert data == {"value": 3}

    restored = from_json('{"value": 7}', Legacy)
    assert isinstance(restored, Legacy)
    assert restored.value == 7


def test_from_json_without_type_returns_plain_data():
    assert from_json('[1, {"a": null}]') == [1, {"a": None}]


def test_sets_and_tuples_encode_as_lists():
    assert json.loads(to_json({"ids": (1, 2)})) == {"ids": [1, 2]}
    assert json.loads(to_json({3})) == [3]


def test_deep_copy_is_independent():
    preset = Preset("intro", [Effect("fade", 300)])
    copy = JSON.deep_copy(preset)

    assert copy == preset
    assert copy is not preset
    copy.effects.append(Effect("flip", 500))
    assert len(preset.effects) == 1


def test_indent_and_sort_keys():
    codec = JsonCodec(indent=2, sort_keys=True)
    assert codec.to_json({"b": 1, "a": 2}) == '{\n  "a": 2,\n  "b": 1\n}'


def test_unserializable_object_raises():
    with pytest.raises(TypeError):
        to_json(object())


def test_invalid_json_raises():
    with pytest.raises(json.JSONDecodeError):
        from_json("{not json", Effect)


def test_wrong_shape_for_dataclass_raises():
    with pytest.raises(ValueError):
        from_json("[1, 2]", Effect)
