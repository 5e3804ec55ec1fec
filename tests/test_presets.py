import json
import math

import pytest

from planetsim.camera import CoordinateConverter
from planetsim.data_models import validate_preset
from planetsim.errors import InvalidConfiguration
from planetsim.presets import (
    get_all_presets,
    get_preset,
    list_preset_files,
    load_preset_dir,
    load_preset_file,
)
from planetsim.utils import color_from_hex, color_to_rgb255, parse_color


def test_catalog_presets_are_valid():
    presets = get_all_presets()
    assert [p.name for p in presets] == [
        "Sun and Earth", "Binary Star", "Three Body", "Elliptical Orbit", "Tidal Disruption",
    ]
    for preset in presets:
        validate_preset(preset)
        assert all(not b.is_debris for b in preset.bodies)


def test_sun_and_earth_values():
    preset = get_preset("Sun and Earth")
    sun, earth = preset.bodies
    assert preset.gravity_constant == 40000.0
    assert (sun.mass, sun.radius, sun.density) == (333000.0, 35.0, 1.4)
    assert earth.position == (700.0, 500.0)
    assert earth.vy == pytest.approx(math.sqrt(40000 * 333000 / 200))
    assert earth.vy == pytest.approx(8160.882, abs=1e-3)


def test_unknown_preset():
    with pytest.raises(KeyError):
        get_preset("Andromeda")


def test_load_preset_file(tmp_path):
    data = {
        "name": "Pair",
        "description": "two bodies",
        "gravity_constant": 100.0,
        "bodies": [
            {"name": "Big", "position": [500, 500], "velocity": [0, 0], "mass": 50, "radius": 20,
             "density": 2.0, "color": "#FF0000"},
            {"name": "Small", "position": [600, 500], "velocity": [0, 7], "mass": 1, "radius": 5,
             "color": [0.0, 1.0, 0.0]},
        ],
    }
    path = tmp_path / "pair.json"
    path.write_text(json.dumps(data), encoding="utf-8")

    preset = load_preset_file(str(path))
    assert preset.name == "Pair"
    assert preset.gravity_constant == 100.0
    big, small = preset.bodies
    assert big.density == 2.0
    assert big.color == (1.0, 0.0, 0.0, 1.0)
    assert small.density == 1.0
    assert small.velocity == (0.0, 7.0)
    assert small.color == (0.0, 1.0, 0.0, 1.0)
    assert list_preset_files(str(tmp_path)) == ["pair.json"]


def test_loader_parses_but_does_not_range_check(tmp_path):
    path = tmp_path / "neg.json"
    path.write_text(json.dumps({
        "gravity_constant": 1.0,
        "bodies": [{"position": [0, 0], "velocity": [0, 0], "mass": -1, "radius": 1}],
    }), encoding="utf-8")
    preset = load_preset_file(str(path))
    assert preset.bodies[0].name == "Body 1"
    with pytest.raises(InvalidConfiguration):
        validate_preset(preset)


@pytest.mark.parametrize("content", [
    "not json",
    "[]",
    json.dumps({"bodies": []}),
    json.dumps({"gravity_constant": 1.0, "bodies": [{"name": "x", "position": [0], "velocity": [0, 0],
                                                       "mass": 1, "radius": 1}]}),
    json.dumps({"gravity_constant": 1.0, "bodies": [{"name": "x", "position": [0, 0], "velocity": [0, 0],
                                                       "mass": 1, "radius": 1, "color": "#12"}]}),
])
def test_malformed_files_raise(tmp_path, content):
    path = tmp_path / "bad.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(InvalidConfiguration):
        load_preset_file(str(path))


def test_load_preset_dir(tmp_path):
    for name, g in (("b_second.json", 2.0), ("a_first.json", 1.0)):
        (tmp_path / name).write_text(json.dumps({
            "name": name,
            "gravity_constant": g,
            "bodies": [{"name": "Solo", "position": [0, 0], "velocity": [0, 0], "mass": 1, "radius": 1}],
        }), encoding="utf-8")
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")

    presets = load_preset_dir(str(tmp_path))
    assert [p.name for p in presets] == ["a_first.json", "b_second.json"]
    assert [p.gravity_constant for p in presets] == [1.0, 2.0]
    assert load_preset_dir(str(tmp_path / "missing")) == []


def test_load_preset_dir_reports_bad_file(tmp_path):
    (tmp_path / "broken.json").write_text("{", encoding="utf-8")
    with pytest.raises(InvalidConfiguration):
        load_preset_dir(str(tmp_path))


def test_missing_file_raises(tmp_path):
    with pytest.raises(InvalidConfiguration):
        load_preset_file(str(tmp_path / "nope.json"))
    assert list_preset_files(str(tmp_path / "nope")) == []


def test_color_helpers():
    assert color_from_hex(0x80FF0000) == pytest.approx((1.0, 0.0, 0.0, 128 / 255))
    assert parse_color("#800000FF") == pytest.approx((0.0, 0.0, 1.0, 128 / 255))
    assert parse_color([2.0, -1.0, 0.5, 1.0]) == (1.0, 0.0, 0.5, 1.0)
    assert color_to_rgb255((1.0, 0.5, 0.0, 1.0)) == (255, 128, 0)
    assert color_to_rgb255((1.0, 1.0, 1.0, 0.5)) == (128, 128, 128)


def test_coordinate_converter_fits_and_centers():
    square = CoordinateConverter((900, 900))
    assert square.sim_to_screen((500.0, 500.0)) == (450, 450)
    assert square.scale_to_screen(100.0) == pytest.approx(90.0)

    wide = CoordinateConverter((1200, 900))
    assert wide.offset == (150.0, 0.0)
    assert wide.sim_to_screen((0.0, 0.0)) == (150, 0)
    assert wide.screen_to_sim((600, 450)) == pytest.approx((500.0, 500.0))
