import logging
import random

import pytest

from planetsim.data_models import CelestialBody
from planetsim.roche import (
    is_within_roche_limit,
    process_collapses,
    roche_distance,
    roche_radius,
    select_primary_and_victim,
    should_collapse,
)


def _body(name, x, y, vx=0.0, vy=0.0, mass=10.0, radius=10.0, density=1.0, is_debris=False):
    return CelestialBody(name, x, y, vx, vy, mass=mass, radius=radius, density=density, is_debris=is_debris)


def test_roche_distance_uses_primary_radius_and_density_ratio():
    sun = _body("Sun", 0, 0, mass=333000, radius=35, density=1.4)
    earth = _body("Earth", 200, 0, mass=1, radius=10, density=5.5)
    expected = 3.0 * 35 * (1.4 / 5.5) ** (1.0 / 3.0)
    assert roche_distance(sun, earth) == pytest.approx(expected)
    assert roche_distance(earth, sun) == pytest.approx(expected)


def test_roche_radius_for_drawing():
    assert roche_radius(_body("a", 0, 0, radius=10, density=8.0)) == pytest.approx(2.44 * 10 * 2.0)


def test_primary_is_heavier_and_ties_go_to_first():
    heavy = _body("heavy", 0, 0, mass=5)
    light = _body("light", 0, 0, mass=1)
    assert select_primary_and_victim(light, heavy) == (heavy, light)
    assert select_primary_and_victim(heavy, light) == (heavy, light)

    a = _body("a", 0, 0, mass=3)
    b = _body("b", 0, 0, mass=3)
    assert select_primary_and_victim(a, b) == (a, b)


def test_collapse_scenario_equal_radius_and_density():
    primary = _body("Primary", 500, 500, mass=20)
    satellite = _body("Satellite", 520, 500, mass=5)
    result = process_collapses([primary, satellite], random.Random(1))

    assert len(result.bodies) == 11
    assert result.bodies[0] == primary
    debris = result.bodies[1:]
    assert all(d.is_debris for d in debris)
    assert [d.name for d in debris] == [f"Satellite_Debris_{k}" for k in range(1, 11)]
    assert result.removed == ["Satellite"]
    assert len(result.events) == 1
    assert result.events[0].primary_name == "Primary"
    assert result.events[0].debris_count == 10


def test_collapse_requires_strictly_inside_roche_distance():
    primary = _body("P", 0, 0, mass=20)
    assert roche_distance(primary, _body("S", 30, 0, mass=5)) == pytest.approx(30.0)
    assert not process_collapses([primary, _body("S", 30.0, 0, mass=5)], random.Random(0)).removed
    assert process_collapses([primary, _body("S", 29.9, 0, mass=5)], random.Random(0)).removed == ["S"]


def test_collapse_requires_slow_relative_speed():
    primary = _body("P", 0, 0, mass=20)
    fast = _body("S", 10, 0, vy=100.0, mass=5)
    slow = _body("S", 10, 0, vy=99.9, mass=5)
    assert not should_collapse(fast, primary)
    assert should_collapse(slow, primary)
    assert not process_collapses([primary, fast], random.Random(0)).removed
    assert process_collapses([primary, slow], random.Random(0)).removed == ["S"]


def test_debris_never_collapses():
    primary = _body("P", 0, 0, mass=20)
    fragment = _body("F", 1, 0, mass=0.5, is_debris=True)
    assert not is_within_roche_limit(primary, fragment)
    assert not is_within_roche_limit(fragment, primary)
    result = process_collapses([primary, fragment], random.Random(0))
    assert result.bodies == [primary, fragment]
    assert not result.events


def test_debris_as_would_be_primary_is_ignored():
    heavy_fragment = _body("F", 0, 0, mass=50, is_debris=True)
    body = _body("B", 5, 0, mass=1)
    assert not process_collapses([heavy_fragment, body], random.Random(0)).removed


def test_equal_masses_lower_index_survives():
    a = _body("A", 0, 0, mass=7)
    b = _body("B", 15, 0, mass=7)
    result = process_collapses([a, b], random.Random(3))
    assert result.removed == ["B"]
    assert result.bodies[0] == a
    assert result.bodies[1].name == "B_Debris_1"


def test_each_victim_is_consumed_once():
    primary = _body("P", 0, 0, mass=100)
    moon_a = _body("A", 10, 0, mass=2)
    moon_b = _body("B", 12, 0, mass=1)
    result = process_collapses([primary, moon_a, moon_b], random.Random(5))

    assert result.removed == ["A", "B"]
    assert len(result.bodies) == 1 + 20
    assert result.bodies[0] == primary
    names = [b.name for b in result.bodies]
    assert len(names) == len(set(names))


def test_primary_can_itself_be_consumed_by_heavier_body_later():
    small = _body("small", 10, 0, mass=1)
    medium = _body("medium", 20, 0, mass=5)
    large = _body("large", 0, 0, mass=50, radius=20)
    result = process_collapses([small, medium, large], random.Random(0))
    # small is torn apart by medium first; medium then by large
    assert result.removed == ["small", "medium"]
    assert result.bodies[0] == large


def test_new_debris_is_not_reevaluated():
    primary = _body("P", 0, 0, mass=20)
    satellite = _body("S", 5, 0, mass=5)
    first = process_collapses([primary, satellite], random.Random(2))
    second = process_collapses(first.bodies, random.Random(2))
    assert not second.events
    assert second.bodies == first.bodies


def test_input_list_is_not_modified():
    bodies = [_body("P", 0, 0, mass=20), _body("S", 5, 0, mass=5)]
    snapshot = list(bodies)
    process_collapses(bodies, random.Random(0))
    assert bodies == snapshot


def test_collapse_is_logged(caplog):
    with caplog.at_level(logging.INFO, logger="planetsim.roche"):
        process_collapses([_body("P", 0, 0, mass=20), _body("S", 5, 0, mass=5)], random.Random(0))
    assert "S torn apart by P" in caplog.text
