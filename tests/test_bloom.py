"""Tests for bloom placement, growth and flight."""

import math

import pytest

import constants
from bloom import Bloom
from geometry import Vector, in_heart_region
from tree import PlacementError


def test_reservoir_blooms_satisfy_heart_region(make_tree):
    tree = make_tree(bloom={"num": 50, "width": 360, "height": 280})
    assert len(tree.bloom_reservoir) == 50
    for bloom in tree.bloom_reservoir:
        x, y = bloom.position
        assert 20 <= x <= 340
        assert 20 <= y <= 260
        assert in_heart_region(x - 360 / 2, 280 - (280 - 40) / 2 - y, constants.HEART_REGION_RADIUS)


def test_reservoir_blooms_share_the_seed_figure(make_tree):
    tree = make_tree(bloom={"num": 5})
    assert all(b.figure is tree.seed.figure for b in tree.bloom_reservoir)


def test_reservoir_bloom_defaults(make_tree):
    tree = make_tree(bloom={"num": 20})
    for bloom in tree.bloom_reservoir:
        assert bloom.scale == pytest.approx(constants.BLOOM_INITIAL_SCALE)
        assert constants.BLOOM_MIN_ALPHA <= bloom.alpha <= 1.0
        assert 0 <= bloom.angle < 2 * math.pi
        assert not bloom.is_flight


def test_placement_exhaustion_raises(make_tree, monkeypatch):
    tree = make_tree()
    monkeypatch.setattr(constants, "PLACEMENT_MAX_ATTEMPTS", 200)
    with pytest.raises(PlacementError):
        tree.create_bloom(400, 300, 1e-6)


def test_unplaceable_reservoir_blooms_are_skipped(make_tree, monkeypatch):
    monkeypatch.setattr(constants, "PLACEMENT_MAX_ATTEMPTS", 100)
    monkeypatch.setattr(constants, "HEART_REGION_RADIUS", 1e-6)
    tree = make_tree(bloom={"num": 3})
    assert tree.bloom_reservoir == []
    assert not tree.can_flower()


def test_growth_bloom_retires_after_nine_ticks(make_tree):
    tree = make_tree()
    bloom = Bloom(tree, Vector(100, 100), tree.seed.figure)
    tree.add_bloom(bloom)
    for _ in range(8):
        bloom.flower()
        assert bloom in tree.blooms
    bloom.flower()
    assert bloom not in tree.blooms


def test_flower_drains_reservoir_in_batches(make_tree):
    tree = make_tree(bloom={"num": 4})
    assert len(tree.flower(2)) == 2
    assert len(tree.bloom_reservoir) == 2
    assert len(tree.flower(2)) == 2
    assert not tree.can_flower()
    assert tree.flower(2) == []
    assert len(tree.blooms) == 4


def test_flower_advances_every_active_growth_bloom(make_tree):
    tree = make_tree(bloom={"num": 4})
    tree.flower(2)
    first = list(tree.blooms)
    tree.flower(2)
    assert all(b.scale == pytest.approx(0.3) for b in first)


def test_flight_bloom_glides_toward_target(make_tree):
    tree = make_tree()
    bloom = Bloom(tree, Vector(300, 100), tree.seed.figure, scale=1, target=Vector(100, 200), speed=4)
    tree.add_bloom(bloom)
    bloom.jump()
    assert bloom.position.x == pytest.approx(250)
    assert bloom.position.y == pytest.approx(125)
    assert bloom.speed == 3
    assert bloom.angle == pytest.approx(constants.FLIGHT_SPIN)
    for _ in range(3):
        bloom.jump()
    assert bloom.position.x == pytest.approx(100)
    assert bloom.position.y == pytest.approx(200)
    assert bloom.speed == 0
    assert not bloom.is_flight


def test_flight_bloom_leaves_when_out_of_bounds(make_tree):
    tree = make_tree()
    left = Bloom(tree, Vector(-21, 100), tree.seed.figure, target=Vector(-100, 720), speed=50)
    below = Bloom(tree, Vector(100, tree.height + 21), tree.seed.figure, target=Vector(-100, 720), speed=50)
    tree.add_bloom(left)
    tree.add_bloom(below)
    left.jump()
    below.jump()
    assert tree.blooms == []


def test_growth_bloom_ignores_jump(make_tree):
    tree = make_tree()
    bloom = Bloom(tree, Vector(100, 100), tree.seed.figure)
    bloom.jump()
    assert bloom.position == Vector(100, 100)


def test_jump_drops_growth_blooms_and_spawns_flight_blooms(make_tree):
    tree = make_tree(bloom={"num": 4})
    tree.flower(2)
    tree.jump()
    assert 1 <= len(tree.blooms) <= 2
    for bloom in tree.blooms:
        assert bloom.is_flight
        assert bloom.color in constants.COLOR_PALETTE
        assert 200 <= bloom.speed <= 300
        assert -100 <= bloom.target.x <= 600
        assert bloom.target.y == constants.FLIGHT_TARGET_Y
        assert bloom.scale == 1.0
        assert bloom.alpha == 1.0


def test_jump_keeps_a_thin_stream_alive(make_tree):
    tree = make_tree()
    for _ in range(200):
        tree.jump()
        assert len(tree.blooms) >= 1
        assert all(b.is_flight for b in tree.blooms)


def test_jump_removes_exhausted_flight_blooms(make_tree):
    tree = make_tree()
    spent = Bloom(tree, Vector(100, 100), tree.seed.figure, target=Vector(0, 0), speed=0)
    tree.add_bloom(spent)
    tree.jump()
    assert spent not in tree.blooms


def test_flight_blooms_spawn_in_the_widened_heart_box(make_tree):
    tree = make_tree()
    width = tree.width * constants.FLIGHT_SPAWN_WIDTH_FACTOR
    height = tree.height
    tree.jump()
    assert tree.blooms
    for bloom in tree.blooms:
        x, y = bloom.position
        assert in_heart_region(x - width / 2, height - (height - 40) / 2 - y, constants.HEART_REGION_RADIUS)


def test_unplaceable_flight_blooms_are_skipped(make_tree, monkeypatch):
    tree = make_tree()
    monkeypatch.setattr(constants, "PLACEMENT_MAX_ATTEMPTS", 100)
    monkeypatch.setattr(constants, "HEART_REGION_RADIUS", 1e-6)
    tree.jump()
    assert tree.blooms == []
    tree.jump()
    assert tree.blooms == []
