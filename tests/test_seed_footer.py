"""Tests for the seed's shrink, rise and hit-test, and the footer line."""

import math

import pytest

from footer import Footer


def test_seed_hover_hits_only_opaque_glyph(make_tree):
    tree = make_tree()
    seed = tree.seed
    seed.draw()
    assert seed.hover(200, 150)
    assert not seed.hover(5, 5)
    assert not seed.hover(-10, 150)
    assert not seed.hover(200, 1000)


def test_seed_hover_rejects_translucent_pixels(make_tree, canvas):
    tree = make_tree()
    canvas.fill_polygon([(0, 0), (40, 0), (40, 40), (0, 40)], (255, 0, 0), alpha=0.5, origin=(10, 10))
    pixel = canvas.get_pixel(30, 30)
    assert 0 < pixel[3] < 255
    assert not tree.seed.hover(30, 30)


def test_shrink_is_monotone_and_stops_at_floor(make_tree):
    seed = make_tree().seed
    scales = [seed.scale]
    while seed.can_scale():
        seed.shrink(0.95)
        scales.append(seed.scale)
    assert all(a > b for a, b in zip(scales, scales[1:]))
    assert scales[-1] <= 0.2 < scales[-2]
    assert len(scales) - 1 == math.ceil(math.log(0.2) / math.log(0.95))


def test_shrink_redraws_glyph_at_new_scale(make_tree):
    tree = make_tree()
    seed = tree.seed
    seed.draw()
    seed.shrink(0.5)
    # Outer tip at scale 1 was 20px out; at 0.5 it is 10px out.
    assert tree.canvas.get_pixel(200 + 15, 150)[3] == 0
    assert tree.canvas.get_pixel(200 + 7, 150)[3] == 255


def test_rise_moves_marker_down_to_the_ground(make_tree):
    tree = make_tree()
    seed = tree.seed
    ys = [seed.marker_position.y]
    while seed.can_move():
        seed.move(0, 2)
        ys.append(seed.marker_position.y)
    assert all(a < b for a, b in zip(ys, ys[1:]))
    assert ys[-1] >= tree.height + 20
    assert ys[-2] < tree.height + 20
    assert seed.position.y == 150


def test_rise_leaves_marker_drawn(make_tree):
    tree = make_tree()
    seed = tree.seed
    seed.move(0, 2)
    assert tree.canvas.get_pixel(200, 150)[3] == 255
    assert seed.marker_position.y == 152


def test_footer_is_anchored_under_the_seed(make_tree):
    tree = make_tree()
    assert tree.footer.point.x == 200
    assert tree.footer.point.y == tree.height - 2.5


def test_footer_grows_to_max_width_in_ceil_ticks(make_tree):
    tree = make_tree()
    footer = Footer(tree, width=95, height=5, speed=10)
    lengths = [footer.length]
    ticks = 0
    while footer.can_grow():
        footer.draw()
        ticks += 1
        lengths.append(footer.length)
    assert ticks == math.ceil(95 / 10)
    assert lengths[-1] == 95
    assert all(a <= b for a, b in zip(lengths, lengths[1:]))
    footer.draw()
    assert footer.length == 95


@pytest.mark.parametrize("width,speed", [(1200, 10), (100, 3), (7, 7)])
def test_footer_never_exceeds_max_width(make_tree, width, speed):
    footer = Footer(make_tree(), width=width, height=5, speed=speed)
    for _ in range(width):
        footer.draw()
        assert 0 <= footer.length <= width


def test_footer_draws_centred_line(make_tree):
    tree = make_tree()
    footer = tree.footer
    footer.length = 60
    footer.draw()
    y = int(footer.point.y)
    assert tree.canvas.get_pixel(200 - 25, y)[3] == 255
    assert tree.canvas.get_pixel(200 + 25, y)[3] == 255
    assert tree.canvas.get_pixel(200 + 45, y)[3] == 0


def test_clear_footprint_starts_one_box_up_left_of_marker(make_tree, canvas):
    seed = make_tree().seed
    # Marker at (200, 150), scale 1: the footprint box is 26px, so the
    # cleared rectangle spans x 174..277 and y 124..227.
    for point in [(170, 150), (200, 120), (270, 150), (200, 220)]:
        canvas.fill_circle(point, 2, (0, 0, 255))
    seed.clear()
    assert canvas.get_pixel(170, 150)[3] == 255
    assert canvas.get_pixel(200, 120)[3] == 255
    assert canvas.get_pixel(270, 150)[3] == 0
    assert canvas.get_pixel(200, 220)[3] == 0
