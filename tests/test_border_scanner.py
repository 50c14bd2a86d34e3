import pytest

from border_scanner.border_scanner_v1_0 import (
    Border,
    is_border_zero,
    is_fully_transparent,
    is_image_good,
    measure_border,
)


def test_opaque_sprite_has_no_border(sprite_factory):
    assert measure_border(sprite_factory(7, 5)) == Border(0, 0, 0, 0)


def test_measures_each_edge(sprite_factory):
    # content spans columns 2..7 and rows 1..5 of a 10x9 image
    image = sprite_factory(10, 9, box=(2, 1, 8, 6))
    assert measure_border(image) == Border(top=1, bottom=3, left=2, right=2)


def test_partial_alpha_counts_as_content(sprite_factory):
    image = sprite_factory(6, 6, box=(3, 3, 4, 4), color=(0, 0, 0, 1))
    assert measure_border(image) == Border(top=3, bottom=2, left=3, right=2)


def test_single_pixel_stops_the_scan(sprite_factory):
    image = sprite_factory(5, 5)
    image.putpixel((4, 4), (0, 0, 0, 0))
    assert measure_border(image) == Border(0, 0, 0, 0)


def test_fully_transparent_reports_full_extent(sprite_factory):
    image = sprite_factory(6, 4, box=(0, 0, 0, 0))
    border = measure_border(image)
    assert border == Border(top=4, bottom=4, left=6, right=6)
    assert is_fully_transparent(image, border)


def test_rgb_images_have_no_border(sprite_factory):
    image = sprite_factory(4, 4, box=(1, 1, 2, 2)).convert("RGB")
    assert measure_border(image) == Border(0, 0, 0, 0)


@pytest.mark.parametrize("size, box, expected", [
    ((8, 8), (1, 1, 7, 7), True),
    ((8, 8), (3, 3, 5, 5), True),
    ((12, 8), (4, 1, 8, 7), False),   # 4 px on the left
    ((10, 8), (1, 1, 9, 7), False),   # width not divisible by 4
    ((8, 8), (0, 1, 7, 7), False),    # touches the left edge
])
def test_is_image_good(sprite_factory, size, box, expected):
    image = sprite_factory(*size, box=box)
    assert is_image_good(image, measure_border(image)) is expected


def test_is_border_zero():
    assert is_border_zero(Border(0, 0, 0, 0))
    assert not is_border_zero(Border(0, 0, 0, 1))


def test_border_repr_and_equality():
    assert Border(1, 2, 3, 4) == Border(top=1, bottom=2, left=3, right=4)
    assert Border(1, 2, 3, 4) != Border(4, 3, 2, 1)
    assert repr(Border(1, 2, 3, 4)) == "Border(top=1, bottom=2, left=3, right=4)"
