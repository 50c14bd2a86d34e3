import numpy as np

from border_scanner.border_scanner_v1_0 import Border, is_border_zero, measure_border
from image_trimmer.image_trimmer_v2_0 import crop_border, trim


def test_good_sprite_is_returned_untouched(sprite_factory):
    image = sprite_factory(8, 8, box=(2, 1, 6, 7))
    assert trim(image) is image


def test_opaque_sprite_is_returned_untouched(sprite_factory):
    image = sprite_factory(5, 7)
    assert trim(image) is image


def test_fully_transparent_sprite_is_returned_untouched(sprite_factory):
    image = sprite_factory(9, 3, box=(0, 0, 0, 0))
    assert trim(image) is image


def test_crops_out_of_range_border(sprite_factory):
    image = sprite_factory(20, 16, box=(5, 4, 12, 9))
    trimmed = trim(image)
    assert trimmed.size == (7, 5)
    assert is_border_zero(measure_border(trimmed))


def test_crops_small_border_when_size_not_aligned(sprite_factory):
    # margins in range but 10x10 is not divisible by 4
    image = sprite_factory(10, 10, box=(1, 1, 9, 9))
    assert trim(image).size == (8, 8)


def test_crop_keeps_pixels(sprite_factory):
    image = sprite_factory(6, 6, box=(2, 2, 4, 4))
    image.putpixel((3, 3), (1, 2, 3, 255))
    trimmed = trim(image)
    assert trimmed.getpixel((1, 1)) == (1, 2, 3, 255)
    assert trimmed.getpixel((0, 0)) == (200, 40, 40, 255)


def test_trim_is_idempotent_once_border_is_zero(sprite_factory):
    image = sprite_factory(13, 11, box=(4, 0, 9, 6))
    once = trim(image)
    twice = trim(once)
    assert is_border_zero(measure_border(once))
    assert np.array_equal(np.array(once), np.array(twice))


def test_crop_border_never_goes_negative(sprite_factory):
    image = sprite_factory(4, 4, box=(0, 0, 0, 0))
    cropped = crop_border(image, Border(top=4, bottom=4, left=4, right=4))
    assert cropped.size == (0, 0)
