from typing import Tuple

from PIL import Image

from image_codec.image_codec_v1_0 import resample

MIN_EDGE = 2


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


def compute_resized_size(width: int, height: int, max_edge: int) -> Tuple[int, int]:
    """
    Target size whose longer edge is exactly max_edge, keeping the aspect
    ratio. The shorter edge is rounded up and never drops below 2 pixels.
    """
    if max_edge < MIN_EDGE:
        raise ValueError(f"max_edge must be at least {MIN_EDGE}, got {max_edge}")
    if width <= 0 or height <= 0:
        raise ValueError(f"Cannot resize an empty image ({width}x{height})")

    if width > height:
        return max_edge, max(_ceil_div(max_edge * height, width), MIN_EDGE)
    return max(_ceil_div(max_edge * width, height), MIN_EDGE), max_edge


def resize(image: Image.Image, max_edge: int) -> Image.Image:
    new_width, new_height = compute_resized_size(image.width, image.height, max_edge)
    return resample(image, new_width, new_height)
