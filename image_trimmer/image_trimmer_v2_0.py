from PIL import Image

from border_scanner.border_scanner_v1_0 import (
    Border,
    is_border_zero,
    is_fully_transparent,
    is_image_good,
    measure_border,
)


def crop_border(image: Image.Image, border: Border) -> Image.Image:
    """
    Cut the given margin off every edge of the image
    """
    width, height = image.size
    right = max(border.left, width - border.right)
    bottom = max(border.top, height - border.bottom)
    return image.crop((border.left, border.top, right, bottom))


def trim(image: Image.Image) -> Image.Image:
    """
    Remove the transparent margin around a sprite.

    Images that already have an acceptable margin, images whose content
    touches every edge and images without any visible pixel are returned
    unchanged.
    """
    if image.mode != "RGBA":
        image = image.convert("RGBA")

    border = measure_border(image)

    if is_image_good(image, border):
        return image
    if is_border_zero(border):
        return image
    if is_fully_transparent(image, border):
        return image

    return crop_border(image, border)
