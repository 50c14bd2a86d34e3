from PIL import Image

from border_scanner.border_scanner_v1_0 import Border, measure_border

TRANSPARENT = (0, 0, 0, 0)

# (width + padding) % 4 -> extra pixels for the (leading, trailing) edge
REMAINDER_PADDING = {
    0: (0, 0),
    1: (1, 2),
    2: (1, 1),
    3: (0, 1),
}


def compute_padding(image: Image.Image) -> Border:
    """
    Work out how many transparent pixels to add on each edge so that both
    dimensions become multiples of 4.

    Every edge whose content touches the image boundary first gets a 1 pixel
    margin. The remaining difference to the next multiple of 4 is then split
    between the two edges of each axis, favouring the trailing edge.
    """
    width, height = image.size
    empty = measure_border(image)

    padding = Border(
        top=1 if empty.top == 0 else 0,
        bottom=1 if empty.bottom == 0 else 0,
        left=1 if empty.left == 0 else 0,
        right=1 if empty.right == 0 else 0,
    )

    extra_left, extra_right = REMAINDER_PADDING[(width + padding.left + padding.right) % 4]
    padding.left += extra_left
    padding.right += extra_right

    extra_top, extra_bottom = REMAINDER_PADDING[(height + padding.top + padding.bottom) % 4]
    padding.top += extra_top
    padding.bottom += extra_bottom

    return padding


def add_padding(image: Image.Image, padding: Border) -> Image.Image:
    """
    Place the image on a fully transparent canvas grown by the padding.
    Source pixels are copied as-is, alpha included.
    """
    width, height = image.size
    canvas = Image.new(
        "RGBA",
        (width + padding.left + padding.right, height + padding.top + padding.bottom),
        TRANSPARENT,
    )
    canvas.paste(image, (padding.left, padding.top))
    return canvas


def pad_to_multiple_of_4(image: Image.Image) -> Image.Image:
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    return add_padding(image, compute_padding(image))
