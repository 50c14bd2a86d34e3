import numpy as np
from PIL import Image


class Border:
    """
    Four edge widths in pixels. Used both for the transparent margin measured
    on an image and for the padding to add to one.
    """

    def __init__(self, top: int = 0, bottom: int = 0, left: int = 0, right: int = 0):
        self.top = top
        self.bottom = bottom
        self.left = left
        self.right = right

    def __eq__(self, other):
        if not isinstance(other, Border):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    def __repr__(self):
        return f"Border(top={self.top}, bottom={self.bottom}, left={self.left}, right={self.right})"

    def as_tuple(self):
        return self.top, self.bottom, self.left, self.right


def _count_leading_empty(filled: np.ndarray) -> int:
    """Number of False entries before the first True (full length if none)."""
    hits = np.flatnonzero(filled)
    if hits.size == 0:
        return int(filled.size)
    return int(hits[0])


def measure_border(image: Image.Image) -> Border:
    """
    Count fully transparent rows and columns from each edge inward.

    Each edge is measured independently, so a fully transparent image
    reports its full height on top and bottom and its full width on the
    left and right.
    """
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    alpha = np.array(image.getchannel("A"))

    # A row/column counts as empty only when every alpha value is 0
    filled_rows = alpha.any(axis=1)
    filled_columns = alpha.any(axis=0)

    return Border(
        top=_count_leading_empty(filled_rows),
        bottom=_count_leading_empty(filled_rows[::-1]),
        left=_count_leading_empty(filled_columns),
        right=_count_leading_empty(filled_columns[::-1]),
    )


def is_image_good(image: Image.Image, border: Border) -> bool:
    """Both dimensions are multiples of 4 and every margin is 1 to 3 pixels."""
    width, height = image.size
    dimensions_aligned = width % 4 == 0 and height % 4 == 0
    margins_in_range = all(1 <= value <= 3 for value in border.as_tuple())
    return dimensions_aligned and margins_in_range


def is_border_zero(border: Border) -> bool:
    return border.as_tuple() == (0, 0, 0, 0)


def is_fully_transparent(image: Image.Image, border: Border) -> bool:
    width, height = image.size
    return border.top == height and border.left == width
