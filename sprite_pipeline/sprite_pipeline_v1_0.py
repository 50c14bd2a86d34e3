import logging
import os
from pathlib import Path
from typing import Optional

from PIL import Image

from border_scanner.border_scanner_v1_0 import is_fully_transparent, measure_border
from image_codec.image_codec_v1_0 import read_image, write_image
from image_padder.image_padder_v1_0 import pad_to_multiple_of_4
from image_resizer.image_resizer_v1_0 import MIN_EDGE, resize
from image_trimmer.image_trimmer_v2_0 import trim

# Room kept for the 1 pixel margin the padder adds on each side
PADDING_RESERVE = 2


class ValidationError(Exception):
    """Invalid input/output paths or options. Always fatal."""


class CollisionError(Exception):
    """The output file exists and overwriting was not requested."""

    def __init__(self, path):
        super().__init__(f"Output file already exists: {path} (use --force to overwrite)")
        self.path = path


def validate_options(input_path, downsize: bool, max_size: Optional[int], logger: Optional[logging.Logger] = None):
    """
    Checks shared by single-file and batch mode.
    """
    logger = logger or logging.getLogger(__name__)

    if not Path(input_path).exists():
        raise ValidationError(f"Input path does not exist: {input_path}")

    if downsize:
        if max_size is None:
            raise ValidationError("--max-size must be specified when --downsize is set")
        if max_size < MIN_EDGE:
            raise ValidationError(f"--max-size must be at least {MIN_EDGE}, got {max_size}")
        if max_size % 4 != 0:
            logger.warning(f"--max-size {max_size} is not a multiple of 4; "
                           f"padded sprites may end up slightly larger")


def normalize_sprite(image: Image.Image, downsize: bool = False, max_size: Optional[int] = None) -> Image.Image:
    """
    Trim the transparent margin, optionally shrink the sprite, then pad it
    back to dimensions divisible by 4.
    """
    image = trim(image)

    if downsize:
        effective_max = max(max_size - PADDING_RESERVE, MIN_EDGE)
        if max(image.size) > effective_max:
            image = resize(image, effective_max)

    return pad_to_multiple_of_4(image)


def process_file(input_path, output_path, downsize: bool = False, max_size: Optional[int] = None,
                 logger: Optional[logging.Logger] = None) -> int:
    """
    Read, normalize and write a single sprite. Returns the number of bytes
    written. DecodeError and EncodeError propagate to the caller.
    """
    logger = logger or logging.getLogger(__name__)

    image = read_image(input_path)
    original_size = image.size

    if is_fully_transparent(image, measure_border(image)):
        logger.warning(f"{Path(input_path).name} is fully transparent, margins left as-is")

    image = normalize_sprite(image, downsize, max_size)
    bytes_written = write_image(image, output_path)

    logger.info(f"Normalized {Path(input_path).name}: "
                f"{original_size[0]}x{original_size[1]} -> {image.width}x{image.height}")
    return bytes_written


def run_single_file(input_path, output_path, force: bool = False, downsize: bool = False,
                    max_size: Optional[int] = None, logger: Optional[logging.Logger] = None) -> int:
    """
    Single-file mode: every problem is raised to the caller.
    """
    logger = logger or logging.getLogger(__name__)
    validate_options(input_path, downsize, max_size, logger)

    output_path = Path(output_path)
    if output_path.is_dir():
        raise ValidationError(f"Output must be a file when the input is a file: {output_path}")
    if output_path.exists() and not force:
        raise CollisionError(output_path)

    try:
        os.makedirs(output_path.parent, exist_ok=True)
    except OSError as e:
        raise ValidationError(f"Could not create output directory {output_path.parent}: {e}") from e

    return process_file(input_path, output_path, downsize, max_size, logger)
