import io
from pathlib import Path

from PIL import Image, UnidentifiedImageError


class DecodeError(Exception):
    """
    Raised when an input cannot be turned into an RGBA image.
    The kind tells batch callers whether the entry is worth reporting.
    """

    NOT_AN_IMAGE = "not_an_image"
    CORRUPT = "corrupt"
    IO_FAILURE = "io_failure"

    def __init__(self, path, kind: str, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path
        self.kind = kind


class EncodeError(Exception):
    """Raised when an image cannot be encoded or written to its output path."""

    def __init__(self, path, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path


def decode(data: bytes, path=None) -> Image.Image:
    """
    Decode raw file bytes into an RGBA image.
    """
    try:
        image = Image.open(io.BytesIO(data))
    except UnidentifiedImageError as e:
        raise DecodeError(path, DecodeError.NOT_AN_IMAGE, "unrecognized image format") from e
    except Image.DecompressionBombError as e:
        # the header size check runs inside Image.open
        raise DecodeError(path, DecodeError.CORRUPT, str(e)) from e

    try:
        image.load()
        if image.mode != "RGBA":
            image = image.convert("RGBA")
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise DecodeError(path, DecodeError.CORRUPT, f"could not decode pixel data ({e})") from e

    return image


def read_image(path) -> Image.Image:
    """
    Read a file from disk and decode it. Directories are reported as
    NOT_AN_IMAGE so that directory listings can be processed blindly.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except IsADirectoryError as e:
        raise DecodeError(path, DecodeError.NOT_AN_IMAGE, "is a directory") from e
    except OSError as e:
        if path.is_dir():
            # Windows reports directories as PermissionError
            raise DecodeError(path, DecodeError.NOT_AN_IMAGE, "is a directory") from e
        raise DecodeError(path, DecodeError.IO_FAILURE, str(e)) from e

    return decode(data, path)


def encode(image: Image.Image, path) -> bytes:
    """
    Encode an image into the format implied by the output file extension.
    """
    path = Path(path)
    image_format = Image.registered_extensions().get(path.suffix.lower())
    if image_format is None:
        raise EncodeError(path, f"no image format registered for extension '{path.suffix}'")

    buffer = io.BytesIO()
    try:
        image.save(buffer, format=image_format)
    except (OSError, ValueError, KeyError) as e:
        raise EncodeError(path, f"could not encode as {image_format} ({e})") from e

    return buffer.getvalue()


def write_image(image: Image.Image, path) -> int:
    """Encode and write an image, returning the number of bytes written."""
    data = encode(image, path)
    try:
        f = open(path, "wb")
    except OSError as e:
        raise EncodeError(path, str(e)) from e

    try:
        with f:
            f.write(data)
    except OSError as e:
        # a truncated file would be skipped as an existing output next run
        Path(path).unlink(missing_ok=True)
        raise EncodeError(path, str(e)) from e

    return len(data)


def resample(image: Image.Image, width: int, height: int) -> Image.Image:
    # BICUBIC is Pillow's Catmull-Rom filter
    return image.resize((width, height), Image.Resampling.BICUBIC)
