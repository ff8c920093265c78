"""Image type sniffing backed by Pillow.

The type of a file is decided from its content, never from its extension:
Pillow's identification (the same magic-number check ``Image.open`` does
before decoding) is mapped to a MIME type.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import PIL
from PIL import Image, UnidentifiedImageError, features

from esi_utility.errors import ImageTypeError, PathNotFoundError
from esi_utility.filesystem import PathLike, is_file

logger = logging.getLogger(__name__)

IMAGE_TYPES: dict[str, tuple[str, ...]] = {
    "jpg": ("image/jpg", "image/jpeg"),
    "gif": ("image/gif",),
    "png": ("image/png",),
    "webp": ("image/webp",),
}


@dataclass(frozen=True, slots=True)
class ImageCapabilities:
    """What the installed imaging stack can do.

    Probe once with :meth:`probe` and pass the result around; nothing in this
    module caches it.
    """

    pillow_version: str
    webp: bool
    readable_formats: frozenset[str]

    @classmethod
    def probe(cls) -> ImageCapabilities:
        """Inspect the installed Pillow build."""
        Image.init()
        capabilities = cls(
            pillow_version=PIL.__version__,
            webp=bool(features.check("webp")),
            readable_formats=frozenset(Image.OPEN),
        )
        logger.debug(
            "Pillow %s: webp=%s, %d readable formats",
            capabilities.pillow_version,
            capabilities.webp,
            len(capabilities.readable_formats),
        )
        return capabilities


def guess_image_type(path: PathLike) -> str | None:
    """Return the MIME type of the image at ``path``.

    Returns:
        str | None: e.g. ``"image/png"``, or ``None`` if the file is not an
        image Pillow can identify.

    Raises:
        PathNotFoundError: If ``path`` is not a readable file.
    """
    if not is_file(path):
        raise PathNotFoundError(str(path), kind="file")

    try:
        with Image.open(path) as img:
            image_format = img.format
    except UnidentifiedImageError:
        logger.debug("Pillow could not identify %s", path)
        return None

    if image_format is None:
        return None

    return Image.MIME.get(image_format, f"image/{image_format.lower()}")


def _is_type(path: PathLike, key: str) -> bool:
    mime = guess_image_type(path)
    if mime is None:
        raise ImageTypeError(str(path))
    return mime in IMAGE_TYPES[key]


def is_jpg(path: PathLike) -> bool:
    """True if ``path`` holds a JPEG image.

    Raises:
        PathNotFoundError: If ``path`` is not a readable file.
        ImageTypeError: If the file is not a recognisable image.
    """
    return _is_type(path, "jpg")


def is_gif(path: PathLike) -> bool:
    return _is_type(path, "gif")


def is_png(path: PathLike) -> bool:
    return _is_type(path, "png")


def is_webp(path: PathLike) -> bool:
    return _is_type(path, "webp")
