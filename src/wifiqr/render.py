"""Raster, SVG and console renderers for QR module grids."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence, Union

from PIL import Image, ImageDraw

logger = logging.getLogger(__name__)

DEFAULT_SCALE = 10
DEFAULT_BORDER = 2
SVG_BORDER = 4

IMAGE_EXTENSIONS = {".png": "PNG", ".jpg": "JPEG", ".jpeg": "JPEG"}

_DARK = (0, 255)
_LIGHT = (255, 255)

CONSOLE_DARK = "██"
CONSOLE_LIGHT = "  "


def _check_border(border: int) -> None:
    if border < 0:
        raise ValueError("border must be zero or a positive integer")


def _add_border(matrix: Sequence[Sequence[bool]], border: int) -> List[List[bool]]:
    _check_border(border)
    if border == 0:
        return [list(row) for row in matrix]
    size = len(matrix)
    new_size = size + border * 2
    result = [[False] * new_size for _ in range(new_size)]
    for y, row in enumerate(matrix):
        for x, value in enumerate(row):
            result[y + border][x + border] = bool(value)
    return result


def render_image(
    matrix: Sequence[Sequence[bool]],
    scale: int = DEFAULT_SCALE,
    border: int = DEFAULT_BORDER,
) -> Image.Image:
    """Draw ``matrix`` on an opaque white ``LA`` canvas.

    Each module becomes a ``scale`` x ``scale`` square and ``border`` light
    modules are added on every side.
    """
    if scale <= 0:
        raise ValueError("scale must be a positive integer")
    padded = _add_border(matrix, border)
    size = len(padded) * scale
    image = Image.new("LA", (size, size), _LIGHT)
    draw = ImageDraw.Draw(image)
    for y, row in enumerate(padded):
        for x, cell in enumerate(row):
            if not cell:
                continue
            left = x * scale
            top = y * scale
            draw.rectangle((left, top, left + scale - 1, top + scale - 1), fill=_DARK)
    return image


def save_image(image: Image.Image, path: Union[str, Path]) -> Path:
    path = Path(path)
    image_format = IMAGE_EXTENSIONS.get(path.suffix.lower())
    if image_format is None:
        raise ValueError(
            f"unsupported image extension {path.suffix or '(none)'!r}; use .png, .jpg or .jpeg"
        )
    if image_format == "JPEG":
        # JPEG has no alpha channel.
        image = image.convert("L")
    image.save(path, format=image_format)
    logger.info("saved QR image to %s", path)
    return path


def to_svg_string(matrix: Sequence[Sequence[bool]], border: int = SVG_BORDER) -> str:
    """Return an SVG 1.1 document with one unit square per dark module."""
    _check_border(border)
    dimension = len(matrix) + border * 2
    squares = [
        f"M{x + border},{y + border}h1v1h-1z"
        for y, row in enumerate(matrix)
        for x, cell in enumerate(row)
        if cell
    ]
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" '
        '"http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">',
        f'<svg xmlns="http://www.w3.org/2000/svg" version="1.1" '
        f'viewBox="0 0 {dimension} {dimension}" stroke="none">',
        '\t<rect width="100%" height="100%" fill="#FFFFFF"/>',
        f'\t<path d="{" ".join(squares)}" fill="#000000"/>',
        "</svg>",
    ]
    return "\n".join(lines) + "\n"


def render_console(matrix: Sequence[Sequence[bool]], quiet_zone: int = DEFAULT_BORDER) -> str:
    """Return ``matrix`` as block characters, two per module.

    Dark modules are full blocks, light modules are spaces.
    """
    padded = _add_border(matrix, quiet_zone)
    rows = ["".join(CONSOLE_DARK if cell else CONSOLE_LIGHT for cell in row) for row in padded]
    return "\n".join(rows) + "\n"
