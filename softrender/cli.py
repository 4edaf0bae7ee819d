"""Render a unit cube seen by the default camera to a TGA file."""

from __future__ import annotations

import argparse
import sys

from .draw import Camera, Paint, TriangleData
from .tgaimage import TGAColor, TGAError, TGAImage

RED = TGAColor(0, 0, 255, 255)  # BGRA order

_VERTICES = (
    (-0.5, -0.5, 0.5),
    (0.5, -0.5, 0.5),
    (-0.5, 0.5, 0.5),
    (0.5, 0.5, 0.5),
    (-0.5, 0.5, -0.5),
    (0.5, 0.5, -0.5),
    (-0.5, -0.5, -0.5),
    (0.5, -0.5, -0.5),
)

# One-based vertex numbers, three per triangle.
_INDICES = (
    (1, 2, 3), (3, 2, 4),
    (3, 4, 5), (5, 4, 6),
    (5, 6, 7), (7, 6, 8),
    (7, 8, 1), (1, 8, 2),
    (2, 8, 4), (4, 8, 6),
    (7, 1, 5), (5, 1, 3),
)


def cube_triangles() -> list[TriangleData]:
    """Return the twelve triangles of a unit cube centred on the origin."""
    triangles = []
    for face in _INDICES:
        triangle = TriangleData()
        for number in face:
            triangle.add_point(*_VERTICES[number - 1])
        triangles.append(triangle)
    return triangles


def _positive(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return value


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--width", type=_positive, default=1920)
    parser.add_argument("--height", type=_positive, default=1080)
    parser.add_argument("--output", default="framebuffer.tga")
    args = parser.parse_args(argv)

    framebuffer = TGAImage(args.width, args.height, TGAImage.RGB)
    paint = Paint(args.width, args.height)
    paint.draw_pixel_by_camera(
        Camera(), cube_triangles(), args.width, args.height, framebuffer, RED
    )
    try:
        framebuffer.write_tga_file(args.output)
    except TGAError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())