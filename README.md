# softrender

A small software rasterizer. It projects triangle meshes through a
perspective camera, fills them on a pixel grid and writes the result as a
TGA image. Both run-length encoded and uncompressed TGA files can be read
and written.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install .[test]
pytest
```

## Command line

```
softrender
```

This renders a unit cube (twelve triangles), as seen from the default
camera, into an RGB image filled in red, and saves it as a run-length
encoded TGA file. Options:

- `--width N` – image width in pixels (default 1920)
- `--height N` – image height in pixels (default 1080)
- `--output PATH` – file to write (default `framebuffer.tga`)

Width and height must be positive integers. If the file cannot be
written, the command prints the error and exits with status 1.

## Library use

```python
from softrender.tgaimage import TGAImage, TGAColor, TGAFormat
from softrender.draw import Camera, Paint, TriangleData

width, height = 640, 360
image = TGAImage(width, height, TGAFormat.RGB)

triangle = TriangleData()
triangle.add_point(-0.5, -0.5, 0.5)
triangle.add_point(0.5, -0.5, 0.5)
triangle.add_point(-0.5, 0.5, 0.5)

red = TGAColor(0, 0, 255, 255)  # colours are stored in BGRA order
paint = Paint(width, height)
paint.draw_pixel_by_camera(Camera(), [triangle], width, height, image, red)
image.write_tga_file("out.tga")
```

### `softrender.tgaimage`

- `TGAImage(width, height, bpp)`: a pixel buffer with `width`, `height`,
  `bpp` and `pixels` properties, `get`/`set` (points outside the image
  are ignored by `set`, and `get` returns a blank colour for them),
  `flip_horizontally`, `flip_vertically`, `encode(vflip, rle)` and the
  class method `decode(data)` for bytes, and `write_tga_file` and the
  class method `read_tga_file` for files.
- `TGAFormat`: `GRAYSCALE`, `RGB` and `RGBA`, the bytes per pixel.
- `TGAColor(b, g, r, a)`: an immutable colour in BGRA order.
- `TGAError`: raised for a malformed or unreadable file, or one that
  cannot be written.

### `softrender.draw`

- `Camera`: position, rotation (pitch, yaw, roll, in radians), field of
  view, aspect ratio and clip planes. `view_matrix()` and
  `projection_matrix()` return 4x4 float32 numpy matrices.
- `TriangleData`: world-space points added with `add_point`, and the
  screen-space points that `draw_pixel_by_camera` fills in.
- `Paint`: `draw_line` (Bresenham, both ends included), `fill_triangle`
  (bounding box with an edge test) and `draw_pixel_by_camera`, which
  projects each triangle and fills it.
- `point_in_triangle`: the edge test that `fill_triangle` uses. It expects
  the vertices in clockwise order.
- `Triangle` and `Reader`: a flat vertex list and an abstract source of
  triangles with `get_triangles()`.

### `softrender.cli`

- `cube_triangles()`: the twelve triangles of a unit cube centred on the
  origin.
- `main(argv=None)`: the command described above.

## What it does not do

There is no model-file loader: `Reader` is only an abstract base class,
so meshes must be built in code with `TriangleData`. Triangles are filled
in a single flat colour with no depth buffer, shading or clipping.