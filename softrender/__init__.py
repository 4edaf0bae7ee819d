"""Software rasterizer that renders triangle meshes into TGA images."""

__version__ = "0.1.0"
__all__ = ["cli", "draw", "tgaimage"]