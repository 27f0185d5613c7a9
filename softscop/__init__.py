"""Software rasterizer that draws OBJ models with TGA textures and shows them in a window."""

__version__ = "0.1.0"