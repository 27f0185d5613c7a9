# softscop

A small software rasterizer written in pure Python. It loads a Wavefront OBJ
model and a TGA texture, transforms the model through model, view, projection
and viewport matrices, and draws it into an in-memory RGB image with a
z-buffer. The interactive viewer shows that image in a pygame window.

## Installing

```
pip install .
```

This installs pygame, which the viewer window uses. For the tests:

```
pip install ".[test]"
pytest
```

## Running

```
softscop [MODEL.obj [TEXTURE.tga]]
```

With no arguments it loads `./blender/teapot.obj` and `./blender/cat.tga`.
With one argument the texture defaults to `./blender/cat.tga`. More than two
arguments is an error (exit status -1). If the model, the texture or the
window cannot be loaded or opened, the command exits with the error's code.

The window opens at 800 x 800 and can be resized. The image is square; its
side is the shorter side of the window rounded down to a multiple of 100
(at least 100), drawn centred in the window.

### Controls

| Key            | Action                                                    |
|----------------|-----------------------------------------------------------|
| space          | toggle continuous rotation of the view                    |
| 1              | vertices as points                                        |
| 2              | wireframe (the starting mode)                             |
| 3              | each triangle filled with a random colour                 |
| 4              | textured                                                  |
| 5              | grey cel shading from vertex normals                      |
| 6              | textured and lit                                          |
| tab            | switch between perspective and orthographic projection    |
| w s, a d, q e  | rotate the model about x, y and z                         |
| f h, g t, r y  | move the camera along x, y and z                          |
| = -            | scale the model up or down                                |
| esc            | quit                                                      |

## Using it as a library

```python
from softscop.model import Model
from softscop.tga import load_tga
from softscop.camera import Camera
from softscop.shader import VertexOnlyShader, TextureShader
from softscop.renderer import Renderer, DrawMode

model = Model.from_file("teapot.obj")
texture = load_tga("cat.tga")
camera = Camera()
camera.set_viewport(400)

renderer = Renderer(400)
shader = VertexOnlyShader(model, texture, camera)
image = renderer.render(model, shader, DrawMode.LINES)
# image is a bytearray of 400 x 400 RGB pixels, row 0 at the bottom

image = renderer.render(model, TextureShader(model, texture, camera),
                        DrawMode.BARYCENTRIC_FULL)
```

The modules:

- `softscop.vector` – `Vector`, a 2- to 4-component vector with dot and
  cross products, `norm`, `normalize` and `extend`.
- `softscop.matrix` – `Matrix`, with `mat4` and `identity` helpers.
- `softscop.model` – `Model.from_file` / `Model.from_lines` read `v`, `vt`,
  `vn` and `f` lines, fan-triangulate polygons, centre the model and scale it
  into [-1, 1]. Missing texture coordinates are generated spherically and
  missing normals are averaged from the faces. Errors raise `ModelError`.
- `softscop.tga` – `load_tga` / `read_tga` decode uncompressed and
  run-length encoded grayscale, RGB and RGBA TGA images into a `TGAImage`.
  Errors raise `TGAError`.
- `softscop.camera` – `Camera` holds model, view, projection and viewport
  matrices and rebuilds them after changes; `ProjectionMode` selects
  perspective or orthographic.
- `softscop.shader` – `VertexOnlyShader`, `RandomColorShader`,
  `TextureShader`, `IntensityShader` and `TextureIntensityShader`.
- `softscop.renderer` – `Renderer` (points, Bresenham lines, depth-tested
  triangle fills) and `barycentric`.
- `softscop.window` – `Window`, the pygame window, and `update_resolution`.
- `softscop.app` – `Application`, the key bindings and frame loop, and
  `main`, the `softscop` command.

## What it does not do

All drawing happens in Python on the CPU, one pixel at a time, so large
models render slowly. OBJ materials, groups and other line types are
ignored, and colour-mapped TGA images are not read.