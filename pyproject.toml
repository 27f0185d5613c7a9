[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "softscop"
version = "0.1.0"
description = "A small software rasterizer that renders Wavefront OBJ models with TGA textures"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["rasterizer", "software-rendering", "obj", "tga", "3d", "z-buffer"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
softscop = "softscop.app:main"

[tool.hatch.build.targets.wheel]
packages = ["softscop"]

[tool.pytest.ini_options]
addopts = "-ra"
