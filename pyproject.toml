[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "softrender"
version = "0.1.0"
description = "A small software rasterizer that renders triangle meshes through a perspective camera into TGA images"
requires-python = ">=3.10"
keywords = ["rasterizer", "software-rendering", "tga", "3d", "graphics"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
softrender = "softrender.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["softrender"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
