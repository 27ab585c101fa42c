[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dragokit"
version = "0.1.0"
description = "Mesh, sprite, noise and terrain utilities for building game vertex data"
requires-python = ">=3.10"
dependencies = []
keywords = ["mesh", "terrain", "vertex-buffer", "sprite-atlas", "noise", "heightmap", "d3d"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["dragokit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
