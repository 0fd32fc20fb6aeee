[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "heatgrid"
version = "0.1.0"
description = "Heat diffusion over an image, split into a periodic cartesian arrangement of blocks that exchange borders"
requires-python = ">=3.10"
keywords = ["heat", "diffusion", "simulation", "stencil", "cartesian", "png"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]
dependencies = [
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
heatgrid = "heatgrid.cli:main"
heatgrid-check-variant = "heatgrid.variants:main"

[tool.hatch.build.targets.wheel]
packages = ["heatgrid"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
