[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kitbag"
version = "0.1.0"
description = "Compact data structures and algorithms: AVL and B-trees, a ring deque, bit helpers, getopt-style option parsing, an oriented graph and affine-gap sequence alignment."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "avl",
    "btree",
    "deque",
    "popcount",
    "getopt",
    "graph",
    "smith-waterman",
    "sequence alignment",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Topic :: Scientific/Engineering :: Bio-Informatics",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["kitbag"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
