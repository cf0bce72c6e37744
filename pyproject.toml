[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "lowpo"
version = "0.1.0"
description = "Entity-component core, skeletal animation and COLLADA scene loading for a small low-poly game"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["game", "ecs", "entity-component-system", "collada", "animation", "skeletal"]
classifiers = [
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Intended Audience :: Developers",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["lowpo*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
