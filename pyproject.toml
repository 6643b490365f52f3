[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minifloat"
version = "0.2.0.dev0"
description = "Emulate small binary floating-point formats such as FP8, f16 and bfloat16"
requires-python = ">=3.10"
keywords = ["minifloat", "f16", "bfloat16", "fp8", "floating-point"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["minifloat"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
