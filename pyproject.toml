[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "valvetex"
version = "0.1.0"
description = "VTF texture header structures, byte streams and VMT material node trees"
requires-python = ">=3.10"
dependencies = []
keywords = ["vtf", "vmt", "texture", "material", "float16", "streams"]
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
    "Topic :: Multimedia :: Graphics",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["valvetex"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
