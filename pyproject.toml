[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fehlib"
version = "0.1.0"
description = "Image viewer building blocks: EXIF summaries, Nikon maker notes, text styles, mouse bindings and pointer interaction geometry"
requires-python = ">=3.10"
dependencies = ["pillow"]
keywords = ["image", "viewer", "exif", "makernote", "mouse", "bindings", "zoom"]
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
    "Topic :: Multimedia :: Graphics :: Viewers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fehlib"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
