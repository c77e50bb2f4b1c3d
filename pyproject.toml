[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "asmsim"
version = "0.1.0"
description = "Interactive console simulator of a segmented CPU stepping through simple assembly instructions"
requires-python = ">=3.10"
dependencies = []
keywords = ["assembly", "cpu", "simulator", "emulator", "segmentation", "mmu", "education"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
asmsim = "asmsim.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["asmsim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
